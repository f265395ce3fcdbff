# -*- coding: utf-8 -*-
"""
Baseline agents: a random slider, a greedy k-step slider and the random tile placer playing the
environment side.
"""
from typing import Optional

from numpy.random import default_rng

from threes.addons.config import AgentConfig
from threes.agents.core import Agent, Place, Slide
from threes.core.board import Board, slide
from threes.core.gamemove import DIRECTIONS


class RandomSlider(Agent):
    """
    Slider playing a random legal direction.
    """

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self._generator = default_rng(config.seed)

    def select_action(self, board: Board) -> Optional[Slide]:
        for direction in self._generator.permutation(DIRECTIONS).tolist():
            if slide(board, direction)[1] != -1:
                return Slide(direction)
        return None


def lookahead(board: Board, depth: int) -> tuple[Optional[int], int]:
    """
    Best sequence of ``depth`` slides, ignoring tile insertions.

    Parameters
    ----------
    board : Board
        The current board.
    depth : int
        Number of slides to look ahead.

    Returns
    -------
    direction : int or None
        First direction of the best sequence, or None if no slide is legal.
    reward : int
        Total reward of the best sequence, or -1 for a position without legal slide.
    """
    best_direction, best_reward = None, -1
    for direction in DIRECTIONS:
        after, reward = slide(board, direction)
        if reward == -1:
            continue
        if depth > 1:
            reward += lookahead(after, depth - 1)[1]
        if best_direction is None or reward > best_reward:
            best_direction, best_reward = direction, reward
    return best_direction, best_reward


class GreedySlider(Agent):
    """
    Slider maximizing the total reward of the next ``depth`` slides.

    Parameters
    ----------
    config : AgentConfig
        The agent configuration.
    depth : int, optional
        Number of slides to look ahead, between 1 and 3 (default is 1).
    """

    def __init__(self, config: AgentConfig, depth: int = 1):
        super().__init__(config)
        if not 1 <= depth <= 3:
            raise ValueError(f"Greedy depth must lie in 1..3, got {depth}")
        self._depth = depth

    def select_action(self, board: Board) -> Optional[Slide]:
        direction, _ = lookahead(board, self._depth)
        return Slide(direction) if direction is not None else None


class RandomPlacer(Agent):
    """
    Environment placing the hint tile on a random empty cell of the edge exposed by the last slide.

    Before the first slide any empty cell may be chosen. The placed tile is the hint (drawn from
    the bag when there is none) and the new hint is drawn from the bag.
    """

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self._generator = default_rng(config.seed)

    @classmethod
    def from_args(cls, args: str = "") -> "RandomPlacer":
        """Build the placer from ``key=value`` tokens."""
        return cls(AgentConfig.from_args(args, name="place", role="placer"))

    def select_action(self, board: Board) -> Optional[Place]:
        cells = board.empty_cells()
        if not cells:
            return None
        position = int(self._generator.choice(cells))

        bag = self._generator.permutation(board.bag_tiles()).tolist()
        tile = board.hint or bag.pop()
        hint = bag.pop() if bag else self._refilled_hint()
        return Place(position, tile, hint)

    def _refilled_hint(self) -> int:
        # ##>: The last tile of the bag was just drawn, the hint comes from the refilled bag.
        return int(self._generator.choice(Board().bag_tiles()))
