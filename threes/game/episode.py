# -*- coding: utf-8 -*-
"""
Play one episode of Threes! between a slider and a placer.
"""
from dataclasses import dataclass

from threes.agents.core import Agent
from threes.core.board import Board

# ##>: Tiles placed before the first slide.
INITIAL_TILES = 9


@dataclass
class EpisodeResult:
    """
    Outcome of an episode.
    """

    score: int
    steps: int
    max_tile: int
    total_reward: int


def play_episode(slider: Agent, placer: Agent, initial_tiles: int = INITIAL_TILES) -> EpisodeResult:
    """
    Play an episode until the slider has no legal move.

    Parameters
    ----------
    slider : Agent
        The agent sliding the board.
    placer : Agent
        The environment placing tiles.
    initial_tiles : int, optional
        Number of tiles placed before the first slide (default is 9).

    Returns
    -------
    EpisodeResult
        Final score, number of slides, largest tile and total slide reward.

    Raises
    ------
    ValueError
        If ``initial_tiles`` does not fit on the board.
    """
    if not 0 <= initial_tiles <= 16:
        raise ValueError(f"initial_tiles must lie in 0..16, got {initial_tiles}")

    board = Board()
    slider.reset_episode()
    placer.reset_episode()

    # ##: Opening placements.
    for _ in range(initial_tiles):
        placer.select_action(board).apply(board)

    steps, total_reward = 0, 0
    while True:
        move = slider.select_action(board)
        if move is None:
            break
        total_reward += move.apply(board)
        steps += 1

        placement = placer.select_action(board)
        if placement is None:
            break
        placement.apply(board)

    slider.finalize_episode()
    placer.finalize_episode()
    return EpisodeResult(score=board.score, steps=steps, max_tile=board.max_tile, total_reward=total_reward)
