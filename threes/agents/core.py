# -*- coding: utf-8 -*-
"""
Interface shared by every agent, and the actions agents return.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from threes.addons.config import AgentConfig
from threes.core.board import Board


@dataclass(frozen=True)
class Slide:
    """
    Slide the board in a direction (0: up, 1: right, 2: down, 3: left).
    """

    direction: int

    def apply(self, board: Board) -> int:
        """Apply the slide and return its reward (-1 if illegal)."""
        return board.slide(self.direction)


@dataclass(frozen=True)
class Place:
    """
    Place a tile on the board and announce the next one.
    """

    position: int
    tile: int
    hint: int

    def apply(self, board: Board) -> int:
        """Apply the placement. Placing earns no reward."""
        board.place(self.position, self.tile, self.hint)
        return 0


Action = Union[Slide, Place]


class Agent(ABC):
    """
    An agent playing one side of a Threes! game: the slider or the placer.

    Parameters
    ----------
    config : AgentConfig
        The agent configuration.
    """

    def __init__(self, config: AgentConfig):
        self._config = config

    @property
    def config(self) -> AgentConfig:
        """The agent configuration."""
        return self._config

    @property
    def name(self) -> str:
        """Name of the agent."""
        return self._config.name

    @property
    def role(self) -> str:
        """Role of the agent, ``slider`` or ``placer``."""
        return self._config.role

    def reset_episode(self) -> None:
        """Prepare the agent for a new episode."""

    @abstractmethod
    def select_action(self, board: Board) -> Optional[Action]:
        """
        Choose the next action.

        Parameters
        ----------
        board : Board
            The current board.

        Returns
        -------
        Action or None
            The action to apply, or None when the agent has no legal action left.
        """

    def finalize_episode(self) -> None:
        """Release the per-episode state at the end of an episode."""
