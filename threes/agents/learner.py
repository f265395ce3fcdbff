# -*- coding: utf-8 -*-
"""
TD(0) learning of afterstate values.

Only two afterstates are retained per episode: ``prev``, the board right after the previous slide
of the agent, and the afterstate of the slide that follows it.
"""
from typing import Optional

from threes.core.board import Board
from threes.network.ntuple import NTupleNetwork


class TDLearner:
    """
    Online TD(0) learner over an n-tuple network.

    Parameters
    ----------
    network : NTupleNetwork
        The network whose weights are trained.
    alpha : float
        Learning rate. It is divided by the number of weights summed in one evaluation, so the
        step size of a single weight does not depend on the number of tuples. 0 disables learning.
    """

    def __init__(self, network: NTupleNetwork, alpha: float):
        self._network = network
        self._alpha = alpha
        self._step = alpha / network.num_terms
        self._prev: Optional[Board] = None

    @property
    def alpha(self) -> float:
        """The configured learning rate."""
        return self._alpha

    @property
    def step(self) -> float:
        """Increment applied to a single weight per unit of TD error."""
        return self._step

    @property
    def prev(self) -> Optional[Board]:
        """The afterstate waiting for its successor, None before the first slide."""
        return self._prev

    def reset(self) -> None:
        """Forget the retained afterstate."""
        self._prev = None

    def td_error(self, prev: Board, next_board: Optional[Board], reward: int) -> float:
        """
        Compute the TD error of a transition.

        Parameters
        ----------
        prev : Board
            The afterstate being evaluated.
        next_board : Board or None
            The next afterstate, ignored on a terminal transition.
        reward : int
            Reward of the slide leading to ``next_board``, -1 if no legal slide remained.

        Returns
        -------
        float
            ``reward + V(next) - V(prev)``, or ``-V(prev)`` on a terminal transition.
        """
        if reward == -1:
            return -self._network.value(prev)
        return reward + self._network.value(next_board) - self._network.value(prev)

    def observe(self, afterstate: Optional[Board], reward: int) -> Optional[float]:
        """
        Consume the afterstate of a new slide.

        Parameters
        ----------
        afterstate : Board or None
            Board after the slide, None when no legal slide remained.
        reward : int
            Reward of the slide, -1 when no legal slide remained.

        Returns
        -------
        float or None
            The TD error applied to ``prev``, or None if there was no ``prev`` to update.
        """
        if reward == -1:
            return self.terminate()

        if self._prev is None:
            self._prev = afterstate.copy()
            return None

        delta = self.td_error(self._prev, afterstate, reward)
        self._train(self._prev, delta)
        self._prev = afterstate.copy()
        return delta

    def terminate(self) -> Optional[float]:
        """
        Apply the terminal update, whose target value is zero, and clear the window.

        Returns
        -------
        float or None
            The TD error applied, or None if there was no ``prev`` to update.
        """
        if self._prev is None:
            return None
        delta = self.td_error(self._prev, None, -1)
        self._train(self._prev, delta)
        self._prev = None
        return delta

    def _train(self, board: Board, delta: float) -> None:
        if self._step:
            self._network.update(board, self._step * delta)
