# -*- coding: utf-8 -*-
"""
Slider learning afterstate values with an n-tuple network and TD(0).
"""
import logging
from typing import Optional

from threes.addons.config import AgentConfig
from threes.addons.errors import ConfigurationError
from threes.agents.core import Agent, Slide
from threes.agents.learner import TDLearner
from threes.agents.selection import select_action
from threes.core.board import Board
from threes.network.features import INDEX_STRATEGIES, tuple_set
from threes.network.ntuple import NTupleNetwork

_logger = logging.getLogger(__name__)


class TDSlider(Agent):
    """
    Slider choosing moves by one-ply expectimax and learning from its own afterstates.

    Configuration keys: ``alpha`` (learning rate, 0 to only play), ``tuples`` (tuple set),
    ``index`` (``radix`` or the legacy ``sum``), ``init`` (expected table sizes), ``load`` and
    ``save`` (weight files) and ``fallback`` (start from fresh weights when ``load`` fails).
    """

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self._network = NTupleNetwork(tuple_set(config.tuples), index=INDEX_STRATEGIES[config.index]())

        if config.init is not None and list(config.init) != self._network.table_lengths:
            raise ConfigurationError(
                f"init sizes {list(config.init)} do not match the {config.tuples} tuples "
                f"({self._network.table_lengths})"
            )
        if config.load is not None:
            self._network.load(config.load, fallback=config.fallback)

        self._learner = TDLearner(self._network, config.alpha)
        _logger.info(
            "Slider %s: %d tuples (%s), index v%d, alpha=%s",
            self.name,
            len(self._network.descriptors),
            config.tuples,
            self._network.index.version,
            config.alpha,
        )

    @classmethod
    def from_args(cls, args: str = "") -> "TDSlider":
        """Build the slider from ``key=value`` tokens."""
        return cls(AgentConfig.from_args(args, name="slide", role="slider"))

    @property
    def network(self) -> NTupleNetwork:
        """The value network."""
        return self._network

    @property
    def learner(self) -> TDLearner:
        """The TD learner."""
        return self._learner

    def reset_episode(self) -> None:
        self._learner.reset()

    def select_action(self, board: Board) -> Optional[Slide]:
        selection = select_action(self._network, board)
        if selection is None:
            # ##: No legal slide: terminal update toward zero.
            self._learner.observe(None, -1)
            return None

        self._learner.observe(selection.afterstate, selection.reward)
        return Slide(selection.direction)

    def finalize_episode(self) -> None:
        self._learner.reset()

    def save(self) -> None:
        """Write the weights to the ``save`` path, if configured."""
        if self._config.save is not None:
            self._network.save(self._config.save)
