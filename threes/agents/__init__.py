# -*- coding: utf-8 -*-
"""
Agents playing Threes!: the TD-learning slider with its expectimax selection, baseline sliders and
the random tile placer.
"""
from .baseline import GreedySlider, RandomPlacer, RandomSlider
from .core import Action, Agent, Place, Slide
from .learner import TDLearner
from .selection import Selection, chance_value, select_action
from .td_agent import TDSlider

__all__ = [
    "Action",
    "Agent",
    "GreedySlider",
    "Place",
    "RandomPlacer",
    "RandomSlider",
    "Selection",
    "Slide",
    "TDLearner",
    "TDSlider",
    "chance_value",
    "select_action",
]
