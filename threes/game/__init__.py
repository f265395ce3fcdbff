# -*- coding: utf-8 -*-
"""
Episode driver and statistics over finished episodes.
"""
from .episode import INITIAL_TILES, EpisodeResult, play_episode
from .statistics import BlockSummary, Statistics

__all__ = ["BlockSummary", "EpisodeResult", "INITIAL_TILES", "Statistics", "play_episode"]
