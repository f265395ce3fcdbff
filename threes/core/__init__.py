# -*- coding: utf-8 -*-
"""
This module provides the game dynamics of Threes!.

It includes the tile merge rule, the board with its hint and bag of basic tiles, sliding and
placement of tiles, and the ordered enumeration of the eight symmetric views of a board.
"""

from .board import BAG_TILES, INSERTION_CELLS, Board, slide
from .gamemove import (
    ACTIONS,
    DIRECTIONS,
    MAX_RANK,
    NO_DIRECTION,
    can_merge,
    illegal_actions,
    legal_actions,
    slide_row,
    tile_value,
)
from .symmetry import SYMMETRIES, Symmetry, compose

__all__ = [
    "ACTIONS",
    "BAG_TILES",
    "DIRECTIONS",
    "INSERTION_CELLS",
    "MAX_RANK",
    "NO_DIRECTION",
    "SYMMETRIES",
    "Board",
    "Symmetry",
    "can_merge",
    "compose",
    "illegal_actions",
    "legal_actions",
    "slide",
    "slide_row",
    "tile_value",
]
