# -*- coding: utf-8 -*-
"""
One-ply expectimax selection of slides.

Each legal slide is scored by its reward, the value of its afterstate and the expected value of
the chance node that follows: the environment inserts the hint tile in one of the empty cells of
the edge exposed by the slide, after which the best slide is played.
"""
from typing import NamedTuple, Optional

from threes.core.board import BAG_TILES, Board, slide
from threes.core.gamemove import DIRECTIONS
from threes.network.ntuple import NTupleNetwork


class Selection(NamedTuple):
    """
    Slide chosen by the expectimax search.
    """

    direction: int
    afterstate: Board
    reward: int
    score: float


def best_slide_value(network: NTupleNetwork, board: Board) -> Optional[float]:
    """
    Best ``reward + V(afterstate)`` over the legal slides of a board.

    Returns
    -------
    float or None
        The best value, or None if no slide is legal.
    """
    best = None
    for direction in DIRECTIONS:
        after, reward = slide(board, direction)
        if reward == -1:
            continue
        value = reward + network.value(after)
        if best is None or value > best:
            best = value
    return best


def candidate_tiles(afterstate: Board) -> list[int]:
    """
    Tiles the environment may insert next: the hint when known, otherwise the tiles left in the bag.
    """
    if afterstate.hint:
        return [afterstate.hint]
    return [rank for rank in BAG_TILES if afterstate.bag(rank)]


def chance_value(network: NTupleNetwork, afterstate: Board, direction: int) -> float:
    """
    Expected value of the chance node following a slide.

    Parameters
    ----------
    network : NTupleNetwork
        The value function.
    afterstate : Board
        Board after the slide.
    direction : int
        Direction of that slide, which determines the cells where a tile may be inserted.

    Returns
    -------
    float
        Average, over the empty cells of the exposed edge and the candidate tiles, of the best
        value reachable after the insertion. 0 when there is no empty cell.

    Notes
    -----
    - A child board with no legal slide contributes 0.
    - Every candidate cell is weighted uniformly.
    """
    cells = afterstate.empty_cells(direction)
    tiles = candidate_tiles(afterstate)
    if not cells or not tiles:
        return 0.0

    total = 0.0
    for position in cells:
        for tile in tiles:
            best = best_slide_value(network, afterstate.with_tile(position, tile))
            total += best if best is not None else 0.0
    return total / (len(cells) * len(tiles))


def select_action(network: NTupleNetwork, board: Board) -> Optional[Selection]:
    """
    Choose the slide with the greatest expectimax score.

    Parameters
    ----------
    network : NTupleNetwork
        The value function.
    board : Board
        The current board, left unchanged.

    Returns
    -------
    Selection or None
        The chosen slide, or None if no slide is legal. Ties keep the earliest direction of
        ``DIRECTIONS``.
    """
    best = None
    for direction in DIRECTIONS:
        after, reward = slide(board, direction)
        if reward == -1:
            continue

        score = reward + network.value(after) + chance_value(network, after, direction)
        if best is None or score > best.score:
            best = Selection(direction, after, reward, score)
    return best
