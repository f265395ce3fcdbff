"""
Tile rules and move utilities for Threes!, providing the merge rule, row sliding and the
determination of legal and illegal moves.
"""

from numpy import array, int64, ndarray, rot90

# ##>: Highest rank a cell can hold (ranks are stored in one hexadecimal digit).
MAX_RANK = 15

# ##>: Canonical direction order, also used to break ties between equal moves.
ACTIONS = {"up": 0, "right": 1, "down": 2, "left": 3}
DIRECTIONS = (0, 1, 2, 3)
NO_DIRECTION = 4


def tile_value(rank: int) -> int:
    """
    Compute the displayed value of a tile from its rank.

    Parameters
    ----------
    rank : int
        The rank of the tile (0 for an empty cell).

    Returns
    -------
    int
        0 for empty cells, 1 and 2 for the basic tiles, then 3, 6, 12, ... doubling per rank.
    """
    if rank <= 3:
        return rank
    return 3 * 2 ** (rank - 3)


def can_merge(hold: int, tile: int) -> bool:
    """
    Check if ``tile`` can merge into the cell holding ``hold``.

    Parameters
    ----------
    hold : int
        Rank of the cell the tile moves into.
    tile : int
        Rank of the moving tile.

    Returns
    -------
    bool
        True if the two ranks merge.

    Notes
    -----
    - The two lowest ranks (1 and 2) only merge with each other.
    - Higher ranks merge with an equal rank, unless the result would exceed ``MAX_RANK``.
    """
    if hold + tile == 3 and hold * tile == 2:
        return True
    return hold == tile and 3 <= hold < MAX_RANK


def merged_rank(hold: int, tile: int) -> int:
    """Rank of the tile produced by merging ``hold`` and ``tile``."""
    return 3 if hold + tile == 3 else hold + 1


def slide_row(row: list[int]) -> tuple[int, list[int]]:
    """
    Slide one row toward its first cell and compute the merge reward.

    Parameters
    ----------
    row : list[int]
        The ranks of a row, the first element being on the moving edge.

    Returns
    -------
    score : int
        The sum of the values of the merged tiles.
    new_row : list[int]
        The row after the slide.

    Notes
    -----
    - Each tile moves at most one cell, either into an empty cell or by merging.
    - A tile created by a merge is never merged again within the same slide.
    """
    result = list(row)
    score = 0
    for col in range(1, len(result)):
        tile, hold = result[col], result[col - 1]
        if tile == 0:
            continue
        if hold == 0:
            result[col - 1], result[col] = tile, 0
        elif can_merge(hold, tile):
            merged = merged_rank(hold, tile)
            result[col - 1], result[col] = merged, 0
            score += tile_value(merged)
    return score, result


def slide_left(cells: ndarray) -> tuple[int, ndarray]:
    """
    Slide the whole grid to the left.

    Parameters
    ----------
    cells : ndarray
        The grid of ranks.

    Returns
    -------
    score : int
        The total reward of the slide, or -1 if no cell changed.
    updated : ndarray
        The grid after the slide (a new array).
    """
    score = 0
    rows = []
    for row in cells.tolist():
        row_score, new_row = slide_row(row)
        score += row_score
        rows.append(new_row)

    updated = array(rows, dtype=int64)
    if (updated == cells).all():
        return -1, updated
    return score, updated


def slide_cells(cells: ndarray, direction: int) -> tuple[ndarray, int]:
    """
    Slide the grid in a direction.

    Parameters
    ----------
    cells : ndarray
        The grid of ranks.
    direction : int
        The direction (0: up, 1: right, 2: down, 3: left).

    Returns
    -------
    new_cells : ndarray
        The grid after the slide.
    reward : int
        The reward of the slide, or -1 if the move is illegal.
    """
    # ##: Rotate so that the direction becomes a left slide.
    turns = (direction + 1) % 4
    reward, updated = slide_left(rot90(cells, k=turns))
    return rot90(updated, k=-turns), reward


def legal_actions(cells: ndarray) -> list[int]:
    """
    Determine legal actions for a grid.

    Parameters
    ----------
    cells : ndarray
        The grid of ranks.

    Returns
    -------
    list[int]
        The directions whose slide changes at least one cell, in canonical order.
    """
    return [direction for direction in DIRECTIONS if slide_cells(cells, direction)[1] != -1]


def illegal_actions(cells: ndarray) -> list[int]:
    """Directions whose slide would leave the grid unchanged."""
    legal = legal_actions(cells)
    return [direction for direction in DIRECTIONS if direction not in legal]
