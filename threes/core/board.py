"""
Board of the Threes! game: a 4x4 grid of ranks together with the previewed hint tile, the bag of
basic tiles and the direction of the previous slide.
"""

from __future__ import annotations

from numpy import array, fliplr, int64, ndarray, rot90, zeros

from threes.core.gamemove import MAX_RANK, NO_DIRECTION, legal_actions, slide_cells, tile_value

# ##>: Basic tiles drawn without replacement from the bag, one copy of each per refill.
BAG_TILES = (1, 2, 3)

# ##>: Cells freshly exposed by a slide, indexed by the direction of that slide.
INSERTION_CELLS = (
    (12, 13, 14, 15),
    (0, 4, 8, 12),
    (0, 1, 2, 3),
    (3, 7, 11, 15),
    tuple(range(16)),
)

# ##>: Direction seen in a transformed view, indexed by the original direction.
_ROTATED_DIRECTION = (1, 2, 3, 0, NO_DIRECTION)
_REFLECTED_DIRECTION = (0, 3, 2, 1, NO_DIRECTION)


class Board:
    """
    State of a Threes! game.

    The grid holds ranks (0 for empty cells). The hint is the next tile the environment will
    place (0 when unknown) and the bag counts the basic tiles still available before a refill.
    """

    SIZE = 4

    def __init__(
        self,
        cells: ndarray | list | None = None,
        hint: int = 0,
        bag: dict[int, int] | None = None,
        last: int = NO_DIRECTION,
    ):
        """
        Initialize a board.

        Parameters
        ----------
        cells : ndarray or list, optional
            The 16 ranks, flat or as a 4x4 grid (default is an empty grid).
        hint : int, optional
            The previewed next tile (default is 0, unknown).
        bag : dict[int, int], optional
            Remaining count per basic tile (default is a full bag).
        last : int, optional
            Direction of the previous slide (default is ``NO_DIRECTION``).

        Raises
        ------
        ValueError
            If a rank lies outside ``0..MAX_RANK``.
        """
        if cells is None:
            self._cells = zeros((self.SIZE, self.SIZE), dtype=int64)
        else:
            self._cells = array(cells, dtype=int64).reshape(self.SIZE, self.SIZE)
        if self._cells.min() < 0 or self._cells.max() > MAX_RANK:
            raise ValueError(f"Ranks must lie in 0..{MAX_RANK}")

        self._hint = hint
        self._bag = dict(bag) if bag is not None else dict.fromkeys(BAG_TILES, 1)
        self._last = last

    @property
    def cells(self) -> ndarray:
        """The 4x4 grid of ranks."""
        return self._cells

    @property
    def hint(self) -> int:
        """The previewed next tile, 0 when unknown."""
        return self._hint

    @property
    def last(self) -> int:
        """Direction of the previous slide, ``NO_DIRECTION`` before any slide."""
        return self._last

    def bag(self, rank: int) -> int:
        """Number of tiles of ``rank`` left in the bag."""
        return self._bag.get(rank, 0)

    def bag_tiles(self) -> list[int]:
        """Tiles left in the bag, one entry per copy."""
        return [rank for rank in BAG_TILES for _ in range(self._bag.get(rank, 0))]

    def read(self, position: int) -> int:
        """Rank at a flat position (0..15)."""
        return int(self._cells.flat[position])

    def __getitem__(self, key: int | tuple[int, int]) -> int:
        if isinstance(key, tuple):
            return int(self._cells[key])
        return self.read(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            bool((self._cells == other._cells).all())
            and self._hint == other._hint
            and self.bag_tiles() == other.bag_tiles()
            and self._last == other._last
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Board(cells={self._cells.ravel().tolist()}, hint={self._hint}, last={self._last})"

    def copy(self) -> Board:
        """Return an independent copy of the board."""
        return Board(self._cells.copy(), hint=self._hint, bag=self._bag, last=self._last)

    def slide(self, direction: int) -> int:
        """
        Slide the board in a direction.

        Parameters
        ----------
        direction : int
            The direction (0: up, 1: right, 2: down, 3: left).

        Returns
        -------
        int
            The sum of the merged tile values, or -1 if no cell moved.

        Notes
        -----
        An illegal slide leaves the board untouched, including the last direction.
        """
        new_cells, reward = slide_cells(self._cells, direction)
        if reward != -1:
            self._cells = new_cells.copy()
            self._last = direction
        return reward

    def place(self, position: int, tile: int, hint: int) -> None:
        """
        Place a tile and record the next hint.

        Parameters
        ----------
        position : int
            Flat position of the new tile.
        tile : int
            The rank to place.
        hint : int
            The next previewed tile.

        Raises
        ------
        ValueError
            If the cell is occupied, the tile is not a valid rank, or a tile drawn from the bag is no
            longer available. The board is left unchanged.

        Notes
        -----
        - When no hint was pending, ``tile`` is drawn from the bag as well.
        - The bag is refilled as soon as it becomes empty.
        """
        self._check_insertion(position, tile)
        bag = self._bag
        if self._hint == 0:
            bag = _take(bag, tile)
        self._bag = _take(bag, hint)
        self._cells.flat[position] = tile
        self._hint = hint

    def with_tile(self, position: int, tile: int) -> Board:
        """
        Hypothesize a tile insertion.

        Returns a copy with ``tile`` written at ``position`` and an unknown hint, leaving the bag
        untouched. Used to expand chance nodes. Raises ``ValueError`` like ``place`` for an occupied
        cell or an invalid rank.
        """
        self._check_insertion(position, tile)
        child = self.copy()
        child._cells.flat[position] = tile
        child._hint = 0
        return child

    def _check_insertion(self, position: int, tile: int) -> None:
        if not 1 <= tile <= MAX_RANK:
            raise ValueError(f"Tile rank must lie in 1..{MAX_RANK}, got {tile}")
        if self._cells.flat[position] != 0:
            raise ValueError(f"Cell {position} is occupied")

    def empty_cells(self, direction: int | None = None) -> list[int]:
        """
        Empty cells where the environment may insert a tile.

        Parameters
        ----------
        direction : int, optional
            The direction of the previous slide (default is ``last``).

        Returns
        -------
        list[int]
            Flat positions of the empty cells on the edge exposed by that slide.
        """
        direction = self._last if direction is None else direction
        return [position for position in INSERTION_CELLS[direction] if self._cells.flat[position] == 0]

    def rotate_clockwise(self) -> Board:
        """Return the view of the board rotated a quarter turn clockwise."""
        return Board(rot90(self._cells, k=-1).copy(), self._hint, self._bag, _ROTATED_DIRECTION[self._last])

    def reflect_horizontal(self) -> Board:
        """Return the view of the board mirrored left to right."""
        return Board(fliplr(self._cells).copy(), self._hint, self._bag, _REFLECTED_DIRECTION[self._last])

    @property
    def is_finished(self) -> bool:
        """True if no slide changes the board."""
        return not legal_actions(self._cells)

    @property
    def max_tile(self) -> int:
        """Value of the largest tile on the board."""
        return tile_value(int(self._cells.max()))

    @property
    def score(self) -> int:
        """Game score: each tile of rank r >= 3 is worth 3 ** (r - 2)."""
        return sum(3 ** (rank - 2) for rank in self._cells.ravel().tolist() if rank >= 3)


def slide(board: Board, direction: int) -> tuple[Board, int]:
    """
    Slide a copy of the board.

    Parameters
    ----------
    board : Board
        The board, left unchanged.
    direction : int
        The direction (0: up, 1: right, 2: down, 3: left).

    Returns
    -------
    new_board : Board
        The board after the slide.
    reward : int
        The reward of the slide, or -1 if the move is illegal.
    """
    after = board.copy()
    reward = after.slide(direction)
    return after, reward


def _take(bag: dict[int, int], rank: int) -> dict[int, int]:
    """Return the bag without one tile of ``rank``, refilled when exhausted."""
    if bag.get(rank, 0) <= 0:
        raise ValueError(f"Tile {rank} is not in the bag")
    bag = {**bag, rank: bag[rank] - 1}
    if not any(bag.values()):
        bag = dict.fromkeys(BAG_TILES, 1)
    return bag
