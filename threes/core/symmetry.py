"""
The eight symmetric views of the board (four rotations, each optionally mirrored) in a fixed order.

Value evaluation and learning both enumerate ``SYMMETRIES`` so that every weight update is shared
by the eight symmetric occurrences of a feature.
"""

from __future__ import annotations

from typing import NamedTuple

from numpy import arange, fliplr, ndarray, rot90

from threes.core.board import Board


class Symmetry(NamedTuple):
    """
    One symmetry of the square: an optional left-right reflection followed by clockwise rotations.
    """

    reflected: bool
    rotations: int

    def apply(self, board: Board) -> Board:
        """Return the view of ``board`` under this symmetry."""
        view = board.reflect_horizontal() if self.reflected else board.copy()
        for _ in range(self.rotations):
            view = view.rotate_clockwise()
        return view

    def invert(self, board: Board) -> Board:
        """Map a view produced by ``apply`` back to the original board."""
        view = board.copy()
        for _ in range((4 - self.rotations) % 4):
            view = view.rotate_clockwise()
        return view.reflect_horizontal() if self.reflected else view

    @property
    def permutation(self) -> ndarray:
        """
        Flat positions read by the transformed board.

        ``self.apply(board).cells.ravel()[p] == board.cells.ravel()[self.permutation[p]]`` for every p.
        """
        grid = arange(Board.SIZE * Board.SIZE).reshape(Board.SIZE, Board.SIZE)
        if self.reflected:
            grid = fliplr(grid)
        return rot90(grid, k=-self.rotations).ravel()


SYMMETRIES: tuple[Symmetry, ...] = tuple(
    Symmetry(reflected, rotations) for reflected in (False, True) for rotations in range(4)
)


def compose(first: Symmetry, second: Symmetry) -> Symmetry:
    """
    Find the symmetry equal to applying ``first`` then ``second``.

    Raises
    ------
    ValueError
        If the composition is not one of ``SYMMETRIES``.
    """
    combined = first.permutation[second.permutation]
    for symmetry in SYMMETRIES:
        if (symmetry.permutation == combined).all():
            return symmetry
    raise ValueError(f"{first} followed by {second} is not a symmetry of the board")
