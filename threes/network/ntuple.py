"""
N-tuple network approximating the value of Threes! afterstates.

The value of a board is the sum, over the eight symmetric views of ``SYMMETRIES`` and over every
tuple descriptor, of the weight addressed by the ranks that the descriptor reads in that view.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from numpy import float64, ndarray, stack

from threes.addons.errors import ConfigurationError, WeightFileError
from threes.core.board import Board
from threes.core.symmetry import SYMMETRIES
from threes.network.features import FeatureIndex, RadixIndex, TupleDescriptor
from threes.network.weights import WeightTable, load_tables, save_tables

_logger = logging.getLogger(__name__)


class NTupleNetwork:
    """
    Value function built from weight tables, one per tuple descriptor.

    Parameters
    ----------
    descriptors : Sequence[TupleDescriptor]
        The tuples read by the network.
    index : FeatureIndex, optional
        The strategy computing table keys (default is ``RadixIndex()``).
    tables : Sequence[WeightTable], optional
        Existing weights, one table per descriptor (default is zero-initialized tables).

    Raises
    ------
    ConfigurationError
        If there is no descriptor or a table length differs from the one the index requires.
    """

    def __init__(
        self,
        descriptors: Sequence[TupleDescriptor],
        index: Optional[FeatureIndex] = None,
        tables: Optional[Sequence[WeightTable]] = None,
    ):
        if not descriptors:
            raise ConfigurationError("An n-tuple network needs at least one tuple")
        self._descriptors = tuple(descriptors)
        self._index = index or RadixIndex()

        if tables is None:
            tables = [WeightTable(length) for length in self.table_lengths]
        self._check_tables(tables)
        self._tables = list(tables)

        # ##: Positions read by each descriptor in each symmetric view, shape (8, tuple length).
        self._positions = [
            stack([symmetry.permutation[list(descriptor.positions)] for symmetry in SYMMETRIES])
            for descriptor in self._descriptors
        ]

    @property
    def descriptors(self) -> tuple[TupleDescriptor, ...]:
        """The tuple descriptors."""
        return self._descriptors

    @property
    def index(self) -> FeatureIndex:
        """The feature index strategy."""
        return self._index

    @property
    def tables(self) -> list[WeightTable]:
        """The weight tables, in descriptor order."""
        return self._tables

    @property
    def table_lengths(self) -> list[int]:
        """Table length required by each descriptor."""
        return [self._index.table_length(len(descriptor)) for descriptor in self._descriptors]

    @property
    def num_terms(self) -> int:
        """Number of weights summed by one evaluation."""
        return len(SYMMETRIES) * len(self._descriptors)

    def _check_tables(self, tables: Sequence[WeightTable]) -> None:
        lengths = [len(table) for table in tables]
        if lengths != self.table_lengths:
            raise ConfigurationError(f"Table lengths {lengths} do not match the tuples, expected {self.table_lengths}")

    def keys(self, board: Board) -> list[ndarray]:
        """
        Compute the keys addressed by a board.

        Parameters
        ----------
        board : Board
            The board to evaluate.

        Returns
        -------
        list[ndarray]
            For each descriptor, the 8 keys of the symmetric views in ``SYMMETRIES`` order.
        """
        flat = board.cells.ravel()
        return [self._index.keys(flat[positions]) for positions in self._positions]

    def value(self, board: Board) -> float:
        """Estimated value of a board."""
        return float(
            sum(table[keys].sum(dtype=float64) for table, keys in zip(self._tables, self.keys(board)))
        )

    def update(self, board: Board, amount: float) -> None:
        """
        Add ``amount`` to every weight contributing to the value of a board.

        A weight addressed by several symmetric views receives one increment per view.
        """
        for table, keys in zip(self._tables, self.keys(board)):
            table.add(keys, amount)

    def save(self, path: str | Path) -> None:
        """Write the weights to a binary file."""
        save_tables(path, self._tables)

    def load(self, path: str | Path, fallback: bool = False) -> bool:
        """
        Replace the weights with those of a binary file.

        Parameters
        ----------
        path : str or Path
            The weight file.
        fallback : bool, optional
            Keep the current weights instead of raising when the file cannot be loaded
            (default is False).

        Returns
        -------
        bool
            True if the weights were loaded.

        Raises
        ------
        WeightFileError
            If the file cannot be loaded and ``fallback`` is False.
        """
        try:
            self._tables = load_tables(path, self.table_lengths)
        except WeightFileError as error:
            if not fallback:
                raise
            _logger.warning("%s, keeping freshly initialized weights", error)
            return False
        return True
