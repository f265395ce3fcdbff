"""
N-tuple features: the cell positions a feature reads and the strategies turning the ranks found
there into a key of a weight table.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from numpy import arange, int64, ndarray

from threes.addons.errors import ConfigurationError
from threes.core.gamemove import MAX_RANK

TUPLE_LENGTHS = (4, 6)


@dataclass(frozen=True)
class TupleDescriptor:
    """
    Ordered flat positions (0..15) read by one n-tuple feature.

    Raises
    ------
    ConfigurationError
        If the tuple does not hold 4 or 6 distinct positions inside the board.
    """

    positions: tuple[int, ...]

    def __post_init__(self):
        if len(self.positions) not in TUPLE_LENGTHS:
            raise ConfigurationError(f"A tuple holds 4 or 6 positions, got {self.positions}")
        if len(set(self.positions)) != len(self.positions):
            raise ConfigurationError(f"Repeated position in tuple {self.positions}")
        if any(not 0 <= position < 16 for position in self.positions):
            raise ConfigurationError(f"Position outside the board in tuple {self.positions}")

    def __len__(self) -> int:
        return len(self.positions)


def _descriptors(*tuples: tuple[int, ...]) -> tuple[TupleDescriptor, ...]:
    return tuple(TupleDescriptor(positions) for positions in tuples)


# ##>: Named tuple sets, shared by every board and every episode.
TUPLE_SETS: dict[str, tuple[TupleDescriptor, ...]] = {
    # ##: Every row and every column.
    "lines": _descriptors(
        (0, 1, 2, 3),
        (4, 5, 6, 7),
        (8, 9, 10, 11),
        (12, 13, 14, 15),
        (0, 4, 8, 12),
        (1, 5, 9, 13),
        (2, 6, 10, 14),
        (3, 7, 11, 15),
    ),
    # ##: Outer and inner lines with their neighbouring corner pairs.
    "4x6": _descriptors(
        (0, 1, 2, 3, 4, 5),
        (4, 5, 6, 7, 8, 9),
        (0, 1, 2, 4, 5, 6),
        (4, 5, 6, 8, 9, 10),
    ),
}


def tuple_set(name: str) -> tuple[TupleDescriptor, ...]:
    """
    Get a named tuple set.

    Raises
    ------
    ConfigurationError
        If no tuple set has that name.
    """
    try:
        return TUPLE_SETS[name]
    except KeyError as error:
        raise ConfigurationError(f"Unknown tuple set '{name}', expected one of {sorted(TUPLE_SETS)}") from error


class FeatureIndex(ABC):
    """
    Strategy mapping the ranks read by a tuple to a weight table key.

    Strategies are versioned and incompatible: tables trained with one cannot be read with another.
    """

    version: int

    @abstractmethod
    def table_length(self, tuple_length: int) -> int:
        """Number of weights needed by a tuple of ``tuple_length`` positions."""

    @abstractmethod
    def keys(self, ranks: ndarray) -> ndarray:
        """
        Compute keys from ranks.

        Parameters
        ----------
        ranks : ndarray
            Ranks read by a tuple, the positions along the last axis.

        Returns
        -------
        ndarray
            One key per row of ``ranks``, each lower than ``table_length``.
        """


class RadixIndex(FeatureIndex):
    """
    Mixed-radix key: the sum of ``rank_i * base ** i``. Distinct rank tuples get distinct keys.
    """

    version = 2

    def __init__(self, base: int = MAX_RANK + 1):
        if base <= MAX_RANK:
            raise ConfigurationError(f"Radix base must exceed the maximum rank {MAX_RANK}, got {base}")
        self.base = base

    def table_length(self, tuple_length: int) -> int:
        return self.base**tuple_length

    def keys(self, ranks: ndarray) -> ndarray:
        powers = self.base ** arange(ranks.shape[-1], dtype=int64)
        return ranks @ powers


class SumIndex(FeatureIndex):
    """
    Legacy key: the plain sum of the ranks.

    Different rank tuples with the same sum share a weight, trading collisions for small tables.
    """

    version = 1

    def table_length(self, tuple_length: int) -> int:
        return MAX_RANK * tuple_length + 1

    def keys(self, ranks: ndarray) -> ndarray:
        return ranks.sum(axis=-1)


INDEX_STRATEGIES = {"radix": RadixIndex, "sum": SumIndex}
