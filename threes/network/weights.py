"""
Weight tables of the n-tuple network and their binary persistence.

File layout: a little-endian ``uint32`` table count followed by every table's ``float32`` weights,
in declaration order. Table lengths are not stored, so the reader must know them in advance.
"""

import logging
from pathlib import Path
from typing import Sequence

from numpy import add, array, dtype, frombuffer, full, ndarray

from threes.addons.errors import ConfigurationError, WeightFileError

_COUNT = dtype("<u4")
_WEIGHT = dtype("<f4")

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class WeightTable:
    """
    Trainable weights addressed by feature keys.

    Parameters
    ----------
    length : int
        Number of weights.
    value : float, optional
        Initial value of every weight (default is 0.0).
    """

    def __init__(self, length: int, value: float = 0.0):
        if length <= 0:
            raise ConfigurationError(f"Weight table length must be positive, got {length}")
        self._weights = full(length, value, dtype=_WEIGHT)

    @classmethod
    def from_array(cls, weights: ndarray) -> "WeightTable":
        """Wrap existing weights (copied as ``float32``)."""
        table = cls(len(weights))
        table._weights[:] = weights
        return table

    @property
    def weights(self) -> ndarray:
        """The underlying weights."""
        return self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def __getitem__(self, keys):
        return self._weights[keys]

    def add(self, keys: ndarray, amount: float) -> None:
        """
        Add ``amount`` to the weight of every key.

        A key listed several times is incremented once per occurrence.
        """
        add.at(self._weights, keys, amount)


def save_tables(path: str | Path, tables: Sequence[WeightTable]) -> None:
    """
    Write weight tables to a binary file.

    Parameters
    ----------
    path : str or Path
        Destination file, overwritten if it exists.
    tables : Sequence[WeightTable]
        The tables, written in order.

    Raises
    ------
    WeightFileError
        If the file cannot be written.
    """
    try:
        with open(path, "wb") as stream:
            stream.write(array([len(tables)], dtype=_COUNT).tobytes())
            for table in tables:
                stream.write(table.weights.astype(_WEIGHT, copy=False).tobytes())
    except OSError as error:
        raise WeightFileError(f"Cannot write weights to {path}: {error}") from error
    _logger.info("Saved %d weight tables to %s", len(tables), path)


def load_tables(path: str | Path, lengths: Sequence[int]) -> list[WeightTable]:
    """
    Read weight tables from a binary file.

    Parameters
    ----------
    path : str or Path
        Source file.
    lengths : Sequence[int]
        Expected length of every table, in order.

    Returns
    -------
    list[WeightTable]
        The loaded tables.

    Raises
    ------
    WeightFileError
        If the file is missing or unreadable, holds a different number of tables, or its size does
        not match the expected lengths.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as error:
        raise WeightFileError(f"Cannot read weights from {path}: {error}") from error

    if len(data) < _COUNT.itemsize:
        raise WeightFileError(f"{path} is too short to hold a table count")
    count = int(frombuffer(data, dtype=_COUNT, count=1)[0])
    if count != len(lengths):
        raise WeightFileError(f"{path} holds {count} tables, expected {len(lengths)}")

    expected = _COUNT.itemsize + sum(lengths) * _WEIGHT.itemsize
    if len(data) != expected:
        raise WeightFileError(f"{path} holds {len(data)} bytes, expected {expected}")

    tables = []
    offset = _COUNT.itemsize
    for length in lengths:
        weights = frombuffer(data, dtype=_WEIGHT, count=length, offset=offset)
        tables.append(WeightTable.from_array(weights))
        offset += length * _WEIGHT.itemsize

    _logger.info("Loaded %d weight tables from %s", count, path)
    return tables
