"""
Backing storage for tableau bits.

from chp_sim import storage
strategy = storage.get_storage('dense' / 'bitpacked')
x = strategy.matrix.zeros(2 * n, n)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple, Type

import numpy as np

from .errors import InvalidArgumentError


# ---------------------------------------------------------------------------
# Abstract capabilities -----------------------------------------------------
class BoolMatrix(ABC):
    """
    A (rows x cols) matrix of bits.

    Columns are exchanged in a *native* format (whatever the strategy stores
    internally) so that the gate engine can combine them with numpy's bitwise
    operators without unpacking. Rows are always exchanged as dense bool arrays.
    """

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, int]: ...

    @abstractmethod
    def column(self, j: int) -> np.ndarray:
        """Return a native-format copy of column *j*."""

    @abstractmethod
    def set_column(self, j: int, values: np.ndarray) -> None:
        """Overwrite column *j* from a native-format array."""

    @abstractmethod
    def column_bits(self, j: int) -> np.ndarray: ...

    @abstractmethod
    def row(self, i: int) -> np.ndarray: ...

    @abstractmethod
    def set_row(self, i: int, bits: np.ndarray) -> None: ...

    @abstractmethod
    def get(self, i: int, j: int) -> bool: ...

    @abstractmethod
    def set(self, i: int, j: int, value: bool) -> None: ...

    @abstractmethod
    def to_dense(self) -> np.ndarray: ...

    @classmethod
    @abstractmethod
    def from_dense(cls, array: np.ndarray) -> BoolMatrix: ...

    @classmethod
    def zeros(cls, rows: int, cols: int) -> BoolMatrix:
        return cls.from_dense(np.zeros((rows, cols), dtype=np.bool_))

    def zero_row(self, i: int) -> None:
        self.set_row(i, np.zeros(self.shape[1], dtype=np.bool_))

    def copy_row(self, dst: int, src: int) -> None:
        self.set_row(dst, self.row(src))

    def copy(self) -> BoolMatrix:
        return type(self).from_dense(self.to_dense())


class BoolVector(ABC):
    """A vector of bits whose ``data`` shares the packing of a matrix column."""

    data: np.ndarray

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __getitem__(self, i: int) -> bool: ...

    @abstractmethod
    def __setitem__(self, i: int, value: bool) -> None: ...

    @abstractmethod
    def bits(self) -> np.ndarray: ...

    @classmethod
    @abstractmethod
    def from_dense(cls, array: np.ndarray) -> BoolVector: ...

    @classmethod
    def zeros(cls, length: int) -> BoolVector:
        return cls.from_dense(np.zeros(length, dtype=np.bool_))

    def copy(self) -> BoolVector:
        return type(self).from_dense(self.bits())


# ---------------------------------------------------------------------------
# Dense numpy bool arrays ---------------------------------------------------
class DenseBoolMatrix(BoolMatrix):
    def __init__(self, data: np.ndarray):
        self._data = data

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def data(self) -> np.ndarray:
        """Underlying C-contiguous bool array (used by the numba kernels)."""
        return self._data

    def column(self, j: int) -> np.ndarray:
        return self._data[:, j].copy()

    def set_column(self, j: int, values: np.ndarray) -> None:
        self._data[:, j] = values

    def column_bits(self, j: int) -> np.ndarray:
        return self._data[:, j].copy()

    def row(self, i: int) -> np.ndarray:
        return self._data[i].copy()

    def set_row(self, i: int, bits: np.ndarray) -> None:
        self._data[i] = bits

    def zero_row(self, i: int) -> None:
        self._data[i] = False

    def copy_row(self, dst: int, src: int) -> None:
        self._data[dst] = self._data[src]

    def get(self, i: int, j: int) -> bool:
        return bool(self._data[i, j])

    def set(self, i: int, j: int, value: bool) -> None:
        self._data[i, j] = value

    def to_dense(self) -> np.ndarray:
        return self._data.copy()

    @classmethod
    def from_dense(cls, array: np.ndarray) -> DenseBoolMatrix:
        return cls(np.ascontiguousarray(array, dtype=np.bool_).copy())


class DenseBoolVector(BoolVector):
    def __init__(self, data: np.ndarray):
        self.data = data

    def __len__(self) -> int:
        return self.data.shape[0]

    def __getitem__(self, i: int) -> bool:
        return bool(self.data[i])

    def __setitem__(self, i: int, value: bool) -> None:
        self.data[i] = value

    def bits(self) -> np.ndarray:
        return self.data.copy()

    @classmethod
    def from_dense(cls, array: np.ndarray) -> DenseBoolVector:
        return cls(np.ascontiguousarray(array, dtype=np.bool_).copy())


# ---------------------------------------------------------------------------
# Bit-packed uint8 words ----------------------------------------------------
def _pack(bits: np.ndarray) -> np.ndarray:
    return np.packbits(np.asarray(bits, dtype=np.bool_), bitorder="little")


def _unpack(words: np.ndarray, count: int) -> np.ndarray:
    return np.unpackbits(words, count=count, bitorder="little").astype(np.bool_)


class PackedBoolMatrix(BoolMatrix):
    """
    Column-major packed bits: ``words[j]`` holds column *j* with bit *i*
    of the column stored at ``words[j, i >> 3] >> (i & 7)``.
    Padding bits past the last row are kept at zero.
    """

    def __init__(self, words: np.ndarray, rows: int):
        self._words = words
        self._rows = rows

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._words.shape[0])

    def column(self, j: int) -> np.ndarray:
        return self._words[j].copy()

    def set_column(self, j: int, values: np.ndarray) -> None:
        self._words[j] = values

    def column_bits(self, j: int) -> np.ndarray:
        return _unpack(self._words[j], self._rows)

    def row(self, i: int) -> np.ndarray:
        return ((self._words[:, i >> 3] >> (i & 7)) & 1).astype(np.bool_)

    def set_row(self, i: int, bits: np.ndarray) -> None:
        mask = np.uint8(1 << (i & 7))
        word = self._words[:, i >> 3]
        self._words[:, i >> 3] = np.where(bits, word | mask, word & ~mask)

    def get(self, i: int, j: int) -> bool:
        return bool((self._words[j, i >> 3] >> (i & 7)) & 1)

    def set(self, i: int, j: int, value: bool) -> None:
        mask = np.uint8(1 << (i & 7))
        if value:
            self._words[j, i >> 3] |= mask
        else:
            self._words[j, i >> 3] &= ~mask

    def to_dense(self) -> np.ndarray:
        cols = self._words.shape[0]
        if cols == 0:
            return np.zeros((self._rows, 0), dtype=np.bool_)
        bits = np.unpackbits(self._words, axis=1, count=self._rows, bitorder="little")
        return np.ascontiguousarray(bits.T, dtype=np.bool_)

    @classmethod
    def from_dense(cls, array: np.ndarray) -> PackedBoolMatrix:
        array = np.asarray(array, dtype=np.bool_)
        rows, cols = array.shape
        words = np.zeros((cols, (rows + 7) // 8), dtype=np.uint8)
        if cols and rows:
            words[:] = np.packbits(array.T, axis=1, bitorder="little")
        return cls(words, rows)


class PackedBoolVector(BoolVector):
    def __init__(self, data: np.ndarray, length: int):
        self.data = data
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, i: int) -> bool:
        return bool((self.data[i >> 3] >> (i & 7)) & 1)

    def __setitem__(self, i: int, value: bool) -> None:
        mask = np.uint8(1 << (i & 7))
        if value:
            self.data[i >> 3] |= mask
        else:
            self.data[i >> 3] &= ~mask

    def bits(self) -> np.ndarray:
        return _unpack(self.data, self._length)

    @classmethod
    def from_dense(cls, array: np.ndarray) -> PackedBoolVector:
        array = np.asarray(array, dtype=np.bool_)
        return cls(_pack(array), array.shape[0])


# ---------------------------------------------------------------------------
# Strategy registry ---------------------------------------------------------
@dataclass(frozen=True)
class StorageStrategy:
    name: str
    matrix: Type[BoolMatrix]
    vector: Type[BoolVector]


STORAGE_STRATEGIES = {
    "dense": StorageStrategy("dense", DenseBoolMatrix, DenseBoolVector),
    "bitpacked": StorageStrategy("bitpacked", PackedBoolMatrix, PackedBoolVector),
}


def get_storage(name: str) -> StorageStrategy:
    """Look up a storage strategy by name."""
    try:
        return STORAGE_STRATEGIES[name]
    except (KeyError, TypeError):
        raise InvalidArgumentError(
            f"storage must be one of {sorted(STORAGE_STRATEGIES)}, got {name!r}"
        ) from None
