# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense containers
================

`Vector` is a growable, random-access sequence of floats and `Matrix` a
fixed-shape 2-D array. Both keep their values in a NumPy buffer so the
numerical routines can work on whole rows and columns at once, while
index checks stay strict: negative indices are rejected instead of
wrapping around.
"""

import operator
from typing import Iterable, Optional, Tuple

import numpy as np

from .exceptions import DimensionError


def _check_index(i, size: int, what: str = "index") -> int:
    i = operator.index(i)
    if not 0 <= i < size:
        raise IndexError(f"{what} {i} out of range for size {size}")
    return i


class Vector:
    """
    Mutable sequence of floats with amortised O(1) `append`.

    The backing buffer keeps spare capacity; only the first ``len(v)``
    entries are live. `data` exposes those live entries as a NumPy view,
    so writes through it land in the vector.
    """

    def __init__(self, size: int = 0, fill: float = 0.0):
        size = operator.index(size)
        if size < 0:
            raise ValueError("Vector size must be non-negative")
        self._buf = np.full(size, fill, dtype=float)
        self._size = size

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector":
        return cls.from_array(np.fromiter((float(v) for v in values), dtype=float))

    @classmethod
    def from_array(cls, arr, copy: bool = True) -> "Vector":
        arr = np.asarray(arr, dtype=float)
        if arr.ndim != 1:
            raise DimensionError(f"Vector needs 1-D data, got shape {arr.shape}")
        v = cls.__new__(cls)
        v._buf = arr.copy() if copy else arr
        v._size = arr.shape[0]
        return v

    @property
    def data(self) -> np.ndarray:
        return self._buf[: self._size]

    @property
    def capacity(self) -> int:
        return self._buf.shape[0]

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, i) -> float:
        return float(self._buf[_check_index(i, self._size)])

    def __setitem__(self, i, value: float) -> None:
        self._buf[_check_index(i, self._size)] = value

    def __iter__(self):
        return iter(self.data.tolist())

    def append(self, value: float) -> None:
        if self._size == self.capacity:
            # 0 -> 2 -> 4 -> 8 ...
            grown = np.zeros(max(2, 2 * self.capacity), dtype=float)
            grown[: self._size] = self.data
            self._buf = grown
        self._buf[self._size] = value
        self._size += 1

    def pop(self) -> float:
        if self._size == 0:
            raise IndexError("pop from empty Vector")
        self._size -= 1
        return float(self._buf[self._size])

    def swap(self, i: int, j: int) -> None:
        i = _check_index(i, self._size)
        j = _check_index(j, self._size)
        self._buf[i], self._buf[j] = self._buf[j], self._buf[i]

    def copy(self) -> "Vector":
        return Vector.from_array(self.data)

    def to_numpy(self) -> np.ndarray:
        return self.data.copy()

    def __array__(self, dtype=None, copy=None):
        out = self.data.copy()
        return out if dtype is None else out.astype(dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.data.tolist()})"


class Matrix:
    """
    Dense real matrix with a fixed number of rows and columns.

    Besides element access the matrix answers the row queries elimination
    needs (pivot search, row scales, symmetry) and remembers whether any
    of its rows were ever exchanged: `pivoted` flips to True on the first
    real swap and is never reset.
    """

    def __init__(self, rows: int, cols: int, fill: float = 0.0):
        rows = operator.index(rows)
        cols = operator.index(cols)
        if rows < 0 or cols < 0:
            raise ValueError("Matrix dimensions must be non-negative")
        self._data = np.full((rows, cols), fill, dtype=float)
        self.pivoted = False

    @classmethod
    def from_array(cls, arr, copy: bool = True) -> "Matrix":
        arr = np.asarray(arr, dtype=float)
        if arr.ndim != 2:
            raise DimensionError(f"Matrix needs 2-D data, got shape {arr.shape}")
        M = cls.__new__(cls)
        M._data = arr.copy() if copy else arr
        M.pivoted = False
        return M

    @classmethod
    def from_rows(cls, rows) -> "Matrix":
        return cls.from_array(np.array(rows, dtype=float), copy=False)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        return cls.from_array(np.eye(n), copy=False)

    @property
    def data(self) -> np.ndarray:
        """The live backing array; writes go straight into the matrix."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    def _check(self, key) -> Tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Matrix entries are addressed as A[row, col]")
        return (
            _check_index(key[0], self.rows, "row"),
            _check_index(key[1], self.cols, "column"),
        )

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return float(self._data[self._check(key)])
        # A[i] returns a copy of row i
        return self._data[_check_index(key, self.rows, "row")].copy()

    def __setitem__(self, key, value: float) -> None:
        self._data[self._check(key)] = value

    def assign(self, other) -> None:
        """Re-seat every entry from `other`, which must have the same shape."""
        src = other.data if isinstance(other, Matrix) else np.asarray(other, float)
        if src.shape != self.shape:
            raise DimensionError(
                f"cannot assign a {src.shape} matrix into a {self.shape} matrix"
            )
        np.copyto(self._data, src)

    def swap_rows(self, r1: int, r2: int) -> None:
        r1 = _check_index(r1, self.rows, "row")
        r2 = _check_index(r2, self.rows, "row")
        if r1 == r2:
            return
        self._data[[r1, r2]] = self._data[[r2, r1]]
        self.pivoted = True

    def row_scales(self) -> np.ndarray:
        """Largest absolute entry of every row."""
        if self.cols == 0:
            return np.zeros(self.rows)
        return np.abs(self._data).max(axis=1)

    def find_pivot(self, k: int) -> int:
        """Row in k..rows-1 holding the largest |A[i, k]|."""
        k = _check_index(k, min(self.rows, self.cols))
        return k + int(np.argmax(np.abs(self._data[k:, k])))

    def find_scaled_pivot(self, k: int, scales: Optional[np.ndarray] = None) -> int:
        """Row in k..rows-1 maximising |A[i, k]| / s[i]."""
        k = _check_index(k, min(self.rows, self.cols))
        if scales is None:
            scales = self.row_scales()
        s = np.asarray(scales, dtype=float)[k:]
        col = np.abs(self._data[k:, k])
        # an all-zero row can never be a useful pivot
        ratio = np.divide(col, s, out=np.zeros_like(col), where=s > 0)
        return k + int(np.argmax(ratio))

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_symmetric(self, tol: float = 0.0) -> bool:
        if not self.is_square():
            return False
        return bool(np.all(np.abs(self._data - self._data.T) <= tol))

    def one_norm(self) -> float:
        """Maximum absolute column sum."""
        return float(np.abs(self._data).sum(axis=0).max(initial=0.0))

    def infinity_norm(self) -> float:
        """Maximum absolute row sum."""
        return float(np.abs(self._data).sum(axis=1).max(initial=0.0))

    def frobenius_norm(self) -> float:
        return float(np.linalg.norm(self._data))

    def copy(self) -> "Matrix":
        M = Matrix.from_array(self._data)
        M.pivoted = self.pivoted
        return M

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        out = self._data.copy()
        return out if dtype is None else out.astype(dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data.tolist()})"


def as_matrix(obj, copy: bool = True) -> Matrix:
    """
    Coerce `obj` to a Matrix.

    A Matrix passed with ``copy=False`` is returned as is, so routines
    documented as destructive can work on the caller's storage.
    """
    if isinstance(obj, Matrix):
        return obj.copy() if copy else obj
    return Matrix.from_array(obj, copy=True)


def as_vector(obj, copy: bool = True) -> Vector:
    """Coerce `obj` to a Vector (same `copy` rule as `as_matrix`)."""
    if isinstance(obj, Vector):
        return obj.copy() if copy else obj
    return Vector.from_array(obj, copy=True)
