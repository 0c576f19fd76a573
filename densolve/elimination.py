# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Gaussian elimination, LU factorization and triangular substitution.

The destructive entry points (`eliminate`, `lu(..., overwrite_a=True)`)
work on the caller's storage; everything else copies first.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .containers import Matrix, Vector, as_matrix, as_vector
from .exceptions import DimensionError, SingularMatrixError

logger = logging.getLogger(__name__)


class PivotStrategy(enum.IntEnum):
    """Row-exchange rule applied before each elimination step."""

    NONE = 0
    PARTIAL = 1
    SCALED = 2

    @classmethod
    def coerce(cls, value) -> "PivotStrategy":
        """Accept a member, its integer value or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key in ("SCALED_PARTIAL", "SCALED_PARTIAL_PIVOTING"):
                key = "SCALED"
            try:
                return cls[key]
            except KeyError:
                raise ValueError(f"unknown pivot strategy {value!r}") from None
        return cls(value)


def _rhs_buffer(b) -> np.ndarray:
    """
    Return an array whose writes reach `b`: the live view of a Vector or a
    writeable 1-D float64 ndarray itself. Anything else would be updated
    through a private copy, leaving the caller with an unreduced `b`.
    """
    if isinstance(b, Vector):
        return b.data
    if (
        isinstance(b, np.ndarray)
        and b.dtype == np.float64
        and b.ndim == 1
        and b.flags.writeable
    ):
        return b
    raise TypeError(
        "b is updated in place and must be a Vector or a writeable 1-D "
        f"float64 ndarray, got {type(b).__name__}"
    )


def _reduce(
    A: Matrix,
    pivot: PivotStrategy,
    rhs: Optional[np.ndarray] = None,
    update_rhs: bool = True,
    keep_multipliers: bool = False,
    perm: Optional[List[int]] = None,
) -> None:
    """
    Shared elimination loop.

    With `keep_multipliers` the multiplier l_ik is left in A[i, k] (LU
    packing); otherwise the entry is zeroed. `rhs` always follows the row
    swaps and, when `update_rhs` is set, the row updates too.
    """
    n = A.rows
    M = A.data
    scales = A.row_scales() if pivot is PivotStrategy.SCALED else None

    for k in range(n - 1):
        if pivot is not PivotStrategy.NONE:
            if pivot is PivotStrategy.PARTIAL:
                p = A.find_pivot(k)
            else:
                p = A.find_scaled_pivot(k, scales)
            if p != k:
                A.swap_rows(k, p)
                # the scales belong to rows, not positions
                if scales is not None:
                    scales[[k, p]] = scales[[p, k]]
                if rhs is not None:
                    rhs[[k, p]] = rhs[[p, k]]
                if perm is not None:
                    perm[k], perm[p] = perm[p], perm[k]

        piv = M[k, k]
        if piv == 0.0:
            raise SingularMatrixError(f"zero pivot in column {k}", index=k)

        factors = M[k + 1 :, k] / piv
        M[k + 1 :, k + 1 :] -= factors[:, None] * M[k, k + 1 :]
        M[k + 1 :, k] = factors if keep_multipliers else 0.0
        if rhs is not None and update_rhs:
            rhs[k + 1 :] -= factors * rhs[k]


def _check_system(A: Matrix, n_rhs: Optional[int] = None) -> None:
    if not A.is_square():
        raise DimensionError(f"a square matrix is required, got {A.shape}")
    if n_rhs is not None and n_rhs != A.rows:
        raise DimensionError(
            f"right-hand side has length {n_rhs}, expected {A.rows}"
        )


def eliminate(A: Matrix, b, pivot=PivotStrategy.NONE) -> None:
    """
    Reduce A to upper-triangular form in place.

    Every row swap and row update is applied to `b` as well, so afterwards
    ``back_substitute(A, b)`` solves the original system. Both arguments
    are overwritten; pass copies to keep the originals.

    Parameters
    ----------
    A : Matrix                    (n, n)
        Coefficient matrix, overwritten with U. Its `pivoted` flag is set
        if any rows were exchanged.
    b : Vector | np.ndarray       (n,)
        Right-hand side, overwritten with the reduced right-hand side.
        Must be a Vector or a writeable float64 ndarray; anything else
        raises TypeError.
    pivot : PivotStrategy | int | str
        NONE uses A[k, k] as it stands; PARTIAL picks the largest |A[i, k]|
        among rows k..n-1; SCALED divides each candidate by the largest
        absolute entry of its row (computed once, before the first step).

    Raises
    ------
    SingularMatrixError : if a pivot is exactly zero.
    TypeError : if A is not a Matrix or b cannot be updated in place.
    """
    if not isinstance(A, Matrix):
        raise TypeError("eliminate works in place and needs a Matrix")
    pivot = PivotStrategy.coerce(pivot)
    rhs = _rhs_buffer(b)
    _check_system(A, rhs.shape[0])
    logger.debug(f"eliminating {A.rows}x{A.cols} system, pivot={pivot.name}")
    _reduce(A, pivot, rhs=rhs)


def gaussian_eliminate(A, b, pivot=PivotStrategy.NONE) -> Tuple[Matrix, Vector]:
    """Non-destructive `eliminate`: returns the reduced copies (U, c)."""
    U = as_matrix(A, copy=True)
    U.pivoted = False
    c = as_vector(b, copy=True)
    eliminate(U, c, pivot)
    return U, c


@dataclass
class LUFactorization:
    """
    Packed LU factors of a row-permuted square matrix, P A = L U.

    Attributes
    ----------
    LU : Matrix
        Strictly-lower part holds the multipliers of L (whose diagonal is
        implicitly one); the upper triangle, diagonal included, is U.
    perm : list[int]
        Row i of LU comes from original row perm[i].
    """

    LU: Matrix
    perm: List[int]

    @property
    def n(self) -> int:
        return self.LU.rows

    @property
    def pivoted(self) -> bool:
        return self.LU.pivoted

    def lower(self) -> Matrix:
        return Matrix.from_array(np.tril(self.LU.data, -1) + np.eye(self.n), False)

    def upper(self) -> Matrix:
        return Matrix.from_array(np.triu(self.LU.data), copy=False)

    def permutation_matrix(self) -> Matrix:
        return Matrix.from_array(np.eye(self.n)[self.perm], copy=False)

    def solve(self, b) -> Vector:
        """Solve A x = b reusing the stored factors."""
        c = as_vector(b, copy=False)
        if len(c) != self.n:
            raise DimensionError(
                f"right-hand side has length {len(c)}, expected {self.n}"
            )
        c = Vector.from_array(c.data[self.perm], copy=False)
        y = forward_substitute(self.LU, c, unit_diagonal=True)
        return back_substitute(self.LU, y)


def lu(A, b=None, pivot=PivotStrategy.NONE, overwrite_a=False) -> LUFactorization:
    """
    Factor a square matrix into packed L and U.

    Parameters
    ----------
    A : Matrix | array-like       (n, n)
    b : Vector | np.ndarray | None
        Optional right-hand side, permuted in place to follow the row
        exchanges but never reduced. Same type rule as in `eliminate`.
    pivot : PivotStrategy | int | str
    overwrite_a : bool
        Factor the caller's Matrix in place instead of a copy.

    Returns
    -------
    LUFactorization
    """
    pivot = PivotStrategy.coerce(pivot)
    if overwrite_a and isinstance(A, Matrix):
        LU = A
    else:
        LU = as_matrix(A, copy=True)
        LU.pivoted = False
    rhs = None if b is None else _rhs_buffer(b)
    _check_system(LU, None if rhs is None else rhs.shape[0])

    perm = list(range(LU.rows))
    logger.debug(f"LU factoring {LU.rows}x{LU.cols} matrix, pivot={pivot.name}")
    _reduce(
        LU, pivot, rhs=rhs, update_rhs=False, keep_multipliers=True, perm=perm
    )
    return LUFactorization(LU=LU, perm=perm)


def back_substitute(U, b) -> Vector:
    """
    Solve U x = b for upper-triangular U.

        x_k = (b_k - sum_{j>k} U_kj x_j) / U_kk,   k = n-1, ..., 0

    Only the upper triangle of U is read, so a packed LU matrix or a
    symmetric-filled Cholesky factor can be passed directly.

    Raises
    ------
    SingularMatrixError : if a diagonal entry is exactly zero.
    """
    U = as_matrix(U, copy=False)
    c = as_vector(b, copy=False).data
    _check_system(U, c.shape[0])
    M = U.data

    n = c.shape[0]
    x = np.zeros(n, dtype=float)
    for k in reversed(range(n)):
        if M[k, k] == 0.0:
            raise SingularMatrixError(f"zero diagonal entry in row {k}", index=k)
        x[k] = (c[k] - M[k, k + 1 :] @ x[k + 1 :]) / M[k, k]
    return Vector.from_array(x, copy=False)


def forward_substitute(L, b, unit_diagonal: bool = False) -> Vector:
    """
    Solve L x = b for lower-triangular L.

        x_k = (b_k - sum_{j<k} L_kj x_j) / L_kk,   k = 0, ..., n-1

    With `unit_diagonal` the diagonal is taken to be all ones, which is how
    the L of a packed LU matrix is stored.
    """
    L = as_matrix(L, copy=False)
    c = as_vector(b, copy=False).data
    _check_system(L, c.shape[0])
    M = L.data

    n = c.shape[0]
    x = np.zeros(n, dtype=float)
    for k in range(n):
        s = c[k] - M[k, :k] @ x[:k]
        if unit_diagonal:
            x[k] = s
            continue
        if M[k, k] == 0.0:
            raise SingularMatrixError(f"zero diagonal entry in row {k}", index=k)
        x[k] = s / M[k, k]
    return Vector.from_array(x, copy=False)
