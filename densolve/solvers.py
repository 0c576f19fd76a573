# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Single-call direct solvers.

Each wrapper pairs a factorization with the matching substitutions:

- `solve_ge`  : Gaussian elimination + back substitution
- `solve_lu`  : LU factorization + forward/back substitution, factors kept
- `solve_spd` : Cholesky + forward/back substitution
- `solve_tridiagonal` : Thomas algorithm on the three diagonals

Gaussian elimination is the natural choice for a one-off solve. When the
same matrix meets several right-hand sides, keep the `LUFactorization`
returned by `solve_lu` and call its `solve` method; each further solve
then costs O(n^2) instead of O(n^3).
"""

import logging
from typing import Tuple

from .cholesky import cholesky
from .containers import Matrix, Vector, as_matrix, as_vector
from .elimination import (
    LUFactorization,
    PivotStrategy,
    _check_system,
    back_substitute,
    eliminate,
    forward_substitute,
    lu,
)
from .exceptions import DimensionError, SingularMatrixError

logger = logging.getLogger(__name__)


def solve_ge(A, b, pivot=PivotStrategy.NONE) -> Vector:
    """Solve Ax = b by eliminating copies of A and b, then back substituting."""
    U = as_matrix(A, copy=True)
    U.pivoted = False
    c = as_vector(b, copy=True)
    _check_system(U, len(c))
    logger.debug(f"solve_ge: n={U.rows}, pivot={PivotStrategy.coerce(pivot).name}")
    eliminate(U, c, pivot)
    return back_substitute(U, c)


def solve_lu(A, b, pivot=PivotStrategy.NONE) -> Tuple[Vector, LUFactorization]:
    """
    Solve Ax = b through an LU factorization of a copy of A.

    Returns
    -------
    x : Vector
    factors : LUFactorization
        Reusable for further right-hand sides via ``factors.solve(b2)``.
    """
    A = as_matrix(A, copy=False)
    c = as_vector(b, copy=True)
    _check_system(A, len(c))
    logger.debug(f"solve_lu: n={A.rows}, pivot={PivotStrategy.coerce(pivot).name}")
    # c is permuted along with the rows of the factor
    factors = lu(A, c, pivot)
    y = forward_substitute(factors.LU, c, unit_diagonal=True)
    return back_substitute(factors.LU, y), factors


def solve_spd(A, b, overwrite_a: bool = True) -> Vector:
    """
    Solve Ax = b for symmetric positive definite A via A = G G^T.

    By default a Matrix argument is overwritten with its Cholesky factor;
    pass ``overwrite_a=False`` (or a copy) to keep it.

    Raises
    ------
    NotSymmetricError, NotPositiveDefiniteError
    """
    c = as_vector(b, copy=False)
    M = A if isinstance(A, Matrix) else as_matrix(A)
    _check_system(M, len(c))
    logger.debug(f"solve_spd: n={M.rows}")
    G = cholesky(M, overwrite_a=overwrite_a).unwrap()
    y = forward_substitute(G, c)
    return back_substitute(G, y)


_METHODS = ("ge", "lu", "spd")


def solve(A, b, method: str = "lu", pivot=PivotStrategy.PARTIAL) -> Vector:
    """
    Solve Ax = b with the chosen direct method, leaving A and b untouched.

    Parameters
    ----------
    method : {"ge", "lu", "spd"}
    pivot : PivotStrategy | int | str
        Ignored by "spd", which never pivots.
    """
    method = method.lower()
    if method == "ge":
        return solve_ge(A, b, pivot)
    if method == "lu":
        return solve_lu(A, b, pivot)[0]
    if method == "spd":
        return solve_spd(A, b, overwrite_a=False)
    raise ValueError(f"unknown method {method!r}, expected one of {_METHODS}")


def solve_tridiagonal(lower, main, upper, b) -> Vector:
    """
    Solve a tridiagonal system with the Thomas algorithm in O(n).

    All four arguments have length n; ``lower[0]`` and ``upper[n-1]`` lie
    outside the matrix and are ignored. No pivoting is done, so the
    system should be diagonally dominant.
    """
    lo = as_vector(lower, copy=False).data
    mid = as_vector(main, copy=False).data
    up = as_vector(upper, copy=True).data
    x = as_vector(b, copy=True).data
    n = x.shape[0]
    if not lo.shape[0] == mid.shape[0] == up.shape[0] == n:
        raise DimensionError("all diagonals must have the length of b")
    if n == 0:
        return Vector()

    # forward sweep: normalise each row so the diagonal becomes one
    for i in range(n):
        denom = mid[i] - (lo[i] * up[i - 1] if i > 0 else 0.0)
        if denom == 0.0:
            raise SingularMatrixError(f"zero pivot in row {i}", index=i)
        if i < n - 1:
            up[i] /= denom
        x[i] = (x[i] - (lo[i] * x[i - 1] if i > 0 else 0.0)) / denom

    for i in range(n - 2, -1, -1):
        x[i] -= up[i] * x[i + 1]
    return Vector.from_array(x, copy=False)
