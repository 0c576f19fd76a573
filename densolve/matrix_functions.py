# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .containers import Matrix, Vector, as_matrix, as_vector
from .elimination import PivotStrategy, lu
from .exceptions import DimensionError
from .solvers import solve_spd
from .vectors import gram, matvec

logger = logging.getLogger(__name__)


def inverse(A, pivot=PivotStrategy.PARTIAL) -> Matrix:
    """
    Inverse of a square matrix A from a single LU factorization.

    The k-th column of A^-1 solves A x = e_k, so each unit vector goes
    through one forward and one back substitution against the same
    factors.
    """
    factors = lu(A, pivot=pivot)
    n = factors.n
    Ainv = np.empty((n, n))
    for k in range(n):
        e_k = np.zeros(n)
        e_k[k] = 1.0
        Ainv[:, k] = factors.solve(e_k).data
    return Matrix.from_array(Ainv, copy=False)


def kappa(A, norm="one") -> float:
    """
    Condition number k(A) = ||A|| * ||A^-1||.

    Parameters
    ----------
    norm : {"one", 1, "inf", numpy.inf}
        Induced matrix norm: maximum column sum or maximum row sum.
    """
    if norm in ("one", 1):
        measure = Matrix.one_norm
    elif norm in ("inf", "infinity", np.inf):
        measure = Matrix.infinity_norm
    else:
        raise ValueError(f"unsupported norm {norm!r}")
    A = as_matrix(A, copy=False)
    return measure(A) * measure(inverse(A))


def least_squares(A, b) -> Vector:
    """
    Solve min ||Ax - b||_2 through the normal equations A^T A x = A^T b.

    A^T A is symmetric positive definite when A has full column rank, so
    the system is handed to the Cholesky solver. Squaring A squares its
    condition number; `least_squares_qr` avoids that.
    """
    A = as_matrix(A, copy=False)
    c = as_vector(b, copy=False)
    if len(c) != A.rows:
        raise DimensionError(f"b has length {len(c)}, expected {A.rows}")
    B = gram(A)
    y = matvec(A, c, transpose=True)
    logger.debug(f"least_squares: normal equations of size {B.rows}")
    return solve_spd(B, y)
