# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Tuple

import numpy as np

from .containers import Matrix, Vector, as_matrix, as_vector
from .elimination import back_substitute
from .exceptions import DimensionError, RankDeficientError
from .utils import scale_tol

logger = logging.getLogger(__name__)


def qr(A, reorth: bool = False) -> Tuple[Matrix, Matrix]:
    """
    Modified Gram-Schmidt orthogonalization (QR decomposition)
    Parameters:
    A : Matrix | array-like   (m, n), m >= n
        Full column rank input matrix.
    reorth : bool
        Run a second Gram-Schmidt pass to recover orthogonality
    Returns:
    Q : Matrix
        Orthonormal column matrix (m, n)
    R : Matrix
        Upper-triangular matrix (n, n)
    Raises:
    RankDeficientError
        A column is numerically dependent on the ones before it.
    """
    A = as_matrix(A, copy=True).data
    m, n = A.shape
    if m < n:
        raise DimensionError(
            f"qr needs at least as many rows as columns, got {A.shape}"
        )
    tol = scale_tol(A)
    Q = np.zeros_like(A)
    R = np.zeros((n, n))

    def _mgs(V):
        for j in range(n):
            v = V[:, j].copy()
            # project out each earlier column from the running vector
            for k in range(j):
                R[k, j] = Q[:, k] @ v
                v -= R[k, j] * Q[:, k]
            R[j, j] = np.linalg.norm(v)
            if R[j, j] <= tol:
                raise RankDeficientError(
                    f"column {j} is linearly dependent on the previous columns",
                    column=j,
                )
            Q[:, j] = v / R[j, j]
        return Q.copy()

    Q = _mgs(A)
    if reorth:
        # the second pass overwrites R; recover it from A
        Q = _mgs(Q)
        R = np.triu(Q.T @ A)

    return Matrix.from_array(Q, copy=False), Matrix.from_array(R, copy=False)


def least_squares_qr(A, b) -> Vector:
    """
    Solve min ||Ax - b||_2 using a thin QR factorisation (A = QR).

    With Q^T Q = I the normal equations collapse to R x = Q^T b, which is
    solved by back substitution.

    Returns:
    x : Vector (n,)
        The least squares solution to Ax = b
    """
    A = as_matrix(A, copy=False)
    c = as_vector(b, copy=False)
    if len(c) != A.rows:
        raise DimensionError(f"b has length {len(c)}, expected {A.rows}")
    Q, R = qr(A)
    y = Vector.from_array(Q.data.T @ c.data, copy=False)
    logger.debug(f"least_squares_qr: {A.rows}x{A.cols} system")
    return back_substitute(R, y)
