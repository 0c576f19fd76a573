# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import enum
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .containers import Matrix, as_matrix
from .exceptions import NotPositiveDefiniteError, NotSymmetricError
from .utils import scale_tol

logger = logging.getLogger(__name__)


class CholeskyStatus(enum.Enum):
    OK = "ok"
    NOT_SYMMETRIC = "not symmetric"
    NOT_POSITIVE_DEFINITE = "not positive definite"


@dataclass(frozen=True)
class CholeskyResult:
    """
    Outcome of `cholesky`: either the factor or the reason there is none.

    Attributes
    ----------
    status : CholeskyStatus
    factor : Matrix | None
        G with A = G G^T, lower triangle mirrored into the upper one so a
        single matrix serves forward and back substitution. None on failure.
    index : int | None
        Column where positive definiteness broke down.
    """

    status: CholeskyStatus
    factor: Optional[Matrix] = None
    index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status is CholeskyStatus.OK

    def unwrap(self) -> Matrix:
        """Return the factor, raising the matching error if there is none."""
        if self.status is CholeskyStatus.NOT_SYMMETRIC:
            raise NotSymmetricError("Matrix not symmetric in Cholesky decomposition")
        if self.status is CholeskyStatus.NOT_POSITIVE_DEFINITE:
            raise NotPositiveDefiniteError(
                "Matrix not positive definite in Cholesky decomposition "
                f"(column {self.index})",
                index=self.index,
            )
        return self.factor


def cholesky(A, overwrite_a: bool = False) -> CholeskyResult:
    """
    Cholesky decomposition A = G G^T of a symmetric positive definite matrix.

    For each column k: A_kk <- sqrt(A_kk), the entries below it are divided
    by the new diagonal, and the trailing block takes the rank-1 downdate
    A_ij -= A_ik A_jk. A diagonal that is NaN or not strictly positive
    before its square root means A is not positive definite.

    With `overwrite_a` the caller's Matrix receives the factor (and is left
    partially reduced if the decomposition fails).
    """
    G = as_matrix(A, copy=not (overwrite_a and isinstance(A, Matrix)))
    if not G.is_symmetric(tol=scale_tol(G.data) if G.is_square() else 0.0):
        logger.debug(f"cholesky: {G.shape} matrix is not symmetric")
        return CholeskyResult(CholeskyStatus.NOT_SYMMETRIC)

    M = G.data
    n = G.rows
    for k in range(n):
        d = M[k, k]
        # catches NaN as well as d <= 0
        if not d > 0.0:
            logger.debug(f"cholesky: non-positive pivot {d} in column {k}")
            return CholeskyResult(CholeskyStatus.NOT_POSITIVE_DEFINITE, index=k)
        M[k, k] = np.sqrt(d)
        M[k + 1 :, k] /= M[k, k]
        col = M[k + 1 :, k]
        M[k + 1 :, k + 1 :] -= np.outer(col, col)

    # reflect G across the diagonal
    lower = np.tril(M)
    M[...] = lower + np.tril(lower, -1).T
    return CholeskyResult(CholeskyStatus.OK, factor=G)


def is_spd(A) -> bool:
    """True when A has a Cholesky factorization, i.e. A is s.p.d."""
    return cholesky(A).ok
