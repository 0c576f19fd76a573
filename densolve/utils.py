# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Optional

import numpy as np

from .containers import Matrix

EPS: float = 1e-12
DEFAULT_TOL: float = 1e-10
DEFAULT_MAX_ITER: int = 10_000


def scale_tol(A) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    A = np.asarray(A, dtype=float)
    if A.size == 0:
        return EPS
    return EPS * max(1.0, np.linalg.norm(A, ord=np.inf))


def resolve_rng(
    rng: Optional[np.random.Generator] = None, seed: Optional[int] = None
) -> np.random.Generator:
    """Use the generator the caller injected, else build one from `seed`."""
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def random_diagonally_dominant(n, rng=None, seed=None):
    """
    Build a strictly diagonally dominant n-by-n Matrix.

    Off-diagonal entries are uniform on [0, 1). The diagonal entry of row i
    is 10 * i + U[0, 1) plus the sum of the row's off-diagonal entries, so
    Jacobi and Gauss-Seidel are guaranteed to converge on it.
    """
    gen = resolve_rng(rng, seed)
    A = gen.uniform(0.0, 1.0, size=(n, n))
    np.fill_diagonal(A, 0.0)
    off = A.sum(axis=1)
    diag = 10.0 * np.arange(n) + gen.uniform(0.0, 1.0, size=n)
    A[np.diag_indices(n)] = diag + off
    return Matrix.from_array(A)


def random_spd(n, rng=None, seed=None):
    """
    Build a symmetric positive definite n-by-n Matrix.

    Off-diagonal entries are drawn from (-1, 0] and mirrored; each diagonal
    entry exceeds its row's absolute off-diagonal sum by 1 + U[0, 1). A
    symmetric, strictly diagonally dominant matrix with a positive
    diagonal is SPD (Gershgorin), so every solver in the package applies.
    """
    gen = resolve_rng(rng, seed)
    S = np.triu(-gen.uniform(0.0, 1.0, size=(n, n)), k=1)
    A = S + S.T
    off = np.abs(A).sum(axis=1)
    A[np.diag_indices(n)] = off + 1.0 + gen.uniform(0.0, 1.0, size=n)
    return Matrix.from_array(A, copy=False)


def random_nonsingular_upper(n, low=-100, high=100, rng=None, seed=None):
    """
    Build a Matrix U that is upper-triangular with random entries
    everywhere and put only non-zero values on its diagonal
    """
    gen = resolve_rng(rng, seed)
    U = np.triu(gen.uniform(low, high, size=(n, n)))
    # replace any accidental zeros on the diagonal
    diag = gen.uniform(1.0, high, size=n) * gen.choice([-1.0, 1.0], size=n)
    U[np.diag_indices(n)] = diag
    return Matrix.from_array(U)
