# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Iterative solvers for Ax = b.

Jacobi and Gauss-Seidel are relaxation methods: each sweep updates one
component at a time from the row equations, and both converge for
strictly diagonally dominant A. Gauss-Seidel uses the components it has
already updated within the sweep and typically needs about half the
sweeps of Jacobi. The Conjugate Gradient method (CGM) needs A symmetric
positive definite; it builds A-conjugate search directions and usually
converges in far fewer iterations than either relaxation method.

None of the solvers checks its convergence precondition. Running out of
iterations is not an error: the last iterate is returned and a warning
is logged. Pass ``return_info=True`` to inspect the outcome.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .containers import Vector, as_matrix, as_vector
from .elimination import _check_system
from .exceptions import DimensionError, SingularMatrixError
from .utils import DEFAULT_MAX_ITER, DEFAULT_TOL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IterationInfo:
    """
    How an iterative routine finished.

    error is the last step size ||x_{k+1} - x_k|| for the relaxation
    methods, the residual norm ||b - A x|| for CGM and |lambda_k -
    lambda_{k-1}| for the eigenvalue estimators.
    """

    iterations: int
    error: float
    converged: bool


def _check_budget(tol: float, max_iter: int) -> None:
    if not tol > 0:
        raise ValueError(f"tol must be positive, got {tol}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")


def _setup(A, b, x0, tol, max_iter):
    _check_budget(tol, max_iter)
    A = as_matrix(A, copy=False)
    c = as_vector(b, copy=False)
    _check_system(A, len(c))
    n = A.rows
    if x0 is None:
        x = np.zeros(n)
    else:
        x = as_vector(x0, copy=True).data
        if x.shape[0] != n:
            raise DimensionError(f"x0 has length {x.shape[0]}, expected {n}")
    return A.data, c.data, x


def _diagonal(M: np.ndarray) -> np.ndarray:
    d = np.diag(M).copy()
    zero = np.flatnonzero(d == 0.0)
    if zero.size:
        raise SingularMatrixError(
            f"zero diagonal entry in row {zero[0]}", index=int(zero[0])
        )
    return d


def _finish(name, x, iterations, error, converged, tol, return_info):
    if converged:
        logger.debug(f"{name} converged in {iterations} iterations")
    else:
        logger.warning(
            f"{name} stopped after {iterations} iterations without reaching "
            f"tol={tol:g} (error {error:.3e})"
        )
    x = Vector.from_array(x, copy=False)
    if return_info:
        return x, IterationInfo(iterations, float(error), bool(converged))
    return x


def jacobi(
    A,
    b,
    x0=None,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    return_info: bool = False,
):
    """
    Jacobi iteration.

        x_{k+1}[i] = (b[i] - sum_{j != i} A[i, j] x_k[j]) / A[i, i]

    Every component of the new iterate is computed from the previous
    iterate only. Stops once ||x_{k+1} - x_k||_2 <= tol or after
    `max_iter` sweeps.

    Parameters
    ----------
    A : (n, n) Matrix | array-like
        Strictly diagonally dominant for guaranteed convergence (unchecked).
    b : (n,) Vector | array-like
    x0 : (n,) Vector | array-like | None
        Initial guess, zeros if None.
    tol : float
    max_iter : int
    return_info : bool
        If True, also return an `IterationInfo`.

    Returns
    -------
    x : Vector
    info : IterationInfo, optional
    """
    M, c, x = _setup(A, b, x0, tol, max_iter)
    d = _diagonal(M)
    off = M - np.diag(d)

    iters = 0
    error = np.inf
    while iters < max_iter and error > tol:
        x_new = (c - off @ x) / d
        error = np.linalg.norm(x_new - x)
        x = x_new
        iters += 1

    return _finish("jacobi", x, iters, error, error <= tol, tol, return_info)


def gauss_seidel(
    A,
    b,
    x0=None,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    return_info: bool = False,
):
    """
    Gauss-Seidel iteration.

        x_{k+1}[i] = (b[i] - sum_{j<i} A[i, j] x_{k+1}[j]
                           - sum_{j>i} A[i, j] x_k[j]) / A[i, i]

    Same stopping rule and parameters as `jacobi`; the sweep overwrites
    the iterate in place, so later rows see the components already
    updated.
    """
    M, c, x = _setup(A, b, x0, tol, max_iter)
    d = _diagonal(M)
    n = M.shape[0]

    iters = 0
    error = np.inf
    while iters < max_iter and error > tol:
        x_old = x.copy()
        for i in range(n):
            s = M[i, :i] @ x[:i] + M[i, i + 1 :] @ x[i + 1 :]
            x[i] = (c[i] - s) / d[i]
        error = np.linalg.norm(x - x_old)
        iters += 1

    return _finish("gauss_seidel", x, iters, error, error <= tol, tol, return_info)


def cgm(
    A,
    b,
    x0=None,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    return_info: bool = False,
):
    """
    Conjugate Gradient method for symmetric positive definite A.

    Each step moves along the search direction p_k:

        alpha_k = (r_k . r_k) / (p_k . A p_k)
        x_{k+1} = x_k + alpha_k p_k
        r_{k+1} = r_k - alpha_k A p_k
        beta_k  = (r_{k+1} . r_{k+1}) / (r_k . r_k)
        p_{k+1} = r_{k+1} + beta_k p_k

    and stops once ||r||^2 <= tol^2 ||b||^2 or after `max_iter` steps.
    A zero initial residual returns x0 without iterating. Symmetry and
    positive definiteness of A are not checked.
    """
    M, c, x = _setup(A, b, x0, tol, max_iter)

    r = c - M @ x
    p = r.copy()
    delta = r @ r
    target = tol**2 * (c @ c)

    iters = 0
    while delta > target and iters < max_iter:
        s = M @ p
        alpha = delta / (p @ s)
        x = x + alpha * p
        r = r - alpha * s
        delta_new = r @ r
        p = r + (delta_new / delta) * p
        delta = delta_new
        iters += 1

    return _finish(
        "cgm", x, iters, np.sqrt(delta), delta <= target, tol, return_info
    )


def is_diagonally_dominant(A, strict: bool = False) -> bool:
    """
    True when |A[i, i]| >= sum_{j != i} |A[i, j]| for every row (> with
    `strict`).
    """
    M = as_matrix(A, copy=False)
    if not M.is_square():
        return False
    absM = np.abs(M.data)
    diag = np.diag(absM)
    off = absM.sum(axis=1) - diag
    return bool(np.all(diag > off) if strict else np.all(diag >= off))
