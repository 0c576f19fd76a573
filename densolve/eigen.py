# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional

import numpy as np

from .containers import Matrix, Vector, as_matrix, as_vector
from .elimination import PivotStrategy, lu
from .exceptions import DegenerateVectorError, DimensionError
from .iterative import IterationInfo, _check_budget
from .utils import DEFAULT_MAX_ITER, DEFAULT_TOL, resolve_rng

logger = logging.getLogger(__name__)


def _square(A) -> Matrix:
    A = as_matrix(A, copy=False)
    if not A.is_square():
        raise DimensionError(
            f"eigenvalue estimates need a square matrix, got {A.shape}"
        )
    return A


def _start_vector(v0, n: int, rng: Optional[np.random.Generator]) -> np.ndarray:
    if v0 is None:
        v = resolve_rng(rng, seed=0).standard_normal(n)
    else:
        v = as_vector(v0, copy=True).data
        if v.shape != (n,):
            raise DimensionError(f"v0 must have shape ({n},), got {v.shape}")
    length = np.linalg.norm(v)
    if length == 0.0:
        raise DegenerateVectorError("the starting vector must be non-zero")
    return v / length


def _finish(name, lam, v, iters, error, tol, return_info):
    converged = bool(error <= tol)
    if not converged:
        logger.warning(
            f"{name} stopped after {iters} iterations without reaching "
            f"tol={tol:g} (error {error:.3e})"
        )
    v = Vector.from_array(v, copy=False)
    if return_info:
        return float(lam), v, IterationInfo(iters, float(error), converged)
    return float(lam), v


def power_method(
    A,
    v0=None,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    rng: Optional[np.random.Generator] = None,
    return_info: bool = False,
):
    """
    Estimate the dominant eigenvalue (by magnitude) and its eigenvector
    using the Power Method.

    Each step applies A to the current unit vector, normalises the
    result and takes the Rayleigh quotient v_k . (A v_k) as the new
    estimate. The product A v_k is carried over to the next step, so one
    matrix-vector product is made per iteration. Stops when
    |lambda_k - lambda_{k-1}| <= `tol` or when `max_iter` is reached.

    Parameters
    ----------
    A : (n,n) Matrix | array-like
        Real square matrix.
    v0 : (n,) Vector | array-like | None
        Initial guess; needs a non-zero component along the dominant
        eigenvector. If None, a standard normal vector is drawn from `rng`.
    tol : float
        Convergence tolerance on successive eigenvalue estimates.
    max_iter : int
        Maximum number of iterations.
    rng : numpy.random.Generator | None
        Source of the random start (seeded with 0 if None).
    return_info : bool
        If True, also return an `IterationInfo`.

    Returns
    -------
    lam : float
        Estimated dominant eigenvalue.
    v : Vector (n,)
        Corresponding eigenvector (unit norm).
    info : IterationInfo, optional
    """
    _check_budget(tol, max_iter)
    A = _square(A)
    M = A.data
    v = _start_vector(v0, A.rows, rng)

    lam = 0.0
    lam_prev = np.inf
    error = np.inf
    iters = 0
    w = M @ v
    while iters < max_iter and error > tol:
        norm_w = np.linalg.norm(w)
        if norm_w == 0.0:
            # A maps v to zero, so v is an eigenvector for 0
            logger.warning("power_method: A v vanished, returning eigenvalue 0")
            lam, error = 0.0, 0.0
            break
        v = w / norm_w
        w = M @ v
        lam = v @ w  # Rayleigh quotient
        error = abs(lam - lam_prev)
        lam_prev = lam
        iters += 1

    return _finish("power_method", lam, v, iters, error, tol, return_info)


def shift(A, alpha: float) -> Matrix:
    """Return A - alpha I as a new matrix."""
    shifted = as_matrix(A, copy=True)
    if not shifted.is_square():
        raise DimensionError(
            f"only square matrices can be shifted, got {shifted.shape}"
        )
    shifted.pivoted = False
    shifted.data[np.diag_indices(shifted.rows)] -= alpha
    return shifted


def inverse_power_method(
    A,
    v0=None,
    alpha: float = 0.0,
    tol: float = DEFAULT_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    pivot=PivotStrategy.PARTIAL,
    rng: Optional[np.random.Generator] = None,
    return_info: bool = False,
):
    """
    Estimate the eigenvalue of A closest to `alpha` and its eigenvector.

    A - alpha I is LU-factored once; every iteration then solves
    (A - alpha I) w = v_{k-1} with a forward and a back substitution,
    which applies (A - alpha I)^-1 without forming it. The eigenvalue of
    the unshifted A is read off the Rayleigh quotient v_k . (A v_k).
    With the default ``alpha=0`` this finds the eigenvalue of smallest
    magnitude. The caller's A is never modified.

    Raises
    ------
    SingularMatrixError : if alpha is exactly an eigenvalue of A.
    """
    _check_budget(tol, max_iter)
    A = _square(A)
    M = A.data
    v = _start_vector(v0, A.rows, rng)
    factors = lu(shift(A, alpha), pivot=pivot, overwrite_a=True)
    logger.debug(f"inverse_power_method: n={A.rows}, alpha={alpha}")

    lam = 0.0
    lam_prev = np.inf
    error = np.inf
    iters = 0
    while iters < max_iter and error > tol:
        w = factors.solve(v).data
        v = w / np.linalg.norm(w)
        lam = v @ (M @ v)
        error = abs(lam - lam_prev)
        lam_prev = lam
        iters += 1

    return _finish("inverse_power_method", lam, v, iters, error, tol, return_info)
