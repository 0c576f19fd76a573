# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Vector and matrix arithmetic as plain functions.

Nothing here is overloaded onto the containers: every function takes its
operands explicitly and returns a fresh `Vector` or `Matrix`, so no
result ever aliases an input.
"""

import numpy as np

from .containers import Matrix, Vector, as_matrix, as_vector
from .exceptions import DegenerateVectorError, DimensionError


def _pair(u, v):
    u = as_vector(u, copy=False)
    v = as_vector(v, copy=False)
    if len(u) != len(v):
        raise DimensionError(
            f"vectors must have the same length, got {len(u)} and {len(v)}"
        )
    return u.data, v.data


def add(u, v) -> Vector:
    a, b = _pair(u, v)
    return Vector.from_array(a + b, copy=False)


def subtract(u, v) -> Vector:
    a, b = _pair(u, v)
    return Vector.from_array(a - b, copy=False)


def scale(alpha: float, v) -> Vector:
    return Vector.from_array(alpha * as_vector(v, copy=False).data, copy=False)


def dot(u, v) -> float:
    a, b = _pair(u, v)
    return float(a @ b)


def norm(v) -> float:
    """Euclidean length ||v||_2."""
    return float(np.linalg.norm(as_vector(v, copy=False).data))


def one_norm(v) -> float:
    return float(np.abs(as_vector(v, copy=False).data).sum())


def infinity_norm(v) -> float:
    return float(np.abs(as_vector(v, copy=False).data).max(initial=0.0))


def normalize(v) -> Vector:
    """Return v / ||v||_2; a zero vector has no direction and is rejected."""
    v = as_vector(v, copy=False)
    length = norm(v)
    if length == 0.0:
        raise DegenerateVectorError("cannot normalize the zero vector")
    return Vector.from_array(v.data / length, copy=False)


def matvec(A, x, transpose: bool = False) -> Vector:
    """A @ x, or A^T @ x when `transpose` is set."""
    A = as_matrix(A, copy=False)
    x = as_vector(x, copy=False)
    M = A.data.T if transpose else A.data
    if M.shape[1] != len(x):
        raise DimensionError(
            f"cannot multiply a {M.shape} matrix by a length-{len(x)} vector"
        )
    return Vector.from_array(M @ x.data, copy=False)


def matmul(A, B) -> Matrix:
    A = as_matrix(A, copy=False)
    B = as_matrix(B, copy=False)
    if A.cols != B.rows:
        raise DimensionError(f"cannot multiply {A.shape} by {B.shape}")
    return Matrix.from_array(A.data @ B.data, copy=False)


def transpose(A) -> Matrix:
    return Matrix.from_array(as_matrix(A, copy=False).data.T)


def gram(A) -> Matrix:
    """A^T A, the matrix of the normal equations."""
    M = as_matrix(A, copy=False).data
    return Matrix.from_array(M.T @ M, copy=False)


def tridiagonal_matvec(lower, main, upper, x) -> Vector:
    """
    Multiply the tridiagonal matrix given by its three diagonals by x.

    All four arguments have length n; ``lower[0]`` and ``upper[n-1]`` fall
    outside the matrix and are ignored.
    """
    lo = as_vector(lower, copy=False).data
    mid = as_vector(main, copy=False).data
    up = as_vector(upper, copy=False).data
    xs = as_vector(x, copy=False).data
    n = xs.shape[0]
    if not lo.shape[0] == mid.shape[0] == up.shape[0] == n:
        raise DimensionError("all diagonals must have the length of x")

    b = mid * xs
    b[1:] += lo[1:] * xs[:-1]
    b[:-1] += up[:-1] * xs[1:]
    return Vector.from_array(b, copy=False)
