# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from densolve.containers import Matrix, Vector
from densolve.exceptions import DegenerateVectorError, DimensionError
from densolve.vectors import (
    add,
    dot,
    gram,
    infinity_norm,
    matmul,
    matvec,
    norm,
    normalize,
    one_norm,
    scale,
    subtract,
    transpose,
    tridiagonal_matvec,
)


def test_elementwise_operations_return_new_vectors():
    u = Vector.from_iterable([1.0, 2.0, 3.0])
    v = Vector.from_iterable([4.0, 5.0, 6.0])

    w = add(u, v)
    assert list(w) == [5.0, 7.0, 9.0]
    assert list(subtract(v, u)) == [3.0, 3.0, 3.0]
    assert list(scale(2.0, u)) == [2.0, 4.0, 6.0]
    # inputs untouched
    assert list(u) == [1.0, 2.0, 3.0]

    w[0] = 0.0
    assert u[0] == 1.0 and v[0] == 4.0


def test_dot_and_norms():
    u = Vector.from_iterable([3.0, -4.0])
    assert dot(u, u) == 25.0
    assert norm(u) == 5.0
    assert one_norm(u) == 7.0
    assert infinity_norm(u) == 4.0


def test_length_mismatch_raises():
    with pytest.raises(DimensionError):
        add([1.0, 2.0], [1.0])
    with pytest.raises(DimensionError):
        dot([1.0], [1.0, 2.0])


def test_normalize():
    v = normalize([0.0, 3.0, 4.0])
    assert math.isclose(norm(v), 1.0)
    np.testing.assert_allclose(np.asarray(v), [0.0, 0.6, 0.8])
    with pytest.raises(DegenerateVectorError):
        normalize([0.0, 0.0])


def test_matvec_and_transpose():
    rng = np.random.default_rng(3)
    A = rng.normal(size=(4, 3))
    x = rng.normal(size=3)
    y = rng.normal(size=4)

    np.testing.assert_allclose(np.asarray(matvec(A, x)), A @ x)
    np.testing.assert_allclose(np.asarray(matvec(A, y, transpose=True)), A.T @ y)
    with pytest.raises(DimensionError):
        matvec(A, y)


def test_matmul_transpose_gram():
    rng = np.random.default_rng(5)
    A = rng.normal(size=(5, 3))
    B = rng.normal(size=(3, 2))

    np.testing.assert_allclose(matmul(A, B).to_numpy(), A @ B)
    np.testing.assert_array_equal(transpose(A).to_numpy(), A.T)
    G = gram(Matrix.from_array(A))
    np.testing.assert_allclose(G.to_numpy(), A.T @ A)
    with pytest.raises(DimensionError):
        matmul(A, A)


def test_tridiagonal_matvec_matches_dense():
    n = 6
    rng = np.random.default_rng(11)
    lower, main, upper = rng.normal(size=(3, n))
    x = rng.normal(size=n)

    T = np.diag(main) + np.diag(lower[1:], -1) + np.diag(upper[:-1], 1)
    b = tridiagonal_matvec(lower, main, upper, x)
    np.testing.assert_allclose(np.asarray(b), T @ x)
