# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from densolve.exceptions import DimensionError, RankDeficientError
from densolve.qr import least_squares_qr, qr
from densolve.utils import random_nonsingular_upper

TEST_ITERATIONS = 20
logger = logging.getLogger(__name__)


def test_least_squares_qr_square():
    n = TEST_ITERATIONS
    rng = np.random.default_rng(0)

    for i in range(n):
        A = rng.normal(size=(n, n)) + n * np.eye(n)

        # Generate a random vector x (the true solution)
        x_true = rng.random(n)

        # Calculate b using the equation Ax = b
        b = np.dot(A, x_true)

        x_ours = least_squares_qr(A, b)
        np.testing.assert_allclose(np.asarray(x_ours), x_true, rtol=1e-8, atol=1e-10)


def test_least_squares_qr_tall():
    rng = np.random.default_rng(1)
    A = rng.normal(size=(30, 6))
    b = rng.normal(size=30)

    x_np, *_ = np.linalg.lstsq(A, b, rcond=None)
    x_ours = np.asarray(least_squares_qr(A, b))

    res_np = np.linalg.norm(A @ x_np - b)
    res_ours = np.linalg.norm(A @ x_ours - b)
    assert res_ours <= res_np * (1 + 1e-8)
    np.testing.assert_allclose(x_ours, x_np, atol=1e-10)


def test_qr_reconstructs():
    rng = np.random.default_rng(2)
    A = rng.normal(size=(12, 12))
    Q, R = qr(A)
    np.testing.assert_allclose(Q.to_numpy() @ R.to_numpy(), A, atol=1e-10)
    assert np.allclose(np.tril(R.to_numpy(), -1), 0.0)
    assert np.all(np.diag(R.to_numpy()) > 0)


def test_orthogonality_qr():
    rng = np.random.default_rng(3)
    V = rng.normal(size=(100, 10))
    Q, R = qr(V, reorth=True)
    identity = Q.to_numpy().T @ Q.to_numpy()
    assert np.allclose(identity, np.eye(10), atol=1e-10)
    np.testing.assert_allclose(Q.to_numpy() @ R.to_numpy(), V, atol=1e-10)


def test_qr_upper_triangular_input():
    U = random_nonsingular_upper(6, seed=4)
    Q, R = qr(U)
    np.testing.assert_allclose(np.abs(Q.to_numpy()), np.eye(6), atol=1e-12)


def test_rank_deficient_fails_fast():
    A = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 1.0], [3.0, 6.0, 0.0]])
    with pytest.raises(RankDeficientError) as info:
        qr(A)
    assert info.value.column == 1


def test_qr_rejects_wide_matrix():
    with pytest.raises(DimensionError):
        qr(np.ones((2, 3)))
