# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from densolve.containers import Matrix, Vector, as_matrix, as_vector
from densolve.exceptions import DimensionError


def test_vector_append_grows_capacity():
    v = Vector()
    assert len(v) == 0
    assert v.capacity == 0

    v.append(1.0)
    assert v.capacity == 2
    v.append(2.0)
    v.append(3.0)
    assert v.capacity == 4
    assert list(v) == [1.0, 2.0, 3.0]
    assert v.pop() == 3.0
    assert len(v) == 2


def test_vector_index_bounds():
    v = Vector(3, fill=1.5)
    assert v[2] == 1.5
    v[0] = -2.0
    assert v[0] == -2.0

    with pytest.raises(IndexError):
        v[3]
    with pytest.raises(IndexError):
        v[-1]
    with pytest.raises(IndexError):
        v[5] = 1.0
    with pytest.raises(IndexError):
        Vector().pop()


def test_vector_spare_capacity_is_not_visible():
    v = Vector.from_iterable([1.0, 2.0, 3.0])
    v.append(4.0)  # capacity 6, size 4
    with pytest.raises(IndexError):
        v[4]
    np.testing.assert_array_equal(np.asarray(v), [1.0, 2.0, 3.0, 4.0])


def test_vector_equality_and_copy():
    v = Vector.from_iterable([1, 2, 3])
    w = v.copy()
    assert v == w
    w[0] = 10.0
    assert v != w
    assert v[0] == 1.0


def test_vector_data_is_live_view():
    v = Vector.from_iterable([1.0, 2.0])
    v.data[1] = 7.0
    assert v[1] == 7.0
    snapshot = v.to_numpy()
    snapshot[0] = 99.0
    assert v[0] == 1.0


def test_matrix_shape_and_access():
    A = Matrix(2, 3)
    assert A.shape == (2, 3)
    assert A.rows == 2 and A.cols == 3
    A[1, 2] = 5.0
    assert A[1, 2] == 5.0
    np.testing.assert_array_equal(A[1], [0.0, 0.0, 5.0])

    with pytest.raises(IndexError):
        A[2, 0]
    with pytest.raises(IndexError):
        A[0, 3]
    with pytest.raises(IndexError):
        A[-1, 0]


def test_matrix_row_access_returns_copy():
    A = Matrix.from_rows([[1, 2], [3, 4]])
    row = A[0]
    row[0] = 100.0
    assert A[0, 0] == 1.0


def test_matrix_assign_keeps_shape():
    A = Matrix.identity(2)
    A.assign([[1, 2], [3, 4]])
    assert A == Matrix.from_rows([[1, 2], [3, 4]])
    with pytest.raises(DimensionError):
        A.assign(np.zeros((3, 3)))


def test_swap_rows_sets_pivot_flag():
    A = Matrix.from_rows([[1, 2], [3, 4]])
    assert not A.pivoted
    A.swap_rows(1, 1)
    assert not A.pivoted
    A.swap_rows(0, 1)
    assert A.pivoted
    np.testing.assert_array_equal(A.to_numpy(), [[3, 4], [1, 2]])


def test_find_pivot_and_scaled_pivot():
    A = Matrix.from_rows([[2.0, 100000.0], [1.0, 1.0]])
    assert A.find_pivot(0) == 0
    # scaled: 2 / 1e5 loses to 1 / 1
    assert A.find_scaled_pivot(0) == 1
    np.testing.assert_array_equal(A.row_scales(), [100000.0, 1.0])


def test_scaled_pivot_skips_zero_rows():
    A = Matrix.from_rows([[1.0, 2.0], [0.0, 0.0]])
    assert A.find_scaled_pivot(0) == 0


def test_symmetry_and_norms():
    A = Matrix.from_rows([[1.0, -2.0], [-2.0, 3.0]])
    assert A.is_symmetric()
    assert not Matrix.from_rows([[1.0, 2.0], [0.0, 1.0]]).is_symmetric()
    assert not Matrix(2, 3).is_symmetric()

    B = Matrix.from_rows([[1.0, -7.0], [2.0, 3.0]])
    assert B.one_norm() == 10.0
    assert B.infinity_norm() == 8.0
    assert np.isclose(B.frobenius_norm(), np.linalg.norm(B.to_numpy()))


def test_copy_is_independent_and_keeps_flag():
    A = Matrix.from_rows([[0.0, 1.0], [1.0, 0.0]])
    A.swap_rows(0, 1)
    B = A.copy()
    assert B.pivoted
    B[0, 0] = 42.0
    assert A[0, 0] == 1.0


def test_coercion_helpers():
    arr = np.arange(6.0).reshape(2, 3)
    A = as_matrix(arr)
    arr[0, 0] = 100.0
    assert A[0, 0] == 0.0

    M = Matrix.identity(2)
    assert as_matrix(M, copy=False) is M
    assert as_matrix(M) is not M

    with pytest.raises(DimensionError):
        as_matrix([1.0, 2.0])
    with pytest.raises(DimensionError):
        as_vector([[1.0], [2.0]])

    v = as_vector((1, 2, 3))
    assert isinstance(v, Vector) and len(v) == 3
