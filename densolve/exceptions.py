# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception hierarchy for densolve.

Every error derives from `LinAlgError`, which is itself a `ValueError`,
so callers that already guard solves with ``except ValueError`` keep
working.
"""

from typing import Optional


class LinAlgError(ValueError):
    """Base exception for all densolve errors."""


class DimensionError(LinAlgError):
    """
    Shapes are inconsistent, or a square matrix was required and a
    rectangular one was given.
    """


class NumericalError(LinAlgError):
    """Base class for failures caused by the numbers themselves."""


class SingularMatrixError(NumericalError):
    """
    A zero pivot or zero diagonal entry was met.

    Attributes
    ----------
    index : int | None
        Row (or column) where the zero showed up.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class NotSymmetricError(NumericalError):
    """Cholesky was asked to factor a matrix that is not symmetric."""


class NotPositiveDefiniteError(NumericalError):
    """
    Cholesky produced a NaN or non-positive diagonal entry.

    Attributes
    ----------
    index : int | None
        Column of the failing diagonal entry.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class RankDeficientError(NumericalError):
    """
    Gram-Schmidt met a column that is (numerically) a combination of the
    columns before it.
    """

    def __init__(self, message: str, column: Optional[int] = None):
        super().__init__(message)
        self.column = column


class DegenerateVectorError(NumericalError):
    """A zero vector cannot be normalised."""
