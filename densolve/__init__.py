# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
densolve
========

Dense linear systems and eigenvalue estimates, built from first
principles on top of NumPy storage.

Public API
~~~~~~~~~~
- Containers
    - `Vector`, `Matrix`
- Factorizations
    - `eliminate`, `lu`, `cholesky`, `is_spd`, `qr`
- Substitution
    - `forward_substitute`, `back_substitute`
- Direct solvers
    - `solve`, `solve_ge`, `solve_lu`, `solve_spd`, `solve_tridiagonal`
- Iterative solvers
    - `jacobi`, `gauss_seidel`, `cgm`
- Eigenvalues
    - `power_method`, `inverse_power_method`
- Matrix utilities
    - `inverse`, `kappa`, `least_squares`, `least_squares_qr`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import densolve as ds
>>> A = ds.Matrix.from_rows([[4.0, 1.0], [1.0, 3.0]])
>>> x, factors = ds.solve_lu(A, [1.0, 2.0], pivot="partial")
>>> [round(v, 6) for v in x]
[0.090909, 0.636364]
"""

from importlib.metadata import version as _pkg_version

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .cholesky import CholeskyResult, CholeskyStatus, cholesky, is_spd
from .containers import Matrix, Vector, as_matrix, as_vector
from .eigen import inverse_power_method, power_method, shift
from .elimination import (
    LUFactorization,
    PivotStrategy,
    back_substitute,
    eliminate,
    forward_substitute,
    gaussian_eliminate,
    lu,
)
from .exceptions import (
    DegenerateVectorError,
    DimensionError,
    LinAlgError,
    NotPositiveDefiniteError,
    NotSymmetricError,
    NumericalError,
    RankDeficientError,
    SingularMatrixError,
)
from .iterative import IterationInfo, cgm, gauss_seidel, is_diagonally_dominant, jacobi
from .matrix_functions import inverse, kappa, least_squares
from .qr import least_squares_qr, qr
from .solvers import solve, solve_ge, solve_lu, solve_spd, solve_tridiagonal
from .utils import random_diagonally_dominant, random_spd

__all__ = [
    "Vector",
    "Matrix",
    "as_matrix",
    "as_vector",
    "PivotStrategy",
    "eliminate",
    "gaussian_eliminate",
    "lu",
    "LUFactorization",
    "forward_substitute",
    "back_substitute",
    "cholesky",
    "CholeskyResult",
    "CholeskyStatus",
    "is_spd",
    "qr",
    "least_squares_qr",
    "solve",
    "solve_ge",
    "solve_lu",
    "solve_spd",
    "solve_tridiagonal",
    "jacobi",
    "gauss_seidel",
    "cgm",
    "IterationInfo",
    "is_diagonally_dominant",
    "power_method",
    "inverse_power_method",
    "shift",
    "inverse",
    "kappa",
    "least_squares",
    "random_spd",
    "random_diagonally_dominant",
    "LinAlgError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "NotSymmetricError",
    "NotPositiveDefiniteError",
    "RankDeficientError",
    "DegenerateVectorError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show densolve”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
