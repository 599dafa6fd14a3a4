"""
PyLinalg: row-major dense linear algebra over LAPACK and GPU backends.

A uniform layer over vector arithmetic, SVD, eigendecomposition, linear
solves, inversion and pseudo-inversion, for float32, float64, complex64
and complex128, with optional GPU acceleration through PyTorch.

Submodules:
    vector: Elementwise vector kernels
    dense: Decompositions, solves and inverses
    core: Results, exceptions, validation, layout and workspace utilities
"""

__version__ = "0.1.0"

from pylinalg import vector
from pylinalg import dense
from pylinalg.core.result import Status
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    BackendError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
    NumericalWarning,
)
from pylinalg.dense import svd, eigh, eig, solve, solve_spd, inv, pinv

__all__ = [
    "__version__",
    "vector",
    "dense",
    "Status",
    "svd",
    "eigh",
    "eig",
    "solve",
    "solve_spd",
    "inv",
    "pinv",
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "BackendError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    "NumericalWarning",
]
