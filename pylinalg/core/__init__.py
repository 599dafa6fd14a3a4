"""
Core infrastructure for PyLinalg.

This module provides shared abstractions, utilities, and backend infrastructure
used by the vector kernels and the dense decomposition layer.

Key components:
    protocols: Backend protocol
    result: Status enum and generic Result[P] envelope
    exceptions: Exception hierarchy
    capabilities: Backend capability strings
    validation: Input validators
    compute: Hardware detection, timing, precision, layout/workspace/sort kernels
"""

from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result, Status
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

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    "Status",
    # Exceptions
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
