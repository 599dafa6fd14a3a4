"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Numerical failures reported by a backend are
mapped onto NumericalError / ConvergenceError subclasses here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when a
    flat buffer's length doesn't match the dimensions passed alongside
    it, or when multiple arrays have inconsistent shapes.
    """
    pass


class BackendError(PyLinalgError):
    """
    The backend rejected a call.

    Raised when a backend routine reports a negative status code (an
    illegal argument was passed) or when a workspace query fails. This
    always indicates a bug in the caller or the backend binding, never
    a property of the input matrix.

    Attributes:
        routine: Name of the backend routine (e.g. 'gesvd')
        status_code: Raw status code reported by the routine
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        status_code: int | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.status_code = status_code


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is exactly singular.

    Raised when an LU factorization finds an exactly zero pivot, so the
    system cannot be solved or the matrix cannot be inverted.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        routine: Backend routine that detected the singularity
        status_code: Backend status code (1-based index of the zero pivot
            for LAPACK backends)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        routine: str | None = None,
        status_code: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.routine = routine
        self.status_code = status_code


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when an operation requires a positive definite matrix
    (e.g., Cholesky-based solve) but the matrix fails this requirement.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        routine: Backend routine that detected the failure
        status_code: Backend status code (order of the leading minor that
            is not positive definite for LAPACK backends)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        routine: str | None = None,
        status_code: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.routine = routine
        self.status_code = status_code


class ConvergenceError(PyLinalgError):
    """
    Iterative factorization failed to converge.

    Raised when the backend's SVD or eigenvalue iteration does not
    converge. The meaning of status_code is routine specific (for LAPACK
    gesvd it is the number of superdiagonals that did not converge).

    Attributes:
        routine: Backend routine that failed
        status_code: Backend status code
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        status_code: int | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.status_code = status_code


class NumericalWarning(UserWarning):
    """
    A computation degraded to its failure output.

    Emitted when a numerical failure is absorbed (zero or None outputs
    with a non-OK status) instead of raised.
    """
    pass
