"""
Solver dispatch for dense linear algebra.

This module provides the public operations (svd, eigh, eig, solve,
solve_spd, inv, pinv) and backend selection.
"""

from __future__ import annotations

from typing import Literal, Union

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.compute.device import select_device
from pylinalg.core.compute.precision import SUPPORTED_DTYPES
from pylinalg.core.exceptions import DimensionError, ValidationError
from pylinalg.core.protocols import Backend
from pylinalg.core.validation import check_array, check_positive_dim, check_writable
from pylinalg.dense._eig import run_eig, run_eigh
from pylinalg.dense._linsolve import run_inv, run_solve
from pylinalg.dense._pinv import run_pinv
from pylinalg.dense._svd import run_svd
from pylinalg.dense.backends.cpu import CPULapackBackend
from pylinalg.dense.design import MatrixDesign
from pylinalg.dense.solution import (
    EigSolution,
    EighSolution,
    InverseSolution,
    PinvSolution,
    SolveSolution,
    SVDSolution,
)


# Type alias for backend selection
BackendChoice = Union[Literal['auto', 'cpu', 'gpu'], Backend]


def svd(
    A: ArrayLike,
    rows: int | None = None,
    cols: int | None = None,
    *,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> SVDSolution:
    """
    Full singular value decomposition A = U @ S @ V^H.

    Args:
        A: Matrix (rows x cols), or a flat row-major buffer of rows * cols
            elements
        rows: Number of rows (required for a flat buffer)
        cols: Number of columns (required for a flat buffer)
        backend: Computational backend to use:
            - 'auto' / 'cpu': LAPACK through SciPy
            - 'gpu': PyTorch on the best available GPU
            - any object implementing the Backend protocol
        strict: Raise ConvergenceError instead of returning a failed solution

    Returns:
        SVDSolution with U (rows x rows), S (rows x cols, singular values on
        the diagonal in non-increasing order) and V (cols x cols). On
        non-convergence all three are None and status is NON_CONVERGENCE.

    Raises:
        ValidationError: If A is not numeric or contains NaN/Inf
        DimensionError: If A's dimensions are missing or inconsistent
        ConvergenceError: On non-convergence when strict=True

    Example:
        >>> import numpy as np
        >>> from pylinalg import svd
        >>>
        >>> A = np.array([[3.0, 0.0], [0.0, 4.0]])
        >>> result = svd(A)
        >>> result.singular_values
        array([4., 3.])
    """
    design = MatrixDesign.from_array(A, 'A', rows=rows, cols=cols)
    backend_impl = _get_backend(backend)
    result = run_svd(design, backend_impl, strict=strict)
    return SVDSolution(_result=result)


def eigh(
    A: ArrayLike,
    dim: int | None = None,
    *,
    descending: bool = False,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> EighSolution:
    """
    Eigendecomposition of a real symmetric or complex Hermitian matrix.

    Only the upper triangle of A is read.

    Args:
        A: Square matrix (dim x dim), or a flat buffer of dim * dim elements
        dim: Matrix dimension (required for a flat buffer)
        descending: Order eigenvalues largest first (default: ascending)
        backend: See svd()
        strict: Raise ConvergenceError instead of returning a failed solution

    Returns:
        EighSolution with V (eigenvectors as columns) and D (real diagonal
        matrix of eigenvalues). Zero-filled on non-convergence.
    """
    design = MatrixDesign.from_array(A, 'A', rows=dim, cols=dim, square=True)
    backend_impl = _get_backend(backend)
    result = run_eigh(design, backend_impl, descending=descending, strict=strict)
    return EighSolution(_result=result)


def eig(
    A: ArrayLike,
    dim: int | None = None,
    *,
    descending: bool = False,
    left: bool = True,
    right: bool = True,
    values: bool = True,
    stable: bool = True,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> EigSolution:
    """
    Eigendecomposition of a general square matrix.

    Real input is promoted to the complex type of its precision. Eigenpairs
    are ordered by the real part of the eigenvalue. D carries the full
    complex eigenvalues, not a diagonal of their real parts only.

    Args:
        A: Square matrix (dim x dim), or a flat buffer of dim * dim elements
        dim: Matrix dimension (required for a flat buffer)
        descending: Order by real part largest first (default: ascending)
        left: Compute left eigenvectors (VL^H @ A = D @ VL^H)
        right: Compute right eigenvectors (A @ VR = VR @ D)
        values: Return the eigenvalues (D and eigenvalues)
        stable: Keep the backend's order among equal real parts
        backend: See svd()
        strict: Raise ConvergenceError instead of returning a failed solution

    Returns:
        EigSolution; outputs not requested are None. Requested outputs are
        zero-filled on non-convergence.

    Raises:
        ValidationError: If nothing is requested, or the backend cannot
            compute left eigenvectors
    """
    if not (left or right or values):
        raise ValidationError("eig: at least one of left, right, values must be requested")
    design = MatrixDesign.from_array(A, 'A', rows=dim, cols=dim, square=True)
    backend_impl = _get_backend(backend)
    result = run_eig(
        design,
        backend_impl,
        descending=descending,
        left=left,
        right=right,
        values=values,
        stable=stable,
        strict=strict,
    )
    return EigSolution(_result=result)


def solve(
    A: ArrayLike,
    B: ArrayLike,
    dim: int | None = None,
    nrhs: int | None = None,
    *,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> SolveSolution:
    """
    Solve A @ X = B by LU factorization with partial pivoting.

    Neither A nor B is modified.

    Args:
        A: Square matrix (dim x dim), or a flat buffer of dim * dim elements
        B: Right-hand sides (dim x nrhs), a flat buffer with nrhs given, or
            a single right-hand side of length dim (X is then 1D)
        dim: Matrix dimension (required when A is a flat buffer)
        nrhs: Number of right-hand sides (required when B is a flat buffer
            holding more than one)
        backend: See svd()
        strict: Raise SingularMatrixError instead of returning a failed solution

    Returns:
        SolveSolution with X; zero-filled with status SINGULAR if A is
        singular.
    """
    A_design, B_design, squeeze = _solve_designs(A, B, dim, nrhs)
    backend_impl = _get_backend(backend)
    result = run_solve(
        A_design, B_design, backend_impl, routine='gesv', squeeze=squeeze, strict=strict
    )
    return SolveSolution(_result=result)


def solve_spd(
    A: ArrayLike,
    B: ArrayLike,
    dim: int | None = None,
    nrhs: int | None = None,
    *,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> SolveSolution:
    """
    Solve A @ X = B for symmetric (Hermitian) positive-definite A by Cholesky.

    Only the upper triangle of A is read. Arguments as for solve().

    Returns:
        SolveSolution with X; zero-filled with status NOT_POSITIVE_DEFINITE
        if the factorization breaks down.
    """
    A_design, B_design, squeeze = _solve_designs(A, B, dim, nrhs)
    backend_impl = _get_backend(backend)
    result = run_solve(
        A_design, B_design, backend_impl, routine='posv', squeeze=squeeze, strict=strict
    )
    return SolveSolution(_result=result)


def inv(
    A: ArrayLike,
    dim: int | None = None,
    *,
    overwrite_a: bool = True,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> InverseSolution:
    """
    Invert a square matrix, in place by default.

    Args:
        A: Square matrix (dim x dim), or a flat buffer of dim * dim elements.
            With overwrite_a=True it must be a writable float32, float64,
            complex64 or complex128 ndarray; it receives the inverse.
        dim: Matrix dimension (required for a flat buffer)
        overwrite_a: Write the inverse into A (default) or into a new array
        backend: See svd()
        strict: Raise SingularMatrixError instead of returning a failed solution

    Returns:
        InverseSolution whose ``inverse`` is A itself (reshaped to
        dim x dim for a flat buffer) when overwrite_a is set. If A is
        singular the destination is zero-filled and status is SINGULAR.

    Raises:
        ValidationError: If A cannot be overwritten in place
    """
    if overwrite_a:
        check_writable(A, 'A')
        if A.dtype not in SUPPORTED_DTYPES:
            raise ValidationError(
                f"A: cannot invert a {A.dtype} array in place; "
                f"use a floating or complex array, or overwrite_a=False"
            )
    design = MatrixDesign.from_array(A, 'A', rows=dim, cols=dim, square=True)
    if overwrite_a:
        target = design.data
        if not np.shares_memory(target, A):
            raise ValidationError(
                "A: flat buffer is not contiguous and cannot be inverted in place; "
                "use overwrite_a=False"
            )
    else:
        target = np.array(design.data, order='C', copy=True)
    backend_impl = _get_backend(backend)
    result = run_inv(design, target, backend_impl, in_place=overwrite_a, strict=strict)
    return InverseSolution(_result=result)


def pinv(
    A: ArrayLike,
    rows: int | None = None,
    cols: int | None = None,
    *,
    threshold: float | None = None,
    truncate: bool = False,
    backend: BackendChoice = 'auto',
    strict: bool = False,
) -> PinvSolution:
    """
    Moore-Penrose pseudo-inverse via the reduced SVD.

    Args:
        A: Matrix (rows x cols), or a flat row-major buffer
        rows: Number of rows (required for a flat buffer)
        cols: Number of columns (required for a flat buffer)
        threshold: Singular values at or below this are not reciprocated
            (default: 1e-5 for single precision, 1e-9 for double)
        truncate: Zero the singular values at or below the threshold
            instead of keeping them unchanged
        backend: See svd()
        strict: Raise ConvergenceError instead of returning a failed solution

    Returns:
        PinvSolution with the pseudo-inverse (cols x rows); zero-filled
        with status NON_CONVERGENCE if the SVD fails.
    """
    if threshold is not None and not threshold >= 0:
        raise ValidationError(f"threshold: must be >= 0, got {threshold}")
    design = MatrixDesign.from_array(A, 'A', rows=rows, cols=cols)
    backend_impl = _get_backend(backend)
    result = run_pinv(
        design, backend_impl, threshold=threshold, truncate=truncate, strict=strict
    )
    return PinvSolution(_result=result)


def _solve_designs(
    A: ArrayLike,
    B: ArrayLike,
    dim: int | None,
    nrhs: int | None,
) -> tuple[MatrixDesign, MatrixDesign, bool]:
    """
    Validate A and B for a linear solve.

    Returns:
        (A design, B design as dim x nrhs, whether X should be 1D)
    """
    A_design = MatrixDesign.from_array(A, 'A', rows=dim, cols=dim, square=True)
    n = A_design.rows
    if nrhs is not None:
        nrhs = check_positive_dim(nrhs, 'nrhs')

    B_arr = check_array(B, 'B')
    squeeze = False
    if B_arr.ndim == 1 and (nrhs is None or nrhs == 1) and B_arr.shape[0] == n:
        # single right-hand side
        squeeze = True
        B_arr = B_arr.reshape(n, 1)
    elif B_arr.ndim == 1 and nrhs is None:
        raise DimensionError(
            f"B: flat buffer of length {B_arr.size} does not match dim={n}; "
            f"pass nrhs for multiple right-hand sides"
        )
    B_design = MatrixDesign.from_array(B_arr, 'B', rows=n, cols=nrhs)
    return A_design, B_design, squeeze


def _get_backend(choice: BackendChoice) -> Backend:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference, or a Backend instance

    Returns:
        Backend instance ready to run

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if not isinstance(choice, str):
        if isinstance(choice, Backend):
            return choice
        raise ValueError(f"Unknown backend: {choice!r}")

    if choice in ('auto', 'cpu'):
        return CPULapackBackend()

    elif choice == 'gpu':
        device = select_device('gpu')
        from pylinalg.dense.backends.gpu import GPUTorchBackend
        return GPUTorchBackend(device=device.torch_device)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
