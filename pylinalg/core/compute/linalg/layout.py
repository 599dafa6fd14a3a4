"""
Row-major <-> column-major layout translation.

The public contract of PyLinalg is row-major (C order); LAPACK-style
backends are column-major (Fortran order). Everything in this module is
an exact re-indexing: no arithmetic is performed on the values except an
optional complex conjugation.

Flat-buffer form:
    col[j*rows + i] = row[i*cols + j]

Matrix form:
    to_backend() produces a Fortran-ordered staging copy that the backend
    may overwrite; from_backend() produces a fresh C-ordered array.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pylinalg.core.exceptions import DimensionError


def _check_buffer(buffer: NDArray[Any], rows: int, cols: int) -> None:
    if buffer.ndim != 1:
        raise DimensionError(
            f"expected flat 1D buffer, got {buffer.ndim}D with shape {buffer.shape}"
        )
    if buffer.size != rows * cols:
        raise DimensionError(
            f"buffer length {buffer.size} does not match rows * cols = {rows * cols}"
        )


def to_column_major(buffer: ArrayLike, rows: int, cols: int) -> NDArray[Any]:
    """
    Re-index a flat row-major buffer into a flat column-major buffer.

    Args:
        buffer: Flat buffer of rows * cols elements, row-major
        rows: Number of rows of the logical matrix
        cols: Number of columns of the logical matrix

    Returns:
        New flat buffer with col[j*rows + i] = row[i*cols + j]
    """
    buffer = np.asarray(buffer)
    _check_buffer(buffer, rows, cols)
    return buffer.reshape(rows, cols).ravel(order='F')


def from_column_major(buffer: ArrayLike, rows: int, cols: int) -> NDArray[Any]:
    """
    Re-index a flat column-major buffer into a flat row-major buffer.

    Inverse of to_column_major() for the same (rows, cols).
    """
    buffer = np.asarray(buffer)
    _check_buffer(buffer, rows, cols)
    return buffer.reshape((rows, cols), order='F').ravel(order='C')


def to_backend(matrix: NDArray[Any], dtype: DTypeLike | None = None) -> NDArray[Any]:
    """
    Stage a row-major matrix for a column-major backend.

    Always copies, so the backend may overwrite the result (LU factors,
    eigenvectors, solutions) without touching the caller's array.

    Args:
        matrix: 2D array (any memory order; its logical layout is row-major)
        dtype: Optional element type for the staging copy

    Returns:
        Fortran-ordered 2D copy of the same logical matrix
    """
    staged = np.array(matrix, dtype=dtype, order='F', copy=True)
    if staged.ndim == 1:
        # single right-hand side
        staged = staged.reshape((-1, 1), order='F')
    return staged


def from_backend(
    matrix: NDArray[Any],
    *,
    transpose: bool = False,
    conjugate: bool = False,
) -> NDArray[Any]:
    """
    Return a column-major backend result in the public row-major layout.

    Args:
        matrix: 2D array produced by a backend
        transpose: Transpose on copy (the backend's V^T becomes V)
        conjugate: Conjugate on copy; ignored for real element types

    Returns:
        Fresh C-ordered 2D array
    """
    out = matrix.T if transpose else matrix
    if conjugate and np.iscomplexobj(out):
        return np.ascontiguousarray(np.conjugate(out))
    return np.array(out, order='C', copy=True)


def native_view(matrix: NDArray[Any]) -> NDArray[Any]:
    """
    Reinterpret a C-ordered square matrix's buffer as column-major.

    The result is the transpose of the logical matrix, sharing memory with
    it. Useful for operations that commute with transposition, such as
    inv(A^T) = inv(A)^T, which can then run in place on the caller's buffer.
    """
    if not matrix.flags.c_contiguous:
        raise DimensionError("native_view requires a C-contiguous array")
    return matrix.T
