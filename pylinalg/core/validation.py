"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes and
      integer/bool promotion to float64)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.inexact[Any]]:
    """
    Validate and convert input to a numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Floating and complex arrays keep their precision; integer and boolean
    arrays are promoted to float64.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with an inexact (floating or complex) dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.floating):
        if result.dtype not in (np.float32, np.float64):
            # float16 / longdouble have no backend routines
            result = result.astype(np.float64)
    elif np.issubdtype(result.dtype, np.complexfloating):
        if result.dtype not in (np.complex64, np.complex128):
            result = result.astype(np.complex128)
    else:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.inexact[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    check_ndim(array, 2, name)


def check_square(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify a 2D array is square.

    Args:
        array: 2D array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 2D or not square
    """
    check_2d(array, name)
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: expected square matrix, got shape {array.shape}"
        )


def check_positive_dim(value: int, name: str) -> int:
    """
    Verify a dimension argument is a positive integer.

    Args:
        value: Dimension to check
        name: Parameter name for error messages

    Returns:
        The dimension as a Python int

    Raises:
        ValidationError: If value is not an integer or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(
            f"{name}: expected a positive integer, got {type(value).__name__}"
        )
    if value < 1:
        raise ValidationError(f"{name}: must be >= 1, got {value}")
    return int(value)


def check_matrix(
    array: NDArray[np.inexact[Any]],
    name: str,
    rows: int | None = None,
    cols: int | None = None,
) -> NDArray[np.inexact[Any]]:
    """
    Resolve a row-major matrix from a 2D array or a flat buffer.

    A 2D array supplies its own dimensions; any explicit rows/cols must
    agree with them. A 1D buffer requires rows and cols, and its length
    must equal rows * cols.

    Args:
        array: 1D or 2D array
        name: Parameter name for error messages
        rows: Number of rows, required for flat buffers
        cols: Number of columns, required for flat buffers

    Returns:
        2D array of shape (rows, cols), a view where possible

    Raises:
        DimensionError: If dimensions are missing or inconsistent
    """
    if rows is not None:
        rows = check_positive_dim(rows, f"{name} rows")
    if cols is not None:
        cols = check_positive_dim(cols, f"{name} cols")

    if array.ndim == 1:
        if rows is None or cols is None:
            raise DimensionError(
                f"{name}: flat buffer of length {array.size} requires explicit rows and cols"
            )
        if array.size != rows * cols:
            raise DimensionError(
                f"{name}: buffer length {array.size} does not match "
                f"rows * cols = {rows} * {cols} = {rows * cols}"
            )
        return array.reshape(rows, cols)

    check_2d(array, name)
    if array.size == 0:
        raise DimensionError(f"{name}: empty matrix with shape {array.shape}")

    actual_rows, actual_cols = array.shape
    if rows is not None and rows != actual_rows:
        raise DimensionError(f"{name}: rows={rows} but array has {actual_rows} rows")
    if cols is not None and cols != actual_cols:
        raise DimensionError(f"{name}: cols={cols} but array has {actual_cols} columns")
    return array


def check_length(array: NDArray[Any], n: int | None, name: str) -> int:
    """
    Resolve the number of leading elements an operation should touch.

    Args:
        array: 1D array
        n: Requested length, or None for the whole array
        name: Parameter name for error messages

    Returns:
        Number of elements to operate on

    Raises:
        DimensionError: If n exceeds the array length
        ValidationError: If n is negative
    """
    if n is None:
        return array.shape[0]
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValidationError(f"{name}: length must be an integer, got {type(n).__name__}")
    if n < 0:
        raise ValidationError(f"{name}: length must be >= 0, got {n}")
    if n > array.shape[0]:
        raise DimensionError(
            f"{name}: requested length {n} exceeds array length {array.shape[0]}"
        )
    return int(n)


def check_writable(array: Any, name: str) -> None:
    """
    Verify an in-place destination is a writable numpy array.

    Raises:
        ValidationError: If array is not an ndarray or is read-only
    """
    if not isinstance(array, np.ndarray):
        raise ValidationError(
            f"{name}: in-place operation requires a numpy array, got {type(array).__name__}"
        )
    if not array.flags.writeable:
        raise ValidationError(f"{name}: array is read-only")
