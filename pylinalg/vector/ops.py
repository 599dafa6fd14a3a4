"""
Elementwise vector kernels.

All operations are O(n) over the first ``n`` elements of their inputs
(the whole array when ``n`` is omitted). Operations with a destination
write into ``out`` when given and into ``a`` itself otherwise, and return
the destination.

Division by an exactly zero scalar is not an error: the destination is
filled with zeros.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import check_1d, check_array, check_length, check_writable


def _operand(a: ArrayLike, name: str) -> NDArray[Any]:
    if isinstance(a, np.ndarray) and np.issubdtype(a.dtype, np.inexact):
        arr = a
    else:
        arr = check_array(a, name)
    check_1d(arr, name)
    return arr


def _destination(
    a: ArrayLike,
    out: NDArray[Any] | None,
    n: int,
    dtype: np.dtype,
) -> NDArray[Any]:
    """Resolve the first-n view that receives the result."""
    dest = a if out is None else out
    name = 'a' if out is None else 'out'
    check_writable(dest, name)
    check_1d(dest, name)
    if dest.shape[0] < n:
        raise ValidationError(f"{name}: length {dest.shape[0]} is shorter than n={n}")
    if not np.can_cast(dtype, dest.dtype, casting='same_kind'):
        raise ValidationError(f"{name}: cannot store {dtype} results in {dest.dtype} array")
    return dest[:n]


def vector_copy(
    a: ArrayLike,
    n: int | None = None,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """
    Copy the first n elements of a.

    Args:
        a: Source vector
        n: Number of elements (default: all)
        out: Destination; a new array is allocated when omitted

    Returns:
        The destination (length n when newly allocated)
    """
    src = _operand(a, 'a')
    n = check_length(src, n, 'a')
    if out is None:
        return src[:n].copy()
    _destination(src, out, n, src.dtype)[...] = src[:n]
    return out


def vector_multiply(
    a: ArrayLike,
    b: ArrayLike,
    n: int | None = None,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """
    Elementwise product c[i] = a[i] * b[i].

    Written into ``a`` when ``out`` is omitted.
    """
    x = _operand(a, 'a')
    y = _operand(b, 'b')
    n = check_length(x, n, 'a')
    check_length(y, n, 'b')
    dest = _destination(a, out, n, np.result_type(x, y))
    np.multiply(x[:n], y[:n], out=dest)
    return a if out is None else out


def vector_dot(
    a: ArrayLike,
    b: ArrayLike,
    n: int | None = None,
    conjugate: bool = False,
) -> Any:
    """
    Dot product sum(a[i] * b[i]).

    Args:
        a: Left operand
        b: Right operand
        n: Number of elements (default: all of a)
        conjugate: Conjugate the left operand first (complex inputs);
            no effect on real inputs

    Returns:
        Scalar of the common dtype
    """
    x = _operand(a, 'a')
    y = _operand(b, 'b')
    n = check_length(x, n, 'a')
    check_length(y, n, 'b')
    if conjugate:
        return np.vdot(x[:n], y[:n])
    return np.dot(x[:n], y[:n])


def _scalar(s: Any, name: str) -> NDArray[Any]:
    scalar = np.asarray(s)
    if scalar.ndim != 0 or not np.issubdtype(scalar.dtype, np.number):
        raise ValidationError(f"{name}: scalar operand must be a number, got {s!r}")
    return scalar


def _scalar_op(ufunc, a, s, n, out, name):
    x = _operand(a, 'a')
    n = check_length(x, n, 'a')
    scalar = _scalar(s, name)
    dest = _destination(a, out, n, np.result_type(x, scalar))
    ufunc(x[:n], scalar, out=dest)
    return a if out is None else out


def scalar_multiply(
    a: ArrayLike,
    s: complex,
    n: int | None = None,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """c[i] = a[i] * s, into ``a`` when ``out`` is omitted."""
    return _scalar_op(np.multiply, a, s, n, out, 'scalar_multiply')


def scalar_divide(
    a: ArrayLike,
    s: complex,
    n: int | None = None,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """
    c[i] = a[i] / s, into ``a`` when ``out`` is omitted.

    A zero divisor yields an all-zero destination rather than inf/nan.
    """
    if _scalar(s, 'scalar_divide') == 0:
        x = _operand(a, 'a')
        n = check_length(x, n, 'a')
        dest = _destination(a, out, n, x.dtype)
        dest[...] = 0
        return a if out is None else out
    return _scalar_op(np.divide, a, s, n, out, 'scalar_divide')


def scalar_add(
    a: ArrayLike,
    s: complex,
    n: int | None = None,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """c[i] = a[i] + s, into ``a`` when ``out`` is omitted."""
    return _scalar_op(np.add, a, s, n, out, 'scalar_add')


def scalar_subtract(
    a: ArrayLike,
    s: complex,
    n: int | None = None,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """c[i] = a[i] - s, into ``a`` when ``out`` is omitted."""
    return _scalar_op(np.subtract, a, s, n, out, 'scalar_subtract')
