"""
Elementwise vector arithmetic.

Public API:
    vector_copy(a, n, out)
    vector_multiply(a, b, n, out)
    vector_dot(a, b, n, conjugate)
    scalar_multiply / scalar_divide / scalar_add / scalar_subtract(a, s, n, out)

Operations with a destination work in place on ``a`` when ``out`` is
omitted. Dividing by a zero scalar yields zeros.

Example:
    >>> import numpy as np
    >>> from pylinalg.vector import scalar_divide
    >>> scalar_divide(np.array([2.0, 4.0, 6.0]), 0.0)
    array([0., 0., 0.])
"""

from pylinalg.vector.ops import (
    vector_copy,
    vector_multiply,
    vector_dot,
    scalar_multiply,
    scalar_divide,
    scalar_add,
    scalar_subtract,
)

__all__ = [
    "vector_copy",
    "vector_multiply",
    "vector_dot",
    "scalar_multiply",
    "scalar_divide",
    "scalar_add",
    "scalar_subtract",
]
