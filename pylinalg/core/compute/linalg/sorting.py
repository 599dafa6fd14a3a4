"""
Sorting with permutation tracking.

Used to reorder eigenpairs after a backend returns eigenvalues in its
native (arbitrary) order: the permutation is applied to the eigenvalues
and to the columns of both eigenvector matrices.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import check_1d, check_writable


@dataclass(frozen=True)
class SortResult:
    """
    Sorted values and the permutation that produced them.

    Attributes:
        values: Sorted values
        indices: indices[k] is the original position of values[k]
    """
    values: NDArray[np.floating[Any]]
    indices: NDArray[np.intp]


def sort_values(
    values: ArrayLike,
    descending: bool = False,
    *,
    stable: bool = False,
    out: NDArray[np.floating[Any]] | None = None,
) -> SortResult:
    """
    Sort real values, tracking original positions.

    Args:
        values: 1D real values
        descending: Sort largest first
        stable: Preserve the original order of equal values. When False,
            an introsort is used and the relative order of ties is
            unspecified.
        out: Optional destination for the sorted values. Passing the
            input array itself sorts it in place.

    Returns:
        SortResult with values[k] == original[indices[k]]

    Raises:
        ValidationError: If values are complex or not 1D
    """
    arr = np.asarray(values)
    check_1d(arr, 'values')
    if np.iscomplexobj(arr):
        raise ValidationError("values: complex input has no ordering; sort by a real key")

    kind = 'stable' if stable else 'quicksort'
    if descending:
        # negated keys: equal values stay in input order under a stable sort
        indices = np.argsort(-arr, kind=kind)
    else:
        indices = np.argsort(arr, kind=kind)

    sorted_values = arr[indices]
    if out is not None:
        check_writable(out, 'out')
        out[...] = sorted_values
        sorted_values = out

    return SortResult(values=sorted_values, indices=indices)
