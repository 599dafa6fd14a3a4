"""
Shared adapter kernels for PyLinalg.

These sit between the public row-major contract and the column-major
backends. They are backend independent and contain no factorization code.

Submodules:
    layout: Row-major <-> column-major translation
    workspace: Two-phase workspace size query
    sorting: Sort with permutation tracking (eigenpair ordering)
"""

from pylinalg.core.compute.linalg.layout import (
    to_column_major,
    from_column_major,
    to_backend,
    from_backend,
    native_view,
)
from pylinalg.core.compute.linalg.workspace import compute_lwork, query_workspace
from pylinalg.core.compute.linalg.sorting import SortResult, sort_values

__all__ = [
    # Layout
    "to_column_major",
    "from_column_major",
    "to_backend",
    "from_backend",
    "native_view",
    # Workspace
    "compute_lwork",
    "query_workspace",
    # Sorting
    "SortResult",
    "sort_values",
]
