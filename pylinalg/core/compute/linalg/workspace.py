"""
Two-phase workspace protocol.

LAPACK routines that need scratch memory (gesvd, syev/heev, geev, getri)
are called twice: first with the requested length set to the sentinel -1,
in which case the routine only reports its optimal scratch length, then a
second time with a scratch buffer of exactly that length. The optimal
length depends on the problem dimensions and on the LAPACK build (block
sizes), so it cannot be computed by the caller.

query_workspace() is the orchestrator-facing half: it asks a backend for
the length, or returns None when the backend manages scratch itself.
compute_lwork() is the backend-facing half: it runs a SciPy '*_lwork'
probe (which issues the lwork=-1 call) and turns its output into a
usable integer.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.typing import DTypeLike

from pylinalg.core.capabilities import CAPABILITY_WORKSPACE_QUERY
from pylinalg.core.exceptions import BackendError
from pylinalg.core.protocols import Backend


def compute_lwork(routine: Callable[..., Any], *args: Any, **kwargs: Any) -> int:
    """
    Run a LAPACK workspace probe and return the optimal length.

    Args:
        routine: A SciPy '*_lwork' function (returns (work, ..., info))
        *args, **kwargs: Problem dimensions and options for the probe

    Returns:
        Optimal scratch length as a Python int

    Raises:
        BackendError: If the probe reports a non-zero status or a length
            outside the range of 32-bit LAPACK
    """
    name = getattr(routine, '__name__', repr(routine))
    wi = routine(*args, **kwargs)
    if len(wi) < 2:
        raise BackendError(f"{name}: malformed workspace query result", routine=name)
    info = int(wi[-1])
    if info != 0:
        raise BackendError(
            f"{name}: internal work array size computation failed: {info}",
            routine=name,
            status_code=info,
        )

    lwork = max(float(np.real(w)) for w in wi[:-1])

    dtype = getattr(routine, 'dtype', None)
    if dtype == np.float32 or dtype == np.complex64:
        # The size comes back as a single-precision float and may have
        # been truncated; take the next representable value up.
        lwork = float(np.nextafter(np.float32(lwork), np.float32(np.inf)))

    if lwork < 0 or lwork > np.iinfo(np.int32).max:
        raise BackendError(
            f"{name}: work array of {lwork:.0f} elements exceeds 32-bit LAPACK range",
            routine=name,
        )
    return max(int(lwork), 1)


def query_workspace(
    backend: Backend,
    routine: str,
    dtype: DTypeLike,
    **dims: Any,
) -> int | None:
    """
    Ask a backend for the optimal scratch length of a routine.

    Args:
        backend: Backend that will execute the routine
        routine: Routine name ('gesvd', 'syev', 'geev', 'getri')
        dtype: Element type of the matrix
        **dims: Dimensions and options forwarded to the backend

    Returns:
        Scratch length to pass to the execute call, or None if the backend
        does not support workspace queries

    Raises:
        BackendError: If the backend reports a non-positive length
    """
    if not backend.supports(CAPABILITY_WORKSPACE_QUERY):
        return None

    lwork = int(backend.workspace_query(routine, np.dtype(dtype), **dims))
    if lwork < 1:
        raise BackendError(
            f"{routine}: backend '{backend.name}' reported workspace length {lwork}",
            routine=routine,
        )
    return lwork
