"""
Full singular value decomposition.

A (rows x cols) = U (rows x rows) @ S (rows x cols) @ V^H (cols x cols)

The backend returns V^H in column-major order; V itself is handed back
to the caller, so the layout adapter transposes (and, for complex input,
conjugates) on the way out.
"""

from __future__ import annotations

import numpy as np

from pylinalg.core.compute.linalg.layout import from_backend, to_backend
from pylinalg.core.compute.linalg.workspace import query_workspace
from pylinalg.core.compute.precision import real_dtype
from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result, Status
from pylinalg.dense._common import check_backend_supports, finish, make_timer, status_from_info
from pylinalg.dense.design import MatrixDesign
from pylinalg.dense.solution import SVDParams


def run_svd(design: MatrixDesign, backend: Backend, *, strict: bool) -> Result[SVDParams]:
    check_backend_supports(backend, design.dtype)
    m, n = design.shape
    timer = make_timer(backend)

    with timer.section('layout'):
        a = to_backend(design.data)

    with timer.section('workspace_query'):
        lwork = query_workspace(backend, 'gesvd', design.dtype, m=m, n=n, full_matrices=True)

    with timer.section('factorization'):
        u, s, vt, code = backend.gesvd(a, full_matrices=True, lwork=lwork)
    status = status_from_info('gesvd', code)

    with timer.section('postprocess'):
        if status is Status.OK:
            U = from_backend(u)
            V = from_backend(vt, transpose=True, conjugate=True)
            singular_values = np.asarray(s, dtype=real_dtype(design.dtype))
            S = np.zeros((m, n), dtype=singular_values.dtype)
            k = min(m, n)
            S[np.arange(k), np.arange(k)] = singular_values
            params = SVDParams(U=U, S=S, V=V, singular_values=singular_values)
        else:
            params = SVDParams(U=None, S=None, V=None, singular_values=None)

    info = {
        'routine': 'gesvd',
        'status_code': int(code),
        'lwork': lwork,
        'full_matrices': True,
        **design.metadata,
    }
    return finish(
        params,
        status=status,
        info=info,
        timer=timer,
        backend=backend,
        strict=strict,
        fallback="U, S and V set to None",
    )
