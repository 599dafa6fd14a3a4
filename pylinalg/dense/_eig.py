"""
Eigendecompositions.

Symmetric/Hermitian: the backend reads the upper triangle and returns
eigenvalues in ascending order; descending order is obtained by reversing
it, no sort needed.

General: the matrix is promoted to the complex type of its precision and
the backend returns eigenpairs in no particular order. They are sorted by
the real part of the eigenvalue and the same permutation is applied to the
eigenvalues and to both eigenvector sets.
"""

from __future__ import annotations

import numpy as np

from pylinalg.core.capabilities import CAPABILITY_LEFT_EIGENVECTORS
from pylinalg.core.compute.linalg.layout import from_backend, to_backend
from pylinalg.core.compute.linalg.sorting import sort_values
from pylinalg.core.compute.linalg.workspace import query_workspace
from pylinalg.core.compute.precision import complex_dtype, real_dtype
from pylinalg.core.exceptions import ValidationError
from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result, Status
from pylinalg.dense._common import check_backend_supports, finish, make_timer, status_from_info
from pylinalg.dense.design import MatrixDesign
from pylinalg.dense.solution import EigParams, EighParams


def run_eigh(
    design: MatrixDesign,
    backend: Backend,
    *,
    descending: bool,
    strict: bool,
) -> Result[EighParams]:
    check_backend_supports(backend, design.dtype)
    n = design.rows
    timer = make_timer(backend)

    with timer.section('layout'):
        a = to_backend(design.data)

    with timer.section('workspace_query'):
        lwork = query_workspace(backend, 'syev', design.dtype, n=n)

    with timer.section('factorization'):
        w, v, code = backend.syev(a, lwork=lwork)
    status = status_from_info('syev', code)

    with timer.section('postprocess'):
        if status is Status.OK:
            order = np.arange(n)[::-1] if descending else np.arange(n)
            eigenvalues = np.asarray(w, dtype=real_dtype(design.dtype))[order]
            V = from_backend(v)[:, order]
            V = np.ascontiguousarray(V)
        else:
            eigenvalues = np.zeros(n, dtype=real_dtype(design.dtype))
            V = np.zeros((n, n), dtype=design.dtype)
        D = np.diag(eigenvalues)

    info = {
        'routine': 'syev',
        'status_code': int(code),
        'lwork': lwork,
        'order': 'descending' if descending else 'ascending',
        **design.metadata,
    }
    return finish(
        EighParams(V=V, D=D, eigenvalues=eigenvalues),
        status=status,
        info=info,
        timer=timer,
        backend=backend,
        strict=strict,
        fallback="V and D zero-filled",
    )


def run_eig(
    design: MatrixDesign,
    backend: Backend,
    *,
    descending: bool,
    left: bool,
    right: bool,
    values: bool,
    stable: bool,
    strict: bool,
) -> Result[EigParams]:
    dtype = complex_dtype(design.dtype)
    check_backend_supports(backend, dtype)
    if left and not backend.supports(CAPABILITY_LEFT_EIGENVECTORS):
        raise ValidationError(f"backend '{backend.name}' cannot compute left eigenvectors")
    n = design.rows
    timer = make_timer(backend)

    with timer.section('layout'):
        a = to_backend(design.data, dtype=dtype)

    with timer.section('workspace_query'):
        lwork = query_workspace(
            backend, 'geev', dtype, n=n, compute_vl=left, compute_vr=right
        )

    with timer.section('factorization'):
        w, vl, vr, code = backend.geev(a, compute_vl=left, compute_vr=right, lwork=lwork)
    status = status_from_info('geev', code)

    with timer.section('postprocess'):
        VL = VR = D = eigenvalues = None
        if status is Status.OK:
            w = np.asarray(w, dtype=dtype)
            perm = sort_values(w.real, descending, stable=stable).indices
            if left:
                VL = np.ascontiguousarray(from_backend(vl)[:, perm])
            if right:
                VR = np.ascontiguousarray(from_backend(vr)[:, perm])
            if values:
                eigenvalues = w[perm]
                D = np.diag(eigenvalues)
        else:
            if left:
                VL = np.zeros((n, n), dtype=dtype)
            if right:
                VR = np.zeros((n, n), dtype=dtype)
            if values:
                eigenvalues = np.zeros(n, dtype=dtype)
                D = np.zeros((n, n), dtype=dtype)

    info = {
        'routine': 'geev',
        'status_code': int(code),
        'lwork': lwork,
        'order': 'descending' if descending else 'ascending',
        'stable_sort': stable,
        **design.metadata,
    }
    return finish(
        EigParams(VL=VL, VR=VR, D=D, eigenvalues=eigenvalues),
        status=status,
        info=info,
        timer=timer,
        backend=backend,
        strict=strict,
        fallback="requested outputs zero-filled",
    )
