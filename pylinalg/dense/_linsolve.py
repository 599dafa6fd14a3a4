"""
Linear systems and inversion.

solve / solve_spd stage column-major copies of A and B, so the backend's
in-place factorization never touches the caller's arrays. inv works on
the caller's buffer directly: a C-ordered matrix reinterpreted as
column-major is its own transpose, and inv(A^T) = inv(A)^T, so no layout
translation is needed.
"""

from __future__ import annotations

import numpy as np

from pylinalg.core.compute.linalg.layout import from_backend, native_view, to_backend
from pylinalg.core.compute.linalg.workspace import query_workspace
from pylinalg.core.compute.precision import common_dtype
from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result, Status
from pylinalg.dense._common import check_backend_supports, finish, make_timer, status_from_info
from pylinalg.dense.design import MatrixDesign
from pylinalg.dense.solution import InverseParams, SolveParams


def run_solve(
    A: MatrixDesign,
    B: MatrixDesign,
    backend: Backend,
    *,
    routine: str,
    squeeze: bool,
    strict: bool,
) -> Result[SolveParams]:
    """
    Solve A @ X = B with 'gesv' (LU) or 'posv' (Cholesky, upper triangle).

    Args:
        A: Square coefficient matrix (dim x dim)
        B: Right-hand sides (dim x nrhs)
        routine: 'gesv' or 'posv'
        squeeze: Return X as 1D (B was given as a vector)
    """
    dtype = common_dtype(A.data, B.data)
    check_backend_supports(backend, dtype)
    dim, nrhs = B.shape
    timer = make_timer(backend)

    with timer.section('layout'):
        a = to_backend(A.data, dtype=dtype)
        b = to_backend(B.data, dtype=dtype)

    with timer.section('factorization'):
        if routine == 'gesv':
            x, code = backend.gesv(a, b)
        else:
            x, code = backend.posv(a, b)
    status = status_from_info(routine, code)

    with timer.section('postprocess'):
        if status is Status.OK:
            X = from_backend(x)
        else:
            X = np.zeros((dim, nrhs), dtype=dtype)
        if squeeze:
            X = X.ravel()

    info = {
        'routine': routine,
        'status_code': int(code),
        'nrhs': nrhs,
        **A.metadata,
    }
    return finish(
        SolveParams(X=X),
        status=status,
        info=info,
        timer=timer,
        backend=backend,
        strict=strict,
        fallback="X zero-filled",
    )


def run_inv(
    design: MatrixDesign,
    target: np.ndarray,
    backend: Backend,
    *,
    in_place: bool,
    strict: bool,
) -> Result[InverseParams]:
    """
    Invert ``design`` into ``target`` (dim x dim, writable).

    ``target`` may be the caller's own array (in_place=True) or a fresh
    copy of it. A non-contiguous target is inverted through a contiguous
    copy and written back.
    """
    check_backend_supports(backend, design.dtype)
    n = design.rows
    timer = make_timer(backend)
    lwork = None

    with timer.section('layout'):
        work = target if target.flags.c_contiguous else np.ascontiguousarray(target)
        a = native_view(work)

    with timer.section('factorization'):
        lu, piv, code = backend.getrf(a)
    routine = 'getrf'
    status = status_from_info(routine, code)

    if status is Status.OK:
        with timer.section('workspace_query'):
            lwork = query_workspace(backend, 'getri', design.dtype, n=n)
        with timer.section('inversion'):
            inv_a, code = backend.getri(lu, piv, lwork=lwork)
        routine = 'getri'
        status = status_from_info(routine, code)

    with timer.section('postprocess'):
        if status is Status.OK:
            # inv_a is inv(A^T) in column-major order, i.e. inv(A) row-major;
            # a no-op when the backend worked in place
            np.copyto(target, np.asarray(inv_a).T)
        else:
            target[...] = 0

    info = {
        'routine': routine,
        'status_code': int(code),
        'lwork': lwork,
        'in_place': in_place,
        **design.metadata,
    }
    return finish(
        InverseParams(inverse=target),
        status=status,
        info=info,
        timer=timer,
        backend=backend,
        strict=strict,
        fallback="inverse zero-filled",
    )
