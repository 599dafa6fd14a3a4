"""
Moore-Penrose pseudo-inverse via the reduced SVD.

    A = U_k diag(s) V_k^H,  k = min(rows, cols)
    pinv(A) = V_k diag(1/s) U_k^H

The columns of U_k are scaled in place by the reciprocal singular values,
then a single gemm with both operands (conjugate-)transposed produces the
cols x rows result directly from the backend's U_k and V_k^H.
"""

from __future__ import annotations

import numpy as np

from pylinalg.core.compute.linalg.layout import from_backend, to_backend
from pylinalg.core.compute.linalg.workspace import query_workspace
from pylinalg.core.compute.precision import is_complex, pinv_threshold, real_dtype
from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result, Status
from pylinalg.dense._common import check_backend_supports, finish, make_timer, status_from_info
from pylinalg.dense.design import MatrixDesign
from pylinalg.dense.solution import PinvParams
from pylinalg.vector.ops import scalar_multiply

# BLAS transpose codes
_TRANSPOSE = 1
_CONJ_TRANSPOSE = 2


def scale_factors(
    singular_values: np.ndarray,
    threshold: float,
    truncate: bool,
) -> np.ndarray:
    """
    Column scale factors for U_k.

    Values above ``threshold`` are reciprocated. Values at or below it are
    kept unchanged, or zeroed when ``truncate`` is set.
    """
    s = np.asarray(singular_values)
    above = s > threshold
    kept = np.zeros_like(s) if truncate else s
    return np.where(above, 1.0 / np.where(above, s, 1.0), kept).astype(s.dtype, copy=False)


def run_pinv(
    design: MatrixDesign,
    backend: Backend,
    *,
    threshold: float | None,
    truncate: bool,
    strict: bool,
) -> Result[PinvParams]:
    check_backend_supports(backend, design.dtype)
    m, n = design.shape
    k = min(m, n)
    if threshold is None:
        threshold = pinv_threshold(design.dtype)
    threshold = float(threshold)
    timer = make_timer(backend)

    with timer.section('layout'):
        a = to_backend(design.data)

    with timer.section('workspace_query'):
        lwork = query_workspace(backend, 'gesvd', design.dtype, m=m, n=n, full_matrices=False)

    with timer.section('factorization'):
        u, s, vt, code = backend.gesvd(a, full_matrices=False, lwork=lwork)
    status = status_from_info('gesvd', code)

    if status is Status.OK:
        singular_values = np.asarray(s, dtype=real_dtype(design.dtype))
        factors = scale_factors(singular_values, threshold, truncate)
        with timer.section('postprocess'):
            u = np.asfortranarray(u)
            for i in range(k):
                scalar_multiply(u[:, i], factors[i])
            trans = _CONJ_TRANSPOSE if is_complex(design.dtype) else _TRANSPOSE
            product = backend.gemm(1.0, vt, u, trans_a=trans, trans_b=trans)
            pinv = from_backend(np.asarray(product, dtype=design.dtype))
        rank = int(np.count_nonzero(singular_values > threshold))
    else:
        singular_values = None
        pinv = np.zeros((n, m), dtype=design.dtype)
        rank = 0

    info = {
        'routine': 'gesvd',
        'status_code': int(code),
        'lwork': lwork,
        'full_matrices': False,
        'truncate': truncate,
        **design.metadata,
    }
    return finish(
        PinvParams(
            pinv=pinv,
            singular_values=singular_values,
            rank=rank,
            threshold=threshold,
        ),
        status=status,
        info=info,
        timer=timer,
        backend=backend,
        strict=strict,
        fallback="pseudo-inverse zero-filled",
    )
