"""
CPU reference backend using LAPACK/BLAS through SciPy.

Routines are resolved per element type with get_lapack_funcs /
get_blas_funcs and cached, so repeated calls skip SciPy's dtype dispatch.
All matrices passed in are Fortran-ordered staging copies owned by the
orchestration layer, so every routine is allowed to overwrite its inputs.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray
from scipy.linalg.blas import get_blas_funcs
from scipy.linalg.lapack import get_lapack_funcs

from pylinalg.core.capabilities import (
    CAPABILITY_COMPLEX,
    CAPABILITY_DOUBLE_PRECISION,
    CAPABILITY_LEFT_EIGENVECTORS,
    CAPABILITY_SINGLE_PRECISION,
    CAPABILITY_WORKSPACE_QUERY,
)
from pylinalg.core.compute.linalg.workspace import compute_lwork
from pylinalg.core.compute.precision import is_complex


# Resolved routines, keyed by (name, dtype). Filled lazily; entries are
# never replaced, so concurrent readers see either nothing or the final value.
_routine_cache: dict[tuple[str, np.dtype], Callable[..., Any]] = {}


def lapack_routine(name: str, dtype: np.dtype) -> Callable[..., Any]:
    """
    Return the LAPACK (or BLAS) routine ``name`` for element type ``dtype``.

    Args:
        name: Routine name without precision prefix ('gesvd', 'gemm', ...)
        dtype: Element type

    Returns:
        The SciPy wrapper for the prefixed routine (sgesvd, zgemm, ...)

    Raises:
        ValueError: If neither LAPACK nor BLAS provides the routine
    """
    key = (name, np.dtype(dtype))
    if key in _routine_cache:
        return _routine_cache[key]

    try:
        func = get_lapack_funcs(name, dtype=dtype)
    except ValueError as e:
        if 'LAPACK function' not in str(e):
            raise
        func = get_blas_funcs(name, dtype=dtype)
    _routine_cache[key] = func
    return func


def _with_lwork(kwargs: dict[str, Any], lwork: int | None) -> dict[str, Any]:
    if lwork is not None:
        kwargs['lwork'] = lwork
    return kwargs


class CPULapackBackend:
    """
    CPU backend calling LAPACK through scipy.linalg.lapack.

    Implements the Backend protocol. This is the reference implementation
    against which other backends are validated.
    """

    _capabilities = frozenset({
        CAPABILITY_WORKSPACE_QUERY,
        CAPABILITY_SINGLE_PRECISION,
        CAPABILITY_DOUBLE_PRECISION,
        CAPABILITY_COMPLEX,
        CAPABILITY_LEFT_EIGENVECTORS,
    })

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def supports(self, capability: str) -> bool:
        return capability in self._capabilities

    def workspace_query(self, routine: str, dtype: np.dtype, **dims: Any) -> int:
        """
        Optimal lwork for ``routine`` via the matching '*_lwork' probe.

        Recognized dims per routine:
            gesvd: m, n, full_matrices
            syev:  n
            geev:  n, compute_vl, compute_vr
            getri: n
        """
        if routine == 'gesvd':
            probe = lapack_routine('gesvd_lwork', dtype)
            return compute_lwork(
                probe, dims['m'], dims['n'],
                compute_uv=1, full_matrices=int(dims.get('full_matrices', True)),
            )
        if routine == 'syev':
            probe = lapack_routine('heev_lwork' if is_complex(dtype) else 'syev_lwork', dtype)
            return compute_lwork(probe, dims['n'], lower=0)
        if routine == 'geev':
            probe = lapack_routine('geev_lwork', dtype)
            return compute_lwork(
                probe, dims['n'],
                compute_vl=int(dims.get('compute_vl', True)),
                compute_vr=int(dims.get('compute_vr', True)),
            )
        if routine == 'getri':
            probe = lapack_routine('getri_lwork', dtype)
            return compute_lwork(probe, dims['n'])
        raise ValueError(f"No workspace query for routine {routine!r}")

    def gesvd(
        self,
        a: NDArray[Any],
        *,
        full_matrices: bool,
        lwork: int | None,
    ) -> tuple[NDArray[Any], NDArray[Any], NDArray[Any], int]:
        func = lapack_routine('gesvd', a.dtype)
        u, s, vt, info = func(a, **_with_lwork({
            'compute_uv': 1,
            'full_matrices': int(full_matrices),
            'overwrite_a': 1,
        }, lwork))
        return u, s, vt, int(info)

    def syev(
        self,
        a: NDArray[Any],
        *,
        lwork: int | None,
    ) -> tuple[NDArray[Any], NDArray[Any], int]:
        func = lapack_routine('heev' if is_complex(a.dtype) else 'syev', a.dtype)
        w, v, info = func(a, **_with_lwork({
            'compute_v': 1,
            'lower': 0,
            'overwrite_a': 1,
        }, lwork))
        return w, v, int(info)

    def geev(
        self,
        a: NDArray[Any],
        *,
        compute_vl: bool,
        compute_vr: bool,
        lwork: int | None,
    ) -> tuple[NDArray[Any], NDArray[Any] | None, NDArray[Any] | None, int]:
        if not is_complex(a.dtype):
            raise ValueError(f"geev expects a complex matrix, got {a.dtype}")
        func = lapack_routine('geev', a.dtype)
        w, vl, vr, info = func(a, **_with_lwork({
            'compute_vl': int(compute_vl),
            'compute_vr': int(compute_vr),
            'overwrite_a': 1,
        }, lwork))
        return w, (vl if compute_vl else None), (vr if compute_vr else None), int(info)

    def gesv(self, a: NDArray[Any], b: NDArray[Any]) -> tuple[NDArray[Any], int]:
        func = lapack_routine('gesv', a.dtype)
        _, _, x, info = func(a, b, overwrite_a=1, overwrite_b=1)
        return x, int(info)

    def posv(self, a: NDArray[Any], b: NDArray[Any]) -> tuple[NDArray[Any], int]:
        func = lapack_routine('posv', a.dtype)
        _, x, info = func(a, b, lower=0, overwrite_a=1, overwrite_b=1)
        return x, int(info)

    def getrf(self, a: NDArray[Any]) -> tuple[NDArray[Any], NDArray[Any], int]:
        func = lapack_routine('getrf', a.dtype)
        lu, piv, info = func(a, overwrite_a=1)
        return lu, piv, int(info)

    def getri(
        self,
        lu: NDArray[Any],
        piv: NDArray[Any],
        *,
        lwork: int | None,
    ) -> tuple[NDArray[Any], int]:
        func = lapack_routine('getri', lu.dtype)
        inv_a, info = func(lu, piv, **_with_lwork({'overwrite_lu': 1}, lwork))
        return inv_a, int(info)

    def gemm(
        self,
        alpha: complex,
        a: NDArray[Any],
        b: NDArray[Any],
        *,
        trans_a: int = 0,
        trans_b: int = 0,
    ) -> NDArray[Any]:
        func = lapack_routine('gemm', np.result_type(a, b))
        return func(alpha, a, b, trans_a=trans_a, trans_b=trans_b)
