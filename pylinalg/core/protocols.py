"""
Core protocols for PyLinalg.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
any object with the right methods (including test doubles) can be passed
as a backend.

Design Principles:
    - Minimal contracts: probe-size + execute + status code, nothing more
    - Capability-driven: use supports() for optional features
    - Column-major in, column-major out: backends never see row-major data
"""

from typing import Protocol, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class Backend(Protocol):
    """
    Protocol for dense linear algebra backends.

    A backend wraps one vendor library (LAPACK through SciPy, PyTorch on
    GPU, ...). The orchestration layer hands it Fortran-ordered staging
    copies and receives Fortran-ordered results.

    Every execute call returns the backend status code as its last element:
        0   success
        >0  numerical failure (non-convergence, zero pivot, or
            non-positive-definite leading minor, depending on the routine)
        <0  illegal argument (the -status_code'th argument)

    Backends are stateless apart from caches of resolved routines, which
    makes them safe to share between threads working on disjoint data.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_lapack', 'gpu_torch_cuda'
        """
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this backend supports a given capability.

        See pylinalg.core.capabilities for the standard strings.

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...

    def workspace_query(self, routine: str, dtype: np.dtype, **dims: Any) -> int:
        """
        Return the optimal scratch length for ``routine``.

        Only called when supports(CAPABILITY_WORKSPACE_QUERY) is True.

        Args:
            routine: Routine name ('gesvd', 'syev', 'geev', 'getri')
            dtype: Element type of the matrix that will be passed
            **dims: Problem dimensions and routine options
                (m, n, full_matrices, compute_vl, compute_vr)
        """
        ...

    def gesvd(self, a: NDArray[Any], *, full_matrices: bool, lwork: int | None) -> tuple[Any, ...]:
        """Singular value decomposition. Returns (u, s, vt, info)."""
        ...

    def syev(self, a: NDArray[Any], *, lwork: int | None) -> tuple[Any, ...]:
        """Symmetric/Hermitian eigendecomposition (upper triangle). Returns (w, v, info)."""
        ...

    def geev(
        self,
        a: NDArray[Any],
        *,
        compute_vl: bool,
        compute_vr: bool,
        lwork: int | None
    ) -> tuple[Any, ...]:
        """General complex eigendecomposition. Returns (w, vl, vr, info)."""
        ...

    def gesv(self, a: NDArray[Any], b: NDArray[Any]) -> tuple[Any, ...]:
        """LU solve of a @ x = b. Returns (x, info)."""
        ...

    def posv(self, a: NDArray[Any], b: NDArray[Any]) -> tuple[Any, ...]:
        """Cholesky solve of a @ x = b (upper triangle). Returns (x, info)."""
        ...

    def getrf(self, a: NDArray[Any]) -> tuple[Any, ...]:
        """LU factorization. Returns (lu, piv, info)."""
        ...

    def getri(self, lu: NDArray[Any], piv: NDArray[Any], *, lwork: int | None) -> tuple[Any, ...]:
        """Inverse from an LU factorization. Returns (inv, info)."""
        ...

    def gemm(
        self,
        alpha: complex,
        a: NDArray[Any],
        b: NDArray[Any],
        *,
        trans_a: int = 0,
        trans_b: int = 0
    ) -> NDArray[Any]:
        """
        General matrix multiply alpha * op(a) @ op(b).

        trans codes: 0 = none, 1 = transpose, 2 = conjugate transpose.
        """
        ...
