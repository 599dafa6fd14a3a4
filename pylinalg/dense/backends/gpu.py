"""
GPU backend for dense linear algebra using PyTorch.

Performance path for large problems - validated against the LAPACK
reference. Supports CUDA (Linux/Windows), MPS (macOS Apple Silicon), and
torch's own CPU kernels (useful for validating this backend on machines
without a GPU).

torch sizes its own scratch memory, so this backend does not take part in
the workspace query. Status codes come from the torch '*_ex' routines
where they exist; otherwise a torch.linalg.LinAlgError or a non-finite
result is reported as status 1.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.capabilities import (
    CAPABILITY_COMPLEX,
    CAPABILITY_DOUBLE_PRECISION,
    CAPABILITY_LEFT_EIGENVECTORS,
    CAPABILITY_SINGLE_PRECISION,
)
from pylinalg.core.exceptions import BackendError

# Status reported when torch raises instead of returning a status code
_FAILED = 1


class GPUTorchBackend:
    """
    Backend running torch.linalg kernels on a GPU (or on torch's CPU).

    Implements the Backend protocol. Element types are preserved: a
    float64 matrix is factorized in float64, which consumer GPUs run
    slowly and MPS does not run at all.
    """

    def __init__(self, device: str = 'cuda'):
        """
        Initialize torch backend.

        Args:
            device: torch device type ('cuda', 'cuda:0', 'mps', 'cpu')

        Raises:
            RuntimeError: If the requested device is unavailable
            ValueError: If the device string is not recognized
        """
        import torch

        if device.startswith('cuda'):
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "CUDA not available. Install PyTorch with CUDA support, "
                    "or use backend='cpu'."
                )
            self.device = torch.device(device)
            self.device_type = 'cuda'
            self.device_name = torch.cuda.get_device_properties(self.device).name
            self._capabilities = frozenset({
                CAPABILITY_SINGLE_PRECISION,
                CAPABILITY_DOUBLE_PRECISION,
                CAPABILITY_COMPLEX,
                CAPABILITY_LEFT_EIGENVECTORS,
            })

        elif device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
            self.device = torch.device('mps')
            self.device_type = 'mps'
            self.device_name = 'Apple Silicon GPU (MPS)'
            # no float64 and only partial complex support on MPS
            self._capabilities = frozenset({CAPABILITY_SINGLE_PRECISION})

        elif device == 'cpu':
            self.device = torch.device('cpu')
            self.device_type = 'cpu'
            self.device_name = 'torch CPU'
            self._capabilities = frozenset({
                CAPABILITY_SINGLE_PRECISION,
                CAPABILITY_DOUBLE_PRECISION,
                CAPABILITY_COMPLEX,
                CAPABILITY_LEFT_EIGENVECTORS,
            })

        else:
            raise ValueError(
                f"Unknown torch device: {device!r}. Use 'cuda', 'mps' or 'cpu'."
            )

    @property
    def name(self) -> str:
        if self.device_type == 'cpu':
            return 'cpu_torch'
        return f'gpu_torch_{self.device_type}'

    @property
    def sync_target(self) -> str | None:
        """Device the Timer must synchronize for accurate section timings."""
        return self.device_type if self.device_type in ('cuda', 'mps') else None

    def supports(self, capability: str) -> bool:
        return capability in self._capabilities

    def workspace_query(self, routine: str, dtype: np.dtype, **dims: Any) -> int:
        raise BackendError(
            f"{routine}: backend '{self.name}' manages its own workspace",
            routine=routine,
        )

    # === Transfers ===

    def _tensor(self, a: NDArray[Any]):
        import torch
        return torch.from_numpy(np.asarray(a)).to(self.device)

    @staticmethod
    def _array(t) -> NDArray[Any]:
        return np.asfortranarray(t.detach().cpu().numpy())

    # === Routines ===

    def gesvd(
        self,
        a: NDArray[Any],
        *,
        full_matrices: bool,
        lwork: int | None,
    ) -> tuple[Any, ...]:
        import torch

        try:
            U, S, Vh = torch.linalg.svd(self._tensor(a), full_matrices=full_matrices)
        except torch.linalg.LinAlgError:
            return None, None, None, _FAILED
        if not bool(torch.isfinite(S).all()):
            return None, None, None, _FAILED
        return self._array(U), self._array(S), self._array(Vh), 0

    def syev(self, a: NDArray[Any], *, lwork: int | None) -> tuple[Any, ...]:
        import torch

        try:
            w, v = torch.linalg.eigh(self._tensor(a), UPLO='U')
        except torch.linalg.LinAlgError:
            return None, None, _FAILED
        return self._array(w), self._array(v), 0

    def geev(
        self,
        a: NDArray[Any],
        *,
        compute_vl: bool,
        compute_vr: bool,
        lwork: int | None,
    ) -> tuple[Any, ...]:
        import torch

        try:
            w, vr = torch.linalg.eig(self._tensor(a))
            vl = None
            if compute_vl:
                # rows of inv(VR) are the left eigenvectors (conjugated);
                # normalize to unit 2-norm like LAPACK
                vl = torch.linalg.inv(vr).mH
                vl = vl / torch.linalg.vector_norm(vl, dim=0, keepdim=True)
        except torch.linalg.LinAlgError:
            return None, None, None, _FAILED
        return (
            self._array(w),
            self._array(vl) if vl is not None else None,
            self._array(vr) if compute_vr else None,
            0,
        )

    def gesv(self, a: NDArray[Any], b: NDArray[Any]) -> tuple[Any, ...]:
        import torch

        x, info = torch.linalg.solve_ex(self._tensor(a), self._tensor(b))
        info = int(info.item())
        return (self._array(x) if info == 0 else None), info

    def posv(self, a: NDArray[Any], b: NDArray[Any]) -> tuple[Any, ...]:
        import torch

        A = self._tensor(a)
        # Hermitian matrix defined by the upper triangle only
        A = torch.triu(A) + torch.triu(A, diagonal=1).mH
        L, info = torch.linalg.cholesky_ex(A)
        info = int(info.item())
        if info != 0:
            return None, info
        x = torch.cholesky_solve(self._tensor(b), L)
        return self._array(x), 0

    def getrf(self, a: NDArray[Any]) -> tuple[Any, ...]:
        """LU factorization. lu and piv stay on the device for getri()."""
        import torch

        LU, pivots, info = torch.linalg.lu_factor_ex(self._tensor(a))
        return LU, pivots, int(info.item())

    def getri(self, lu, piv, *, lwork: int | None) -> tuple[Any, ...]:
        import torch

        n = lu.shape[-1]
        eye = torch.eye(n, dtype=lu.dtype, device=lu.device)
        inv_a = torch.linalg.lu_solve(lu, piv, eye)
        if not bool(torch.isfinite(inv_a).all()):
            return None, _FAILED
        return self._array(inv_a), 0

    def gemm(
        self,
        alpha: complex,
        a: NDArray[Any],
        b: NDArray[Any],
        *,
        trans_a: int = 0,
        trans_b: int = 0,
    ) -> NDArray[Any]:
        A = _op(self._tensor(a), trans_a)
        B = _op(self._tensor(b), trans_b)
        return self._array(alpha * (A @ B))


def _op(t, trans: int):
    """Apply a BLAS transpose code: 0 none, 1 transpose, 2 conjugate transpose."""
    if trans == 0:
        return t
    if trans == 1:
        return t.mT
    return t.mH
