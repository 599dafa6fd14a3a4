"""
Dense operation solution types.

Contains the parameter payloads produced by the orchestration layer and
the user-facing solution wrappers around Result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.tolerances import select_tolerance
from pylinalg.core.result import Result, Status

P = TypeVar('P')


# === Parameter payloads ===


@dataclass(frozen=True)
class SVDParams:
    """
    Full singular value decomposition A = U @ S @ V^H.

    All fields are None when the decomposition failed to converge.
    """
    U: NDArray[np.inexact[Any]] | None
    S: NDArray[np.floating[Any]] | None
    V: NDArray[np.inexact[Any]] | None
    singular_values: NDArray[np.floating[Any]] | None


@dataclass(frozen=True)
class EighParams:
    """Symmetric/Hermitian eigendecomposition A @ V = V @ D."""
    V: NDArray[np.inexact[Any]]
    D: NDArray[np.floating[Any]]
    eigenvalues: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class EigParams:
    """
    General eigendecomposition A @ VR = VR @ D, VL^H @ A = D @ VL^H.

    Outputs that were not requested are None.
    """
    VL: NDArray[np.complexfloating[Any, Any]] | None
    VR: NDArray[np.complexfloating[Any, Any]] | None
    D: NDArray[np.complexfloating[Any, Any]] | None
    eigenvalues: NDArray[np.complexfloating[Any, Any]] | None


@dataclass(frozen=True)
class SolveParams:
    """Solution X of A @ X = B."""
    X: NDArray[np.inexact[Any]]


@dataclass(frozen=True)
class InverseParams:
    """Inverse of a square matrix (the caller's array when inverted in place)."""
    inverse: NDArray[np.inexact[Any]]


@dataclass(frozen=True)
class PinvParams:
    """
    Moore-Penrose pseudo-inverse via reduced SVD.

    Attributes:
        pinv: Pseudo-inverse (cols x rows)
        singular_values: The min(rows, cols) singular values, or None if
            the SVD failed
        rank: Number of singular values above threshold
        threshold: Threshold that was applied
    """
    pinv: NDArray[np.inexact[Any]]
    singular_values: NDArray[np.floating[Any]] | None
    rank: int
    threshold: float


# === Solutions ===


@dataclass
class DenseSolution(Generic[P]):
    """
    Common accessors for every dense operation result.

    A solution is always returned, even when the backend failed; check
    ``ok`` / ``status`` or call ``raise_for_status()``.
    """
    _result: Result[P]

    @property
    def status(self) -> Status:
        return self._result.status

    @property
    def ok(self) -> bool:
        return self._result.ok

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def provenance(self) -> dict[str, str]:
        return self._result.provenance

    def raise_for_status(self):
        """
        Raise the exception matching a failed status; return self otherwise.

        Raises:
            ConvergenceError: status NON_CONVERGENCE
            SingularMatrixError: status SINGULAR
            NotPositiveDefiniteError: status NOT_POSITIVE_DEFINITE
        """
        from pylinalg.dense._common import raise_for_status
        raise_for_status(self._result)
        return self

    _title = "Dense Operation"

    def _summary_lines(self) -> list[str]:
        return []

    def summary(self) -> str:
        """Generate a short text report."""
        lines = [
            self._title,
            "=" * 60,
            f"Routine: {self.info.get('routine', '?')}",
            f"Shape: {self.info.get('rows')} x {self.info.get('cols')} ({self.info.get('dtype')})",
            f"Status: {self.status.value} (backend code {self.info.get('status_code')})",
        ]
        lines.extend(self._summary_lines())
        lines.append(f"Backend: {self.backend_name}")
        if self.timing is not None:
            lines.append(f"Time: {self.timing['total_seconds'] * 1e3:.3f} ms")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)


@dataclass
class SVDSolution(DenseSolution[SVDParams]):
    """User-facing SVD result."""
    _title = "Singular Value Decomposition"

    @property
    def U(self) -> NDArray[np.inexact[Any]] | None:
        """Left singular vectors (rows x rows), or None on failure."""
        return self._result.params.U

    @property
    def S(self) -> NDArray[np.floating[Any]] | None:
        """Singular values on the diagonal (rows x cols), or None on failure."""
        return self._result.params.S

    @property
    def V(self) -> NDArray[np.inexact[Any]] | None:
        """Right singular vectors (cols x cols), not transposed, or None on failure."""
        return self._result.params.V

    @property
    def singular_values(self) -> NDArray[np.floating[Any]] | None:
        """The min(rows, cols) singular values, non-increasing."""
        return self._result.params.singular_values

    def reconstructs(self, A: ArrayLike) -> bool:
        """
        Check U @ S @ V^H against A within the backend's tolerance tier.

        Always False for a failed decomposition.
        """
        if not self.ok:
            return False
        A = np.asarray(A)
        if A.ndim == 1:
            A = A.reshape(self.U.shape[0], self.V.shape[0])
        tier = select_tolerance(self.backend_name, self.U.dtype)
        scale = max(float(np.max(np.abs(A))), 1.0)
        approx = self.U @ self.S @ self.V.conj().T
        return bool(np.allclose(approx, A, rtol=tier.rtol, atol=tier.atol * scale))

    def _summary_lines(self) -> list[str]:
        if self.singular_values is None:
            return ["Singular values: <none>"]
        return [f"Singular values: {np.array2string(self.singular_values, precision=6)}"]


@dataclass
class EighSolution(DenseSolution[EighParams]):
    """User-facing symmetric eigendecomposition result."""
    _title = "Symmetric Eigendecomposition"

    @property
    def V(self) -> NDArray[np.inexact[Any]]:
        """Eigenvectors as columns (zeros on failure)."""
        return self._result.params.V

    @property
    def D(self) -> NDArray[np.floating[Any]]:
        """Eigenvalues on the diagonal (zeros on failure)."""
        return self._result.params.D

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        return self._result.params.eigenvalues

    def _summary_lines(self) -> list[str]:
        order = self.info.get('order', 'ascending')
        return [f"Eigenvalues ({order}): {np.array2string(self.eigenvalues, precision=6)}"]


@dataclass
class EigSolution(DenseSolution[EigParams]):
    """User-facing general eigendecomposition result."""
    _title = "General Eigendecomposition"

    @property
    def VL(self) -> NDArray[np.complexfloating[Any, Any]] | None:
        """Left eigenvectors as columns, or None if not requested."""
        return self._result.params.VL

    @property
    def VR(self) -> NDArray[np.complexfloating[Any, Any]] | None:
        """Right eigenvectors as columns, or None if not requested."""
        return self._result.params.VR

    @property
    def D(self) -> NDArray[np.complexfloating[Any, Any]] | None:
        """Eigenvalues on the diagonal, or None if not requested."""
        return self._result.params.D

    @property
    def eigenvalues(self) -> NDArray[np.complexfloating[Any, Any]] | None:
        return self._result.params.eigenvalues

    def _summary_lines(self) -> list[str]:
        if self.eigenvalues is None:
            return []
        order = self.info.get('order', 'ascending')
        return [f"Eigenvalues ({order} by real part): "
                f"{np.array2string(self.eigenvalues, precision=6)}"]


@dataclass
class SolveSolution(DenseSolution[SolveParams]):
    """User-facing linear solve result."""
    _title = "Linear Solve"

    @property
    def X(self) -> NDArray[np.inexact[Any]]:
        """Solution (dim x nrhs, or 1D for a 1D right-hand side); zeros on failure."""
        return self._result.params.X

    def _summary_lines(self) -> list[str]:
        return [f"Right-hand sides: {self.info.get('nrhs')}"]


@dataclass
class InverseSolution(DenseSolution[InverseParams]):
    """User-facing inversion result."""
    _title = "Matrix Inverse"

    @property
    def inverse(self) -> NDArray[np.inexact[Any]]:
        """The inverse; zeros on failure. Same object as the input when in place."""
        return self._result.params.inverse

    def _summary_lines(self) -> list[str]:
        return [f"In place: {self.info.get('in_place')}"]


@dataclass
class PinvSolution(DenseSolution[PinvParams]):
    """User-facing pseudo-inverse result."""
    _title = "Pseudo-Inverse"

    @property
    def pinv(self) -> NDArray[np.inexact[Any]]:
        """Pseudo-inverse (cols x rows); zeros on failure."""
        return self._result.params.pinv

    @property
    def singular_values(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.singular_values

    @property
    def rank(self) -> int:
        """Number of singular values above the threshold."""
        return self._result.params.rank

    @property
    def threshold(self) -> float:
        return self._result.params.threshold

    def _summary_lines(self) -> list[str]:
        return [
            f"Threshold: {self.threshold:.3g}",
            f"Rank: {self.rank}",
        ]
