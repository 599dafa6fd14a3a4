"""
Generic result container for all PyLinalg computations.

The Result class provides a standardized envelope that all operation-specific
results use. This enables shared tooling for timing, warnings, reproducibility,
and failure reporting while allowing each operation to define its own
payload structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - Explicit Status tag: a failed computation is never represented only
      by a zero (or None) payload
    - info dict for flexible metadata (routine, status code, workspace size)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


class Status(Enum):
    """Outcome of a backend computation."""
    OK = 'ok'
    NON_CONVERGENCE = 'non_convergence'
    SINGULAR = 'singular'
    NOT_POSITIVE_DEFINITE = 'not_positive_definite'


def _default_provenance() -> dict[str, str]:
    """Library versions in effect when a result was produced."""
    import numpy as np
    import scipy

    from pylinalg import __version__

    return {
        'pylinalg_version': __version__,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for dense linear algebra computations.

    Type Parameters:
        P: The operation-specific parameter payload type

    Attributes:
        params: Operation payload (factors, solution, inverse, ...)
        info: Structured metadata (routine, status code, workspace length)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used to produce the result
        status: Success/failure tag of the backend computation

    Examples:
        >>> Result(
        ...     params=SVDParams(U=U, S=S, V=V, singular_values=s),
        ...     info={'routine': 'gesvd', 'status_code': 0, 'lwork': 134},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_lapack'
        ... )

        >>> Result(
        ...     params=SolveParams(X=np.zeros((3, 1))),
        ...     info={'routine': 'gesv', 'status_code': 2},
        ...     timing=None,
        ...     backend_name='cpu_lapack',
        ...     status=Status.SINGULAR,
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)
    status: Status = Status.OK

    @property
    def ok(self) -> bool:
        """True if the backend computation succeeded."""
        return self.status is Status.OK

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
