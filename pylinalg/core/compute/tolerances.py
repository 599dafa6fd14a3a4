"""
Tolerance tiers for numerical validation.

Defines precision expectations for comparing factorization results
(reconstruction residuals, backend-vs-backend agreement):
- CPU FP64 (reference): LAPACK in double precision
- CPU FP32: LAPACK in single precision
- GPU FP64: same as CPU FP64
- GPU FP32: relaxed for single-precision GPU kernels

Used by the test suite and by SVDSolution.reconstructs().
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike

from pylinalg.core.compute.precision import precision_tier


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance pair for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision LAPACK reference',
)

CPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='cpu_fp32',
    description='CPU single precision LAPACK',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

GPU_FP32 = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='gpu_fp32',
    description='GPU single precision',
)


def select_tolerance(backend_name: str, dtype: DTypeLike = np.float64) -> ToleranceTier:
    """Select appropriate tolerance tier for a backend and element type."""
    single = precision_tier(dtype) == 'fp32'
    if 'gpu' in backend_name:
        return GPU_FP32 if single else GPU_FP64
    return CPU_FP32 if single else CPU_FP64
