"""
Numerical precision constants and utilities.

Provides dtype bookkeeping for the four supported element types and the
per-precision singular-value thresholds used by the pseudo-inverse.
"""

import numpy as np
from numpy.typing import DTypeLike
from typing import Literal


# Singular values at or below these are not reciprocated by pinv().
# Both are absolute, not relative to the largest singular value.
PINV_THRESHOLD_FP32: float = 1e-5
PINV_THRESHOLD_FP64: float = 1e-9

SUPPORTED_DTYPES = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.complex64),
    np.dtype(np.complex128),
)

PrecisionTier = Literal['fp32', 'fp64']


def precision_tier(dtype: DTypeLike) -> PrecisionTier:
    """
    Classify a dtype as single ('fp32') or double ('fp64') precision.

    complex64 is single precision, complex128 double.

    Raises:
        ValueError: If dtype is not one of the supported element types
    """
    dtype = np.dtype(dtype)
    if dtype not in SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported dtype {dtype}; expected one of "
                         f"{', '.join(str(d) for d in SUPPORTED_DTYPES)}")
    return 'fp32' if dtype in (np.float32, np.complex64) else 'fp64'


def real_dtype(dtype: DTypeLike) -> np.dtype:
    """Real counterpart of a dtype (complex64 -> float32, ...)."""
    return np.dtype(np.float32) if precision_tier(dtype) == 'fp32' else np.dtype(np.float64)


def complex_dtype(dtype: DTypeLike) -> np.dtype:
    """Complex counterpart of a dtype (float32 -> complex64, ...)."""
    return np.dtype(np.complex64) if precision_tier(dtype) == 'fp32' else np.dtype(np.complex128)


def is_complex(dtype: DTypeLike) -> bool:
    """True for complex element types."""
    return np.issubdtype(np.dtype(dtype), np.complexfloating)


def pinv_threshold(dtype: DTypeLike) -> float:
    """
    Default singular-value threshold for pseudo-inversion.

    Args:
        dtype: Element type of the matrix being pseudo-inverted

    Returns:
        PINV_THRESHOLD_FP32 for single precision, PINV_THRESHOLD_FP64
        for double precision
    """
    if precision_tier(dtype) == 'fp32':
        return PINV_THRESHOLD_FP32
    return PINV_THRESHOLD_FP64


def common_dtype(*arrays: np.ndarray) -> np.dtype:
    """
    Smallest supported dtype that can hold all arrays without loss.

    Mixing float32 with float64 gives float64; mixing real with complex
    gives the complex type of the wider precision.
    """
    dtype = np.result_type(*arrays)
    if dtype not in SUPPORTED_DTYPES:
        dtype = np.dtype(np.complex128) if is_complex(dtype) else np.dtype(np.float64)
    return dtype
