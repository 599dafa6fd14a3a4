"""
Shared compute infrastructure for PyLinalg.

This module provides hardware detection, timing utilities, precision
bookkeeping, and the layout/workspace/sorting kernels shared by every
dense operation.

IMPORTANT: This is NOT where backends live. Those go in
pylinalg/dense/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Precision tiers, dtype helpers, pinv thresholds
    tolerances: Tolerance tiers for comparing results
    linalg: Layout adapter, workspace protocol, value sorter
"""

from pylinalg.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pylinalg.core.compute.timing import Timer, timed

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    "timed",
]
