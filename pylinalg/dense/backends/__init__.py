"""
Dense linear algebra backends.

Available backends:
    CPULapackBackend: CPU reference implementation using LAPACK via SciPy
    GPUTorchBackend: torch.linalg on CUDA/MPS (imported lazily; needs PyTorch)
"""

from pylinalg.dense.backends.cpu import CPULapackBackend

__all__ = [
    "CPULapackBackend",
]
