"""
Inversion backends.

Available backends:
    CPUGaussJordanBackend: vectorised NumPy reference
    ThreadedGaussJordanBackend: row blocks on a thread pool
    GPUGaussJordanBackend: PyTorch on CUDA/MPS (import directly; needs torch)
"""

from densematrix.inverse.backends.cpu import CPUGaussJordanBackend
from densematrix.inverse.backends.threaded import ThreadedGaussJordanBackend

__all__ = [
    "CPUGaussJordanBackend",
    "ThreadedGaussJordanBackend",
]
