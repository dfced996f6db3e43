"""
GPU backend for Gauss-Jordan inversion using PyTorch.

Same phases and pivot rules as the CPU backend, on tensors. CUDA runs in
float64 so the 1e-9 pivot threshold keeps its meaning. MPS has no float64
and runs in float32, which is flagged in the result's warnings.

The pivot test needs the pivot value on the host, so forward elimination
synchronizes once per step.
"""

from __future__ import annotations

import warnings
from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.result import Result
from densematrix.core.compute.timing import Timer
from densematrix.core.compute.device import DeviceInfo
from densematrix.inverse._elimination import (
    FORWARD,
    NORMALIZE,
    BACKWARD,
    check_pivot,
)
from densematrix.inverse.solution import InverseParams


class GPUGaussJordanBackend:
    """
    PyTorch backend for CUDA and MPS devices.

    Returns float64 numpy arrays regardless of device precision.
    """

    def __init__(self, device: DeviceInfo | None = None):
        """
        Parameters
        ----------
        device : DeviceInfo, optional
            Device info from select_device(). If None, auto-selects.
        """
        import torch

        if device is not None:
            if device.device_type == 'cuda':
                self.device = torch.device(f'cuda:{device.device_index or 0}')
            elif device.device_type == 'mps':
                self.device = torch.device('mps')
            else:
                raise ValueError(
                    f"GPUGaussJordanBackend requires GPU device, got {device.device_type}"
                )
        elif torch.cuda.is_available():
            self.device = torch.device('cuda')
        elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            self.device = torch.device('mps')
        else:
            raise RuntimeError("No GPU available. Use backend='cpu' instead.")

        self.dtype = torch.float32 if self.device.type == 'mps' else torch.float64

    @property
    def name(self) -> str:
        import torch
        precision = 'fp64' if self.dtype == torch.float64 else 'fp32'
        return f'gpu_gauss_jordan_{precision}'

    def solve(self, matrix: NDArray[Any], *, tol: float) -> Result[InverseParams]:
        """
        Invert a square matrix without row pivoting.

        Raises:
            SingularMatrixError: If a pivot is below tol when reached
        """
        import torch

        warnings_list: list[str] = []
        if self.dtype != torch.float64:
            message = (
                f"{self.device.type} has no float64 support; inverting in float32. "
                f"Expect roughly 1e-4 relative error."
            )
            warnings.warn(message)
            warnings_list.append(message)

        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        n = matrix.shape[0]
        with timer.section('data_transfer_to_gpu'):
            work = torch.as_tensor(
                np.ascontiguousarray(matrix), dtype=self.dtype
            ).to(self.device).clone()
            inv = torch.eye(n, dtype=self.dtype, device=self.device)

        with timer.section(FORWARD):
            for k in range(n - 1):
                check_pivot(work[k, k].item(), k, FORWARD, tol)
                coef = work[k + 1:, k] / work[k, k]
                work[k + 1:, k:] -= torch.outer(coef, work[k, k:])
                inv[k + 1:, :] -= torch.outer(coef, inv[k, :])

        with timer.section(NORMALIZE):
            diagonal = torch.diagonal(work)
            bad = torch.nonzero(torch.abs(diagonal) < tol)
            if bad.numel():
                i = int(bad[0, 0].item())
                check_pivot(diagonal[i].item(), i, NORMALIZE, tol)
            pivots = diagonal.clone().unsqueeze(1)
            work = torch.triu(work / pivots) + torch.tril(work, diagonal=-1)
            inv = inv / pivots

        with timer.section(BACKWARD):
            for i in range(n - 2, -1, -1):
                coefs = work[i, i + 1:].clone()
                inv[i, :] -= coefs @ inv[i + 1:, :]
                work[i, i + 1:] = coefs - torch.diagonal(work)[i + 1:] * coefs

        with timer.section('data_transfer_from_gpu'):
            inverse = inv.cpu().numpy().astype(np.float64)

        timer.stop()

        return Result(
            params=InverseParams(inverse=inverse),
            info={
                'method': 'gauss_jordan',
                'pivoting': 'none',
                'n': n,
                'tol': tol,
                'device': str(self.device),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
