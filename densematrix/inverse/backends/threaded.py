"""
Thread-pool backend for Gauss-Jordan inversion.

Each row-parallel region is split into contiguous row blocks that run on
a ThreadPoolExecutor; waiting for every block of a region is the barrier
before the next region starts. NumPy releases the GIL inside the block
kernels, so blocks overlap on multi-core machines.

Pivot checks run on the coordinating thread before a region forks, so a
singular pivot is reported deterministically regardless of scheduling.

Only worth it for large matrices; for small ones the vectorised CPU
backend is faster.
"""

from __future__ import annotations

import os
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import ValidationError
from densematrix.core.result import Result
from densematrix.core.compute.timing import Timer
from densematrix.inverse._elimination import (
    FORWARD,
    NORMALIZE,
    BACKWARD,
    back_substitute,
    check_diagonal,
    check_pivot,
    eliminate_below,
    normalize_rows,
)
from densematrix.inverse.solution import InverseParams


def _partition(start: int, stop: int, n_blocks: int) -> list[tuple[int, int]]:
    """Split [start, stop) into at most n_blocks contiguous, nearly equal blocks."""
    count = stop - start
    if count <= 0:
        return []
    n_blocks = min(n_blocks, count)
    base, extra = divmod(count, n_blocks)
    blocks = []
    lo = start
    for b in range(n_blocks):
        hi = lo + base + (1 if b < extra else 0)
        blocks.append((lo, hi))
        lo = hi
    return blocks


class ThreadedGaussJordanBackend:
    """
    Fork/join backend on a thread pool.

    Parameters
    ----------
    n_jobs : int, optional
        Number of worker threads. Defaults to min(cpu_count, 4).
    min_block : int
        Regions with fewer rows than this run on the calling thread.
    """

    def __init__(self, n_jobs: int | None = None, min_block: int = 64):
        if n_jobs is None:
            n_jobs = min(os.cpu_count() or 1, 4)
        if isinstance(n_jobs, bool) or not isinstance(n_jobs, int) or n_jobs < 1:
            raise ValidationError(f"n_jobs: must be a positive integer, got {n_jobs!r}")
        self.n_jobs = n_jobs
        self.min_block = min_block

    @property
    def name(self) -> str:
        return 'threads_gauss_jordan'

    def _parallel_for(
        self,
        executor: Executor,
        start: int,
        stop: int,
        kernel: Callable[[int, int], Any],
    ) -> list[Any]:
        """Run kernel over row blocks of [start, stop) and wait for all of them."""
        if stop - start < self.min_block:
            return [kernel(start, stop)] if stop > start else []
        futures = [
            executor.submit(kernel, lo, hi)
            for lo, hi in _partition(start, stop, self.n_jobs)
        ]
        # barrier: result() re-raises any worker exception
        return [future.result() for future in futures]

    def solve(self, matrix: NDArray[Any], *, tol: float) -> Result[InverseParams]:
        """
        Invert a square matrix without row pivoting.

        Same three phases as the CPU backend. Forward elimination forks
        over rows below pivot k, normalization over all rows, backward
        elimination over columns j > i (block partial sums are reduced on
        the coordinating thread).

        Raises:
            SingularMatrixError: If a pivot is below tol when reached
        """
        timer = Timer()
        timer.start()

        n = matrix.shape[0]
        work = np.array(matrix, dtype=np.float64, order='C', copy=True)
        inv = np.eye(n, dtype=np.float64)

        with ThreadPoolExecutor(max_workers=self.n_jobs) as executor:
            with timer.section(FORWARD):
                for k in range(n - 1):
                    check_pivot(float(work[k, k]), k, FORWARD, tol)
                    self._parallel_for(
                        executor, k + 1, n,
                        lambda lo, hi, k=k: eliminate_below(work, inv, k, lo, hi),
                    )

            with timer.section(NORMALIZE):
                check_diagonal(work, tol)
                self._parallel_for(
                    executor, 0, n,
                    lambda lo, hi: normalize_rows(work, inv, lo, hi),
                )

            with timer.section(BACKWARD):
                for i in range(n - 2, -1, -1):
                    partials = self._parallel_for(
                        executor, i + 1, n,
                        lambda lo, hi, i=i: back_substitute(work, inv, i, lo, hi),
                    )
                    inv[i, :] -= np.sum(partials, axis=0)

        timer.stop()

        return Result(
            params=InverseParams(inverse=inv),
            info={
                'method': 'gauss_jordan',
                'pivoting': 'none',
                'n': n,
                'tol': tol,
                'n_jobs': self.n_jobs,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
