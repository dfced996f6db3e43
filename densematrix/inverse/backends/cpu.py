"""
CPU reference backend for Gauss-Jordan inversion.

Every row-parallel region of the algorithm is issued as one vectorised
NumPy operation over all of its independent rows, so the statement
boundary is the barrier between elimination steps.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

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


class CPUGaussJordanBackend:
    """
    Vectorised NumPy backend.

    Implements the InversionBackend protocol. This is the reference that
    the threaded and GPU backends are validated against.
    """

    @property
    def name(self) -> str:
        return 'cpu_gauss_jordan'

    def solve(self, matrix: NDArray[Any], *, tol: float) -> Result[InverseParams]:
        """
        Invert a square matrix without row pivoting.

        Algorithm:
            1. Forward elimination: for k = 0..n-2, reject |work[k, k]| < tol,
               then clear column k below the pivot in work and mirror the
               row operations onto inv.
            2. Normalization: reject any |work[i, i]| < tol, then divide
               each row of work and inv by its diagonal.
            3. Backward elimination: for i = n-2..0, subtract the finished
               rows j > i from inv[i] and zero work[i, j].

        Raises:
            SingularMatrixError: If a pivot is below tol when reached
        """
        timer = Timer()
        timer.start()

        n = matrix.shape[0]
        work = np.array(matrix, dtype=np.float64, order='C', copy=True)
        inv = np.eye(n, dtype=np.float64)

        with timer.section(FORWARD):
            for k in range(n - 1):
                check_pivot(float(work[k, k]), k, FORWARD, tol)
                eliminate_below(work, inv, k, k + 1, n)

        with timer.section(NORMALIZE):
            check_diagonal(work, tol)
            normalize_rows(work, inv, 0, n)

        # Contributions of rows j > i are summed as one dot product, not
        # subtracted one at a time from the right; only rounding differs.
        with timer.section(BACKWARD):
            for i in range(n - 2, -1, -1):
                inv[i, :] -= back_substitute(work, inv, i, i + 1, n)

        timer.stop()

        return Result(
            params=InverseParams(inverse=inv),
            info={'method': 'gauss_jordan', 'pivoting': 'none', 'n': n, 'tol': tol},
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
