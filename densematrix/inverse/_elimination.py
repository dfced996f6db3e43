"""
Row kernels for Gauss-Jordan inversion on NumPy arrays.

Each kernel updates a contiguous block of rows [start, stop) of the
working matrix `work` and its companion `inv` in place. Within one
elimination step the blocks are independent, so a caller may run them
one after another (CPU backend, a single block) or concurrently on a
thread pool (threaded backend, several blocks joined before the next
step). No kernel reads a row that another block of the same step writes.

The algorithm never swaps rows. A pivot whose magnitude falls below the
tolerance is fatal and raises SingularMatrixError.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import SingularMatrixError

FORWARD = 'forward_elimination'
NORMALIZE = 'normalization'
BACKWARD = 'backward_elimination'


def check_pivot(value: float, index: int, phase: str, tol: float) -> None:
    """Raise SingularMatrixError if |value| < tol."""
    if abs(value) < tol:
        if phase == FORWARD:
            message = (
                f"Near-zero pivot {value:g} at ({index}, {index}) during forward "
                f"elimination (|pivot| < {tol:g}). Rows are not permuted; "
                f"reorder the rows of the input."
            )
        else:
            message = (
                f"Near-zero diagonal {value:g} at ({index}, {index}) during "
                f"{phase.replace('_', ' ')} (|pivot| < {tol:g})."
            )
        raise SingularMatrixError(
            message,
            pivot_value=float(value),
            pivot_index=index,
            phase=phase,
            tolerance=tol,
        )


def check_diagonal(work: NDArray[np.floating[Any]], tol: float) -> None:
    """Check every diagonal entry before normalization; the first bad row raises."""
    diagonal = np.diag(work)
    bad = np.flatnonzero(np.abs(diagonal) < tol)
    if bad.size:
        i = int(bad[0])
        check_pivot(float(diagonal[i]), i, NORMALIZE, tol)


def eliminate_below(
    work: NDArray[np.floating[Any]],
    inv: NDArray[np.floating[Any]],
    k: int,
    start: int,
    stop: int,
) -> None:
    """
    Clear column k in rows [start, stop) using pivot row k.

    For each row i: coef = work[i, k] / work[k, k], then
    work[i, k:] -= coef * work[k, k:] and inv[i, :] -= coef * inv[k, :].
    Requires start > k.
    """
    coef = work[start:stop, k] / work[k, k]
    work[start:stop, k:] -= np.outer(coef, work[k, k:])
    inv[start:stop, :] -= np.outer(coef, inv[k, :])


def normalize_rows(
    work: NDArray[np.floating[Any]],
    inv: NDArray[np.floating[Any]],
    start: int,
    stop: int,
) -> None:
    """
    Divide rows [start, stop) by their diagonal entry.

    In `work` only entries on or right of the diagonal are divided; the
    entries left of it are never read again.
    """
    rows = np.arange(start, stop)
    pivots = work[rows, rows].copy()[:, np.newaxis]
    upper = np.arange(work.shape[1])[np.newaxis, :] >= rows[:, np.newaxis]
    block = work[start:stop]
    block[upper] = (block / pivots)[upper]
    inv[start:stop] /= pivots


def back_substitute(
    work: NDArray[np.floating[Any]],
    inv: NDArray[np.floating[Any]],
    i: int,
    start: int,
    stop: int,
) -> NDArray[np.floating[Any]]:
    """
    Backward-elimination contribution of columns j in [start, stop) to row i.

    Returns sum_j work[i, j] * inv[j, :], which the caller subtracts from
    inv[i, :] once every block has reported. Each work[i, j] is then
    eliminated as work[i, j] -= work[j, j] * work[i, j]. Requires start > i,
    and rows j >= start must already be final.
    """
    coefs = work[i, start:stop]
    partial = coefs @ inv[start:stop, :]
    cols = np.arange(start, stop)
    work[i, start:stop] = coefs - work[cols, cols] * coefs
    return partial
