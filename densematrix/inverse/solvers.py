"""
Solver dispatch for matrix inversion.

invert() validates the input, picks a backend and runs Gauss-Jordan
elimination without row pivoting.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from densematrix.core.compute.device import select_device
from densematrix.core.compute.tolerances import PIVOT_TOLERANCE
from densematrix.core.exceptions import ValidationError
from densematrix.core.protocols import InversionBackend
from densematrix.core.validation import check_finite, check_square, check_tolerance
from densematrix.matrix.dense import DenseMatrix
from densematrix.inverse.solution import InverseSolution
from densematrix.inverse.backends.cpu import CPUGaussJordanBackend
from densematrix.inverse.backends.threaded import ThreadedGaussJordanBackend


BackendChoice = Literal['auto', 'cpu', 'threads', 'gpu']


def _ensure_matrix(matrix: ArrayLike | DenseMatrix) -> DenseMatrix:
    """Convert raw array to DenseMatrix if needed."""
    if isinstance(matrix, DenseMatrix):
        return matrix
    return DenseMatrix.from_array(matrix)


def _get_backend(backend: BackendChoice, n_jobs: int | None) -> InversionBackend:
    """Select backend based on preference."""
    if n_jobs is not None and backend != 'threads':
        raise ValidationError(
            f"n_jobs is only used by backend='threads', got backend={backend!r}"
        )

    if backend == 'cpu':
        return CPUGaussJordanBackend()

    if backend == 'threads':
        return ThreadedGaussJordanBackend(n_jobs=n_jobs)

    if backend == 'auto':
        device = select_device('auto')
        if device.is_gpu:
            from densematrix.inverse.backends.gpu import GPUGaussJordanBackend
            return GPUGaussJordanBackend(device=device)
        return CPUGaussJordanBackend()

    if backend == 'gpu':
        device = select_device('gpu')
        from densematrix.inverse.backends.gpu import GPUGaussJordanBackend
        return GPUGaussJordanBackend(device=device)

    raise ValidationError(f"Unknown backend: {backend!r}")


def invert(
    matrix: ArrayLike | DenseMatrix,
    *,
    tol: float | None = None,
    backend: BackendChoice = 'cpu',
    n_jobs: int | None = None,
) -> InverseSolution:
    """
    Invert a square matrix by Gauss-Jordan elimination.

    The input is reduced against an identity companion in three phases
    (forward elimination, normalization, backward elimination). Rows are
    never swapped: a pivot on the natural diagonal whose magnitude is
    below tol when it is reached aborts the inversion.

    Parameters
    ----------
    matrix : DenseMatrix or array-like
        Square matrix to invert. Not modified.
    tol : float, optional
        Pivot threshold. Defaults to PIVOT_TOLERANCE (1e-9).
    backend : str
        'cpu' (default), 'threads', 'gpu', or 'auto'.
    n_jobs : int, optional
        Worker threads for backend='threads'.

    Returns
    -------
    InverseSolution with the inverse, backend name and phase timings.

    Raises
    ------
    DimensionError
        If the matrix is not square.
    ValidationError
        If the matrix has non-finite entries or tol is not positive.
    SingularMatrixError
        If a pivot falls below tol.
    """
    source = _ensure_matrix(matrix)
    check_square(source.shape, 'invert')

    data = source.to_numpy()
    check_finite(data, 'matrix')
    tol = PIVOT_TOLERANCE if tol is None else check_tolerance(tol)

    be = _get_backend(backend, n_jobs)
    result = be.solve(data, tol=tol)

    return InverseSolution(_result=result, _source=source.copy())
