"""
densematrix: dense double-precision matrices for Python.

A matrix value type with CSV ingestion, flat-buffer interop, transpose,
addition, subtraction, multiplication, and Gauss-Jordan inversion with
CPU, threaded and GPU backends.

Submodules:
    matrix: DenseMatrix, FlatBuffer, CSV I/O
    inverse: Gauss-Jordan inversion
    core: exceptions, validation, result envelope, compute utilities
"""

__version__ = "0.1.0"

from densematrix.matrix import DenseMatrix, FlatBuffer, read_csv, write_csv
from densematrix.inverse import invert
from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    DimensionError,
    EmptyMatrixError,
    NumericalError,
    SingularMatrixError,
    InternalConsistencyError,
    MatrixIOError,
)

__all__ = [
    "__version__",
    "DenseMatrix",
    "FlatBuffer",
    "read_csv",
    "write_csv",
    "invert",
    "DenseMatrixError",
    "ValidationError",
    "DimensionError",
    "EmptyMatrixError",
    "NumericalError",
    "SingularMatrixError",
    "InternalConsistencyError",
    "MatrixIOError",
]
