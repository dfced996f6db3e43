"""
Core infrastructure for densematrix.

Key components:
    protocols: InversionBackend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Device detection, timing, tolerances
"""

from densematrix.core.protocols import InversionBackend
from densematrix.core.result import Result
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
    # Protocols
    "InversionBackend",
    # Result
    "Result",
    # Exceptions
    "DenseMatrixError",
    "ValidationError",
    "DimensionError",
    "EmptyMatrixError",
    "NumericalError",
    "SingularMatrixError",
    "InternalConsistencyError",
    "MatrixIOError",
]
