"""
Exception hierarchy for densematrix.

All exceptions inherit from DenseMatrixError to allow catching any
library-specific error. Nothing here is fatal to the process: the library
raises, the caller decides.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseMatrixError(Exception):
    """Base exception for all densematrix errors."""
    pass


class ValidationError(DenseMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: non-numeric
    or non-finite data, bad tolerances, negative sizes, empty CSV files.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix shapes are incorrect or inconsistent.

    Raised when operand shapes are incompatible (addition, subtraction,
    multiplication), when a square matrix is required but not given, or
    when CSV rows contribute different numbers of values.
    """
    pass


class EmptyMatrixError(ValidationError):
    """
    Matrix or flat buffer has zero rows or zero columns.

    Raised by flat-buffer conversion in either direction.
    """
    pass


class NumericalError(DenseMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or has a near-zero pivot on its natural diagonal.

    Gauss-Jordan inversion here never swaps rows, so any pivot whose
    magnitude falls below the tolerance is fatal.

    Attributes:
        pivot_value: The offending diagonal value
        pivot_index: Row/column index of the offending diagonal entry
        phase: 'forward_elimination' or 'normalization'
        tolerance: Threshold the pivot was compared against
    """

    def __init__(
        self,
        message: str,
        pivot_value: float | None = None,
        pivot_index: int | None = None,
        phase: str | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.pivot_value = pivot_value
        self.pivot_index = pivot_index
        self.phase = phase
        self.tolerance = tolerance


class InternalConsistencyError(DenseMatrixError):
    """
    An internal invariant was found broken.

    Should be unreachable. Raised when flat-buffer marshaling copies a
    different number of values than rows * cols.

    Attributes:
        expected: Number of values that should have been copied
        actual: Number of values actually copied
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class MatrixIOError(DenseMatrixError, OSError):
    """
    A matrix file could not be opened.

    Attributes:
        path: The path that failed to open
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
