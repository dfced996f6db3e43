"""
DenseMatrix: two-dimensional float64 matrix value type.

Storage is a single C-contiguous NumPy array; rows are views into it.
Algebraic operations never touch their operands and always return a new,
independently owned matrix. The only in-place mutators are resize(),
assign(), element/row assignment and the load_* methods.

Usage:
    from densematrix import DenseMatrix

    a = DenseMatrix.from_array([[5.0, 2.0], [1.0, 4.0]])
    a.is_diagonally_dominant()   # True
    a_inv = a.inverse()
    (a @ a_inv).allclose(DenseMatrix.identity(2))

    b = DenseMatrix.from_csv("matrix.csv")
    buf = b.to_flat_buffer()
"""

from __future__ import annotations

import numbers
import operator
import sys
from pathlib import Path
from typing import Any, Iterator, TextIO, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from densematrix.core.exceptions import (
    DimensionError,
    EmptyMatrixError,
    InternalConsistencyError,
    ValidationError,
)
from densematrix.core.validation import (
    check_2d,
    check_array,
    check_inner_dims,
    check_same_shape,
    check_size,
    check_square,
)
from densematrix.matrix.flat import FlatBuffer
from densematrix.matrix.io import read_csv, write_csv

if TYPE_CHECKING:
    from densematrix.inverse.solvers import BackendChoice


class DenseMatrix:
    """
    Dense row-major matrix of double-precision values.

    Construction:
        DenseMatrix()              # empty, 0 x 0
        DenseMatrix(n)             # n x n zeros
        DenseMatrix(rows, cols)    # rows x cols zeros
        DenseMatrix.from_array(data)
        DenseMatrix.identity(n)
        DenseMatrix.from_csv(path)
        DenseMatrix.from_flat_buffer(buf)

    The empty matrix is a valid state distinct from any 1 x 1 matrix.
    Matrices are mutable and therefore unhashable.
    """

    __slots__ = ('_data',)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, nrows: int | None = None, ncols: int | None = None):
        self._data: NDArray[np.floating[Any]] = np.zeros((0, 0), dtype=np.float64)
        if nrows is None:
            if ncols is not None:
                raise ValidationError("ncols given without nrows")
            return
        self.resize(nrows, nrows if ncols is None else ncols)

    # === Factory Methods ===

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> DenseMatrix:
        """Take ownership of a 2D float64 array without copying."""
        matrix = cls()
        matrix._data = np.ascontiguousarray(data, dtype=np.float64)
        return matrix

    @classmethod
    def from_array(cls, data: ArrayLike) -> DenseMatrix:
        """
        Build a matrix from any 2D array-like (nested lists, ndarray, DataFrame).

        The values are always copied.

        Raises:
            ValidationError: If data is not numeric
            DimensionError: If data is not 2D
        """
        if hasattr(data, 'to_numpy'):
            data = data.to_numpy()
        array = check_array(data, 'data')
        check_2d(array, 'data')
        return cls._wrap(np.array(array, dtype=np.float64, order='C', copy=True))

    @classmethod
    def identity(cls, n: int) -> DenseMatrix:
        """n x n identity matrix."""
        n = check_size(n, 'n')
        return cls._wrap(np.eye(n, dtype=np.float64))

    @classmethod
    def from_csv(cls, path: str | Path) -> DenseMatrix:
        """Build a matrix from a CSV file. See load_csv()."""
        return cls().load_csv(path)

    @classmethod
    def from_flat_buffer(cls, buf: FlatBuffer) -> DenseMatrix:
        """Build a matrix from a flat buffer. See load_flat_buffer()."""
        return cls().load_flat_buffer(buf)

    # === Shape ===

    @property
    def nrows(self) -> int:
        """Number of rows."""
        return self._data.shape[0]

    @property
    def ncols(self) -> int:
        """Number of columns."""
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._data.shape[0], self._data.shape[1])

    @property
    def size(self) -> int:
        """Number of elements, rows * cols."""
        return self._data.size

    @property
    def is_empty(self) -> bool:
        """True if the matrix has zero rows or zero columns."""
        return self._data.size == 0

    @property
    def is_square(self) -> bool:
        return self.nrows == self.ncols

    def resize(self, nrows: int, ncols: int) -> None:
        """
        Reshape to nrows x ncols and set every element to 0.0.

        Nothing of the old content is kept. resize(0, 0) empties the
        matrix and releases its storage.

        Raises:
            ValidationError: If either size is negative or not an integer
        """
        nrows = check_size(nrows, 'nrows')
        ncols = check_size(ncols, 'ncols')
        self._data = np.zeros((nrows, ncols), dtype=np.float64)

    def assign(self, other: DenseMatrix) -> DenseMatrix:
        """
        Copy shape and every element of other into self.

        Self-assignment is a no-op. Returns self.
        """
        if other is self:
            return self
        if not isinstance(other, DenseMatrix):
            raise ValidationError(
                f"assign: expected DenseMatrix, got {type(other).__name__}"
            )
        self._data = other._data.copy()
        return self

    def copy(self) -> DenseMatrix:
        """Deep copy with independent storage."""
        return DenseMatrix._wrap(self._data.copy())

    def __copy__(self) -> DenseMatrix:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> DenseMatrix:
        return self.copy()

    # === Element Access ===

    def _check_index(self, index: Any, limit: int, axis: str) -> int:
        index = operator.index(index)
        if not 0 <= index < limit:
            raise IndexError(
                f"{axis} index {index} out of range for matrix of shape "
                f"{self.nrows}x{self.ncols}"
            )
        return index

    def __getitem__(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError(f"expected (row, col), got {len(key)} indices")
            i = self._check_index(key[0], self.nrows, 'row')
            j = self._check_index(key[1], self.ncols, 'column')
            return float(self._data[i, j])
        return self.row(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError(f"expected (row, col), got {len(key)} indices")
            i = self._check_index(key[0], self.nrows, 'row')
            j = self._check_index(key[1], self.ncols, 'column')
            self._data[i, j] = float(value)
            return

        i = self._check_index(key, self.nrows, 'row')
        values = check_array(value, 'value')
        if values.shape != (self.ncols,):
            raise DimensionError(
                f"row assignment: expected {self.ncols} values, got shape {values.shape}"
            )
        self._data[i, :] = values

    def row(self, i: int) -> NDArray[np.floating[Any]]:
        """
        View of row i.

        Writes through to the matrix. Raises IndexError unless 0 <= i < nrows.
        """
        return self._data[self._check_index(i, self.nrows, 'row')]

    def __len__(self) -> int:
        return self.nrows

    def __iter__(self) -> Iterator[NDArray[np.floating[Any]]]:
        """Iterate over copies of the rows."""
        for row in self._data:
            yield row.copy()

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Copy of the elements as a 2D float64 array."""
        return self._data.copy()

    def __array__(self, dtype=None, copy=None) -> NDArray[Any]:
        return self._data.astype(dtype or np.float64, copy=True)

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    # === CSV ===

    def load_csv(self, path: str | Path) -> DenseMatrix:
        """
        Replace shape and contents with the matrix stored in a CSV file.

        Blank lines are skipped; every other line is one row of numbers
        separated by commas and/or whitespace. Returns self. On failure
        the matrix is left unchanged.

        Raises:
            MatrixIOError: If the file cannot be opened
            DimensionError: If rows have different numbers of values
            ValidationError: If the file has no values or a non-numeric token
        """
        self._data = np.ascontiguousarray(read_csv(path), dtype=np.float64)
        return self

    def save_csv(self, path: str | Path) -> None:
        """Write the matrix as comma-separated rows, one per line."""
        write_csv(path, self._data)

    # === Diagnostics ===

    def is_diagonally_dominant(self) -> bool:
        """
        True if |a_ii| >= sum_{j != i} |a_ij| for every row i.

        An empty matrix is vacuously dominant.

        Raises:
            DimensionError: If the matrix is not square
        """
        check_square(self.shape, 'is_diagonally_dominant')
        magnitudes = np.abs(self._data)
        diagonal = np.diag(magnitudes)
        row_sums = magnitudes.sum(axis=1)
        return bool(np.all(diagonal >= row_sums - diagonal))

    check_dominant = is_diagonally_dominant

    # === Algebra ===

    def transpose(self) -> DenseMatrix:
        """New ncols x nrows matrix with out[j, i] == self[i, j]."""
        return DenseMatrix._wrap(self._data.T.copy())

    @property
    def T(self) -> DenseMatrix:
        return self.transpose()

    def add(self, other: DenseMatrix) -> DenseMatrix:
        """Element-wise sum. Shapes must match (DimensionError otherwise)."""
        check_same_shape(self.shape, other.shape, 'add')
        return DenseMatrix._wrap(self._data + other._data)

    def subtract(self, other: DenseMatrix) -> DenseMatrix:
        """Element-wise difference. Shapes must match (DimensionError otherwise)."""
        check_same_shape(self.shape, other.shape, 'subtract')
        return DenseMatrix._wrap(self._data - other._data)

    def multiply(self, other: DenseMatrix) -> DenseMatrix:
        """
        Matrix product self @ other.

        Requires self.ncols == other.nrows (DimensionError otherwise).
        The result is nrows x other.ncols.
        """
        check_inner_dims(self.shape, other.shape)
        return DenseMatrix._wrap(np.matmul(self._data, other._data))

    def scale(self, factor: float) -> DenseMatrix:
        """Every element multiplied by factor."""
        return DenseMatrix._wrap(self._data * float(factor))

    def __add__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.multiply(other)

    def __mul__(self, other):
        if isinstance(other, DenseMatrix):
            return self.multiply(other)
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            return self.scale(other)
        return NotImplemented

    def __neg__(self) -> DenseMatrix:
        return DenseMatrix._wrap(-self._data)

    def inverse(
        self,
        *,
        tol: float | None = None,
        backend: BackendChoice = 'cpu',
        n_jobs: int | None = None,
    ) -> DenseMatrix:
        """
        Inverse by Gauss-Jordan elimination without row pivoting.

        Args:
            tol: Pivot magnitudes below this abort the inversion.
                Defaults to PIVOT_TOLERANCE (1e-9).
            backend: 'cpu', 'threads', 'gpu' or 'auto'
            n_jobs: Worker threads for backend='threads'

        Raises:
            DimensionError: If the matrix is not square
            SingularMatrixError: If a pivot on the natural diagonal is
                below tol when it is reached
        """
        from densematrix.inverse.solvers import invert
        return invert(self, tol=tol, backend=backend, n_jobs=n_jobs).inverse

    # === Flat Buffer ===

    def to_flat_buffer(self) -> FlatBuffer:
        """
        Copy the elements, row by row, into a new FlatBuffer.

        Raises:
            EmptyMatrixError: If the matrix has zero rows or columns
            InternalConsistencyError: If the rows did not fill the buffer exactly
        """
        if self.nrows == 0 or self.ncols == 0:
            raise EmptyMatrixError(
                f"Empty matrix ({self.nrows}x{self.ncols}) cannot be converted "
                f"to a flat buffer"
            )

        length = self.nrows * self.ncols
        data = np.empty(length, dtype=np.float64)
        copied = 0
        for row in self._data:
            data[copied:copied + row.size] = row
            copied += row.size

        if copied != length:
            raise InternalConsistencyError(
                f"Matrix does not have regular shape: copied {copied} values, "
                f"expected {length}",
                expected=length,
                actual=copied,
            )

        return FlatBuffer(rows=self.nrows, cols=self.ncols, length=length, data=data)

    def load_flat_buffer(self, buf: FlatBuffer) -> DenseMatrix:
        """
        Resize to the buffer's shape and copy its values in row-major order.

        Returns self.

        Raises:
            EmptyMatrixError: If the buffer has zero rows or columns
        """
        if buf.rows == 0 or buf.cols == 0:
            raise EmptyMatrixError(
                f"Flat buffer has zero rows or columns ({buf.rows}x{buf.cols})"
            )
        values = np.asarray(buf.data, dtype=np.float64).ravel()
        if values.size != buf.rows * buf.cols:
            raise DimensionError(
                f"Flat buffer holds {values.size} values, "
                f"expected {buf.rows}x{buf.cols}={buf.rows * buf.cols}"
            )

        self.resize(buf.rows, buf.cols)
        for i in range(buf.rows):
            self._data[i, :] = values[i * buf.cols:(i + 1) * buf.cols]
        return self

    # === Comparison ===

    def __eq__(self, other) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def allclose(self, other: DenseMatrix, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        """Same shape and element-wise equal within tolerance."""
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    # === Printing ===

    def format(self) -> str:
        """
        Human-readable dump: dimensions, a column-index header, then one
        tab-separated line per row prefixed with its index.
        """
        lines = [f"Matrix [{self.nrows}][{self.ncols}]:"]
        lines.append("\t" + "".join(f"[ ,{j}]\t" for j in range(self.ncols)))
        for i, row in enumerate(self._data):
            lines.append(f"[{i}, ]\t" + "".join(f"{value:g} \t" for value in row))
        lines.append("")
        return "\n".join(lines) + "\n"

    def print(self, file: TextIO | None = None) -> None:
        """Write format() to file (default sys.stdout)."""
        (file if file is not None else sys.stdout).write(self.format())

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"DenseMatrix(nrows={self.nrows}, ncols={self.ncols})"
