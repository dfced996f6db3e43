"""
FlatBuffer: contiguous row-major copy of a matrix for interop.

External numeric code that cannot take a DenseMatrix takes one of these:
the shape, the element count and a one-dimensional C-contiguous float64
array. The buffer owns its array; nothing is shared with the matrix it
came from or goes to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from densematrix.core.exceptions import ValidationError
from densematrix.core.validation import check_array, check_size


@dataclass(frozen=True, eq=False)
class FlatBuffer:
    """
    Row-major flattened matrix record.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        length: rows * cols
        data: 1D contiguous float64 array of `length` values

    Construction:
        FlatBuffer.from_values(rows, cols, values)
        DenseMatrix.to_flat_buffer()
    """
    rows: int
    cols: int
    length: int
    data: NDArray[np.floating[Any]]

    def __post_init__(self):
        object.__setattr__(self, 'rows', check_size(self.rows, 'rows'))
        object.__setattr__(self, 'cols', check_size(self.cols, 'cols'))
        object.__setattr__(self, 'length', check_size(self.length, 'length'))
        object.__setattr__(
            self, 'data', np.ascontiguousarray(check_array(self.data, 'data'))
        )
        if self.length != self.rows * self.cols:
            raise ValidationError(
                f"FlatBuffer: length={self.length} does not equal "
                f"rows*cols={self.rows * self.cols}"
            )
        if self.data.ndim != 1 or self.data.size != self.length:
            raise ValidationError(
                f"FlatBuffer: data must be 1D with {self.length} values, "
                f"got shape {self.data.shape}"
            )

    @classmethod
    def from_values(cls, rows: int, cols: int, values: ArrayLike) -> FlatBuffer:
        """
        Build a buffer from a shape and row-major values.

        The values are copied into a fresh contiguous float64 array.
        """
        rows = check_size(rows, 'rows')
        cols = check_size(cols, 'cols')
        data = np.array(check_array(values, 'values').ravel(), dtype=np.float64, order='C')
        return cls(rows=rows, cols=cols, length=rows * cols, data=data)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"FlatBuffer(rows={self.rows}, cols={self.cols}, length={self.length})"
