"""
Dense matrix module.

Public API:
    DenseMatrix  - matrix value type (construction, access, algebra, printing)
    FlatBuffer   - contiguous row-major interop record
    read_csv     - CSV file to 2D array
    write_csv    - 2D array to CSV file
"""

from densematrix.matrix.flat import FlatBuffer
from densematrix.matrix.io import read_csv, write_csv
from densematrix.matrix.dense import DenseMatrix

__all__ = [
    "DenseMatrix",
    "FlatBuffer",
    "read_csv",
    "write_csv",
]
