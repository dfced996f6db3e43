"""
CSV reading and writing for dense matrices.

Input format: one matrix row per non-blank line, numbers separated by
commas and/or whitespace, no header, no declared dimensions. The shape is
inferred: rows = non-blank lines, cols = values per line. Lines that
contribute different numbers of values are rejected rather than reshaped.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any
import numpy as np
from numpy.typing import NDArray
import pandas as pd

from densematrix.core.exceptions import DimensionError, MatrixIOError, ValidationError

# One or more commas/whitespace characters between tokens
_SEPARATOR = r'[,\s]+'
_EDGE_CHARS = ', \t\r\f\v'


def _strip_edge_separators(text: str) -> str:
    """Drop separators at the start and end of every line."""
    return '\n'.join(line.strip(_EDGE_CHARS) for line in text.splitlines())


def read_csv(path: str | Path) -> NDArray[np.floating[Any]]:
    """
    Read a matrix from a CSV file.

    Args:
        path: File to read

    Returns:
        2D float64 array of shape (rows, cols)

    Raises:
        MatrixIOError: If the file cannot be opened
        ValidationError: If the file has no values or a non-numeric token
        DimensionError: If lines contribute different numbers of values
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise MatrixIOError(f"File can't be opened: {path}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise ValidationError(f"{path}: not a text file ({e})") from e

    # pandas fixes the field count from the first line, so a separator left
    # at either end of a later line would read as an extra field.
    text = _strip_edge_separators(text)

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            sep=_SEPARATOR,
            header=None,
            engine='python',
            skip_blank_lines=True,
            dtype=str,
            keep_default_na=False,
            na_values=[''],
        )
    except pd.errors.EmptyDataError as e:
        raise ValidationError(f"{path}: contains no values") from e
    except pd.errors.ParserError as e:
        raise DimensionError(f"{path}: rows have inconsistent numbers of values ({e})") from e

    # Only padding of rows shorter than the first line is missing; a token
    # spelled 'nan' is a value like any other.
    present = frame.notna().to_numpy()
    try:
        values = frame.astype(np.float64).to_numpy()
    except ValueError as e:
        raise ValidationError(f"{path}: non-numeric value ({e})") from e

    counts = present.sum(axis=1)
    keep = counts > 0
    values, present, counts = values[keep], present[keep], counts[keep]

    if values.shape[0] == 0:
        raise ValidationError(f"{path}: contains no values")

    if np.any(counts != counts[0]):
        bad = int(np.argmax(counts != counts[0]))
        raise DimensionError(
            f"{path}: rows have inconsistent numbers of values "
            f"(row 0 has {int(counts[0])}, row {bad} has {int(counts[bad])})"
        )

    return values[present].reshape(values.shape[0], int(counts[0]))


def write_csv(path: str | Path, data: NDArray[np.floating[Any]]) -> None:
    """
    Write a 2D array as comma-separated rows, one per line.

    Values are written with 17 significant digits so read_csv() recovers
    them exactly.
    """
    data = np.asarray(data, dtype=np.float64)
    if data.ndim != 2:
        raise DimensionError(f"data: expected 2D array, got {data.ndim}D")
    try:
        np.savetxt(path, data, delimiter=',', fmt='%.17g')
    except OSError as e:
        raise MatrixIOError(f"File can't be opened for writing: {path}", path=str(path)) from e
