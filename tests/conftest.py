"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from densematrix import DenseMatrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def dominant_matrix(rng):
    """Strictly diagonally dominant 6x6 matrix (invertible, safe natural pivots)."""
    n = 6
    a = rng.uniform(-1.0, 1.0, size=(n, n))
    a[np.diag_indices(n)] = np.abs(a).sum(axis=1) + 1.0
    return DenseMatrix.from_array(a)


@pytest.fixture
def rectangular_matrix():
    """2x3 matrix with distinct integer entries."""
    return DenseMatrix.from_array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


@pytest.fixture
def write_text(tmp_path):
    """Write text to a file in tmp_path and return its path."""
    def _write(text: str, name: str = "matrix.csv"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write
