"""
Tests for DenseMatrix construction, shape management and element access.
"""

import copy

import numpy as np
import pytest

from densematrix import DenseMatrix, DimensionError, ValidationError


class TestConstruction:

    def test_default_is_empty(self):
        m = DenseMatrix()
        assert m.shape == (0, 0)
        assert m.is_empty
        assert len(m) == 0

    def test_empty_differs_from_one_by_one(self):
        assert DenseMatrix() != DenseMatrix(1)

    def test_square_size(self):
        m = DenseMatrix(3)
        assert m.shape == (3, 3)
        assert m.is_square
        np.testing.assert_array_equal(m.to_numpy(), np.zeros((3, 3)))

    def test_rows_cols(self):
        m = DenseMatrix(2, 5)
        assert (m.nrows, m.ncols) == (2, 5)
        assert m.size == 10
        assert not m.is_square

    def test_ncols_without_nrows_rejected(self):
        with pytest.raises(ValidationError):
            DenseMatrix(ncols=3)

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            DenseMatrix(-1, 2)

    def test_from_array_copies(self):
        source = np.array([[1.0, 2.0], [3.0, 4.0]])
        m = DenseMatrix.from_array(source)
        source[0, 0] = 99.0
        assert m[0, 0] == 1.0

    def test_from_nested_list(self):
        m = DenseMatrix.from_array([[1, 2, 3], [4, 5, 6]])
        assert m.shape == (2, 3)
        assert m[1, 2] == 6.0

    def test_from_array_rejects_1d(self):
        with pytest.raises(DimensionError):
            DenseMatrix.from_array([1.0, 2.0, 3.0])

    def test_identity(self):
        np.testing.assert_array_equal(DenseMatrix.identity(3).to_numpy(), np.eye(3))


class TestResizeAndAssign:

    def test_resize_zero_fills(self, rectangular_matrix):
        rectangular_matrix.resize(3, 4)
        assert rectangular_matrix.shape == (3, 4)
        np.testing.assert_array_equal(rectangular_matrix.to_numpy(), np.zeros((3, 4)))

    def test_resize_same_shape_still_resets(self, rectangular_matrix):
        rectangular_matrix.resize(2, 3)
        assert np.all(rectangular_matrix.to_numpy() == 0.0)

    def test_resize_to_empty(self, rectangular_matrix):
        rectangular_matrix.resize(0, 0)
        assert rectangular_matrix.is_empty
        assert rectangular_matrix == DenseMatrix()

    def test_assign_deep_copies(self, rectangular_matrix):
        target = DenseMatrix(5)
        target.assign(rectangular_matrix)
        assert target == rectangular_matrix
        target[0, 0] = -1.0
        assert rectangular_matrix[0, 0] == 1.0

    def test_self_assign_is_noop(self, rectangular_matrix):
        before = rectangular_matrix.to_numpy()
        assert rectangular_matrix.assign(rectangular_matrix) is rectangular_matrix
        np.testing.assert_array_equal(rectangular_matrix.to_numpy(), before)

    def test_copy_is_independent(self, rectangular_matrix):
        for duplicate in (rectangular_matrix.copy(),
                          copy.copy(rectangular_matrix),
                          copy.deepcopy(rectangular_matrix)):
            duplicate[1, 1] = 0.0
            assert rectangular_matrix[1, 1] == 5.0


class TestElementAccess:

    def test_get_and_set(self):
        m = DenseMatrix(2)
        m[0, 1] = 7
        assert m[0, 1] == 7.0
        assert isinstance(m[0, 1], float)

    @pytest.mark.parametrize("key", [(2, 0), (0, 3), (-1, 0)])
    def test_out_of_range(self, rectangular_matrix, key):
        with pytest.raises(IndexError):
            rectangular_matrix[key]

    def test_non_integer_index(self, rectangular_matrix):
        with pytest.raises(TypeError):
            rectangular_matrix[0.5, 0]

    def test_row_view_writes_through(self, rectangular_matrix):
        row = rectangular_matrix.row(1)
        row[0] = 40.0
        assert rectangular_matrix[1, 0] == 40.0

    def test_row_assignment(self, rectangular_matrix):
        rectangular_matrix[0] = [7, 8, 9]
        assert rectangular_matrix.to_list()[0] == [7.0, 8.0, 9.0]

    def test_row_assignment_wrong_length(self, rectangular_matrix):
        with pytest.raises(DimensionError):
            rectangular_matrix[0] = [1.0, 2.0]

    def test_iteration_yields_copies(self, rectangular_matrix):
        rows = list(rectangular_matrix)
        rows[0][0] = 100.0
        assert rectangular_matrix[0, 0] == 1.0
        assert len(rows) == 2

    def test_to_numpy_is_copy(self, rectangular_matrix):
        arr = rectangular_matrix.to_numpy()
        arr[:] = 0.0
        assert rectangular_matrix[0, 2] == 3.0

    def test_np_asarray(self, rectangular_matrix):
        np.testing.assert_array_equal(
            np.asarray(rectangular_matrix), [[1, 2, 3], [4, 5, 6]]
        )

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(DenseMatrix(1))


class TestDiagonalDominance:

    def test_dominant(self):
        assert DenseMatrix.from_array([[5, 2], [1, 4]]).is_diagonally_dominant()

    def test_not_dominant(self):
        assert not DenseMatrix.from_array([[1, 5], [1, 4]]).is_diagonally_dominant()

    def test_equality_counts_as_dominant(self):
        assert DenseMatrix.from_array([[2, -2], [1, 1]]).is_diagonally_dominant()

    def test_negative_diagonal_uses_magnitude(self):
        assert DenseMatrix.from_array([[-5, 2], [1, -4]]).is_diagonally_dominant()

    def test_check_dominant_alias(self):
        assert DenseMatrix.from_array([[5, 2], [1, 4]]).check_dominant()

    def test_empty_is_dominant(self):
        assert DenseMatrix().is_diagonally_dominant()

    def test_non_square_rejected(self, rectangular_matrix):
        with pytest.raises(DimensionError):
            rectangular_matrix.is_diagonally_dominant()


class TestFormatting:

    def test_format_layout(self):
        m = DenseMatrix.from_array([[4, 3], [6, 3.5]])
        assert m.format() == (
            "Matrix [2][2]:\n"
            "\t[ ,0]\t[ ,1]\t\n"
            "[0, ]\t4 \t3 \t\n"
            "[1, ]\t6 \t3.5 \t\n"
            "\n"
        )

    def test_print_writes_to_sink(self, capsys):
        DenseMatrix.from_array([[1.0]]).print()
        out = capsys.readouterr().out
        assert out.startswith("Matrix [1][1]:")

    def test_print_to_file(self, tmp_path):
        path = tmp_path / "dump.txt"
        with open(path, "w") as f:
            DenseMatrix(2, 1).print(file=f)
        assert "Matrix [2][1]:" in path.read_text()

    def test_empty_format(self):
        assert DenseMatrix().format() == "Matrix [0][0]:\n\t\n\n"

    def test_repr(self, rectangular_matrix):
        assert repr(rectangular_matrix) == "DenseMatrix(nrows=2, ncols=3)"
