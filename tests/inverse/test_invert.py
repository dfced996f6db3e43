"""
Tests for Gauss-Jordan inversion through DenseMatrix.inverse() and invert().
"""

import numpy as np
import pytest
from scipy import linalg as sp_linalg

from densematrix import (
    DenseMatrix,
    DimensionError,
    SingularMatrixError,
    ValidationError,
    invert,
)
from densematrix.core.compute.tolerances import IDENTITY_ATOL, PIVOT_TOLERANCE


class TestKnownInverses:

    def test_identity_inverts_to_itself(self):
        eye = DenseMatrix.from_array([[1, 0], [0, 1]])
        assert eye.inverse() == eye

    def test_two_by_two(self):
        m = DenseMatrix.from_array([[4, 7], [2, 6]])
        np.testing.assert_allclose(
            m.inverse().to_numpy(), [[0.6, -0.7], [-0.2, 0.4]], rtol=1e-12
        )

    def test_diagonal(self):
        m = DenseMatrix.from_array(np.diag([2.0, -4.0, 0.5]))
        np.testing.assert_allclose(m.inverse().to_numpy(), np.diag([0.5, -0.25, 2.0]))

    def test_upper_triangular(self):
        m = DenseMatrix.from_array([[1, 2, 3], [0, 1, 4], [0, 0, 1]])
        expected = [[1, -2, 5], [0, 1, -4], [0, 0, 1]]
        np.testing.assert_allclose(m.inverse().to_numpy(), expected, atol=1e-12)

    def test_one_by_one(self):
        assert DenseMatrix.from_array([[8.0]]).inverse()[0, 0] == 0.125

    def test_empty(self):
        assert DenseMatrix().inverse() == DenseMatrix()


class TestInverseProperties:

    def test_product_is_identity(self, dominant_matrix):
        product = dominant_matrix @ dominant_matrix.inverse()
        assert product.allclose(DenseMatrix.identity(6), rtol=0.0, atol=IDENTITY_ATOL)

    def test_matches_scipy(self, dominant_matrix):
        np.testing.assert_allclose(
            dominant_matrix.inverse().to_numpy(),
            sp_linalg.inv(dominant_matrix.to_numpy()),
            rtol=1e-9,
            atol=1e-12,
        )

    @pytest.mark.parametrize("n", [2, 5, 20, 60])
    def test_random_dominant_sizes(self, rng, n):
        a = rng.standard_normal((n, n))
        a[np.diag_indices(n)] = np.abs(a).sum(axis=1) + 0.5
        solution = invert(a)
        assert solution.check()
        assert solution.residual() < IDENTITY_ATOL

    def test_input_not_modified(self, dominant_matrix):
        before = dominant_matrix.copy()
        dominant_matrix.inverse()
        assert dominant_matrix == before

    def test_inverse_of_inverse(self, dominant_matrix):
        assert dominant_matrix.inverse().inverse().allclose(dominant_matrix, rtol=1e-9, atol=1e-9)


class TestSingularPivots:

    def test_zero_leading_pivot(self):
        m = DenseMatrix.from_array([[0, 1], [1, 0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            m.inverse()
        err = exc_info.value
        assert err.pivot_index == 0
        assert err.pivot_value == 0.0
        assert err.phase == "forward_elimination"
        assert err.tolerance == PIVOT_TOLERANCE
        assert "(0, 0)" in str(err)

    def test_pivot_zeroed_by_elimination(self):
        # invertible (det = -1), but the natural pivot at (1, 1) becomes 0
        m = DenseMatrix.from_array([[1, 1, 0], [1, 1, 1], [0, 1, 1]])
        with pytest.raises(SingularMatrixError) as exc_info:
            m.inverse()
        assert exc_info.value.pivot_index == 1
        assert exc_info.value.phase == "forward_elimination"

    def test_last_diagonal_collapses(self):
        m = DenseMatrix.from_array([[1, 2], [2, 4]])
        with pytest.raises(SingularMatrixError) as exc_info:
            m.inverse()
        assert exc_info.value.pivot_index == 1
        assert exc_info.value.phase == "normalization"

    def test_one_by_one_zero(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            DenseMatrix(1).inverse()
        assert exc_info.value.phase == "normalization"

    def test_tolerance_is_configurable(self):
        m = DenseMatrix.from_array([[1e-6, 1.0], [1.0, 1.0]])
        m.inverse()
        with pytest.raises(SingularMatrixError) as exc_info:
            m.inverse(tol=1e-3)
        assert exc_info.value.tolerance == 1e-3

    def test_below_default_tolerance(self):
        m = DenseMatrix.from_array([[1e-10, 1.0], [1.0, 1.0]])
        with pytest.raises(SingularMatrixError):
            m.inverse()


class TestInvertValidation:

    def test_non_square(self, rectangular_matrix):
        with pytest.raises(DimensionError, match="square"):
            rectangular_matrix.inverse()

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            invert([[1.0, np.nan], [0.0, 1.0]])

    @pytest.mark.parametrize("tol", [0.0, -1.0])
    def test_bad_tolerance(self, tol):
        with pytest.raises(ValidationError):
            invert(np.eye(2), tol=tol)

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            invert(np.eye(2), backend='fortran')

    def test_n_jobs_requires_threads(self):
        with pytest.raises(ValidationError, match="n_jobs"):
            invert(np.eye(2), backend='cpu', n_jobs=2)


class TestInverseSolution:

    def test_metadata(self, dominant_matrix):
        solution = invert(dominant_matrix)
        assert solution.backend_name == 'cpu_gauss_jordan'
        assert solution.n == 6
        assert solution.tol == PIVOT_TOLERANCE
        assert solution.info['pivoting'] == 'none'
        assert solution.warnings == ()

    def test_phase_timings(self, dominant_matrix):
        timing = invert(dominant_matrix).timing
        for key in ('total_seconds', 'forward_elimination', 'normalization',
                    'backward_elimination'):
            assert timing[key] >= 0.0

    def test_inverse_is_independent_copy(self, dominant_matrix):
        solution = invert(dominant_matrix)
        first = solution.inverse
        first[0, 0] = 0.0
        assert solution.inverse[0, 0] != 0.0

    def test_source_snapshot(self, dominant_matrix):
        solution = invert(dominant_matrix)
        dominant_matrix.resize(0, 0)
        assert solution.check()

    def test_summary(self, dominant_matrix):
        text = invert(dominant_matrix).summary()
        assert "6x6" in text
        assert "cpu_gauss_jordan" in text
        assert "forward_elimination" in text

    def test_accepts_array_like(self):
        solution = invert([[2.0, 0.0], [0.0, 4.0]])
        np.testing.assert_allclose(solution.inverse_array, [[0.5, 0.0], [0.0, 0.25]])

    def test_repr(self):
        assert repr(invert(np.eye(3))) == "InverseSolution(n=3, backend='cpu_gauss_jordan')"
