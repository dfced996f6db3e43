"""
Tests for the densematrix exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via DenseMatrixError)
    - Diagnostic attributes on SingularMatrixError, InternalConsistencyError,
      MatrixIOError
    - Default attribute values (None for optional attributes)
"""

import pytest

from densematrix.core.exceptions import (
    DenseMatrixError,
    DimensionError,
    EmptyMatrixError,
    InternalConsistencyError,
    MatrixIOError,
    NumericalError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via DenseMatrixError."""

    @pytest.mark.parametrize("exc_type", [
        ValidationError,
        DimensionError,
        EmptyMatrixError,
        NumericalError,
        SingularMatrixError,
        InternalConsistencyError,
        MatrixIOError,
    ])
    def test_is_densematrix_error(self, exc_type):
        with pytest.raises(DenseMatrixError):
            raise exc_type("boom")

    def test_dimension_error_is_validation_error(self):
        assert issubclass(DimensionError, ValidationError)

    def test_empty_matrix_error_is_validation_error(self):
        assert issubclass(EmptyMatrixError, ValidationError)

    def test_singular_matrix_error_is_numerical_error(self):
        assert issubclass(SingularMatrixError, NumericalError)

    def test_internal_consistency_error_is_not_validation_error(self):
        err = InternalConsistencyError("broken")
        assert not isinstance(err, ValidationError)

    def test_matrix_io_error_is_os_error(self):
        with pytest.raises(OSError):
            raise MatrixIOError("cannot open", path="missing.csv")


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries pivot diagnostics."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "zero pivot",
            pivot_value=0.0,
            pivot_index=2,
            phase="forward_elimination",
            tolerance=1e-9,
        )
        assert str(err) == "zero pivot"
        assert err.pivot_value == 0.0
        assert err.pivot_index == 2
        assert err.phase == "forward_elimination"
        assert err.tolerance == 1e-9

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.pivot_value is None
        assert err.pivot_index is None
        assert err.phase is None
        assert err.tolerance is None


class TestOtherAttributes:

    def test_internal_consistency_counts(self):
        err = InternalConsistencyError("mismatch", expected=6, actual=5)
        assert err.expected == 6
        assert err.actual == 5

    def test_matrix_io_error_path_and_message(self):
        err = MatrixIOError("File can't be opened: x.csv", path="x.csv")
        assert err.path == "x.csv"
        assert "can't be opened" in str(err)
