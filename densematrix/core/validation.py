"""
Input validation utilities for densematrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from densematrix.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (indicating ragged nesting or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64 (a new array when a cast was needed)

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.iscomplexobj(result):
        raise ValidationError(f"{name}: complex values are not supported")

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    if array.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_size(value: Any, name: str) -> int:
    """
    Verify a row or column count is a non-negative integer.

    Returns:
        The value as a plain int

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected a non-negative integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError(f"{name}: must be non-negative, got {value}")
    return int(value)


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a shape is square.

    Raises:
        DimensionError: If rows != cols
    """
    if shape[0] != shape[1]:
        raise DimensionError(
            f"{name}: must be square, got {shape[0]}x{shape[1]}"
        )


def check_same_shape(
    lhs: tuple[int, int],
    rhs: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands of an element-wise operation have identical shapes.

    Raises:
        DimensionError: If rows or cols differ
    """
    if lhs != rhs:
        raise DimensionError(
            f"{operation}: shape mismatch, lhs is {lhs[0]}x{lhs[1]} "
            f"but rhs is {rhs[0]}x{rhs[1]}"
        )


def check_inner_dims(lhs: tuple[int, int], rhs: tuple[int, int]) -> None:
    """
    Verify lhs.cols == rhs.rows for matrix multiplication.

    Raises:
        DimensionError: If inner dimensions differ
    """
    if lhs[1] != rhs[0]:
        raise DimensionError(
            f"multiply: inner dimensions differ, lhs is {lhs[0]}x{lhs[1]} "
            f"but rhs is {rhs[0]}x{rhs[1]} (expected rhs rows={lhs[1]})"
        )


def check_tolerance(tol: Any, name: str = 'tol') -> float:
    """
    Verify a tolerance is a positive, finite real number.

    Returns:
        The tolerance as a float

    Raises:
        ValidationError: If tol is not a positive finite number
    """
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real):
        raise ValidationError(f"{name}: expected a real number, got {type(tol).__name__}")
    tol = float(tol)
    if not np.isfinite(tol) or tol <= 0.0:
        raise ValidationError(f"{name}: must be positive and finite, got {tol}")
    return tol
