"""
Inversion solution types.

Contains the payload produced by the backends and the user-facing
solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from densematrix.core.result import Result
from densematrix.core.compute.tolerances import IDENTITY_ATOL

if TYPE_CHECKING:
    from densematrix.matrix.dense import DenseMatrix


@dataclass(frozen=True, eq=False)
class InverseParams:
    """Payload: the inverse as an (n, n) float64 array."""
    inverse: NDArray[np.floating[Any]]


@dataclass
class InverseSolution:
    """
    User-facing inversion result.

    Wraps Result[InverseParams] together with the matrix that was inverted.
    """
    _result: Result[InverseParams]
    _source: 'DenseMatrix'

    @property
    def inverse(self) -> 'DenseMatrix':
        """The inverse as a new DenseMatrix."""
        from densematrix.matrix.dense import DenseMatrix
        return DenseMatrix.from_array(self._result.params.inverse)

    @property
    def inverse_array(self) -> NDArray[np.floating[Any]]:
        return self._result.params.inverse

    @property
    def n(self) -> int:
        return self._source.nrows

    @property
    def tol(self) -> float:
        """Pivot tolerance the inversion ran with."""
        return self._result.info['tol']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def residual(self) -> float:
        """max |A @ inv(A) - I| over all elements (0.0 for an empty matrix)."""
        if self.n == 0:
            return 0.0
        product = self._source.to_numpy() @ self._result.params.inverse
        return float(np.max(np.abs(product - np.eye(self.n))))

    def check(self, atol: float = IDENTITY_ATOL) -> bool:
        """True if A @ inv(A) is the identity within atol."""
        return self.residual() <= atol

    def summary(self) -> str:
        """Short report of backend, tolerance, residual and phase timings."""
        lines = [
            f"Gauss-Jordan inverse of {self.n}x{self.n} matrix",
            f"  backend:  {self.backend_name}",
            f"  tol:      {self.tol:g}",
            f"  residual: {self.residual():.3e}",
        ]
        if self.timing is not None:
            total = self.timing.get('total_seconds', 0.0)
            lines.append(f"  total:    {total:.4g}s")
            for name, seconds in self.timing.items():
                if name == 'total_seconds':
                    continue
                share = seconds / total * 100 if total > 0 else 0.0
                lines.append(f"    {name}: {seconds:.4g}s ({share:.1f}%)")
        for message in self.warnings:
            lines.append(f"  warning: {message}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"InverseSolution(n={self.n}, backend={self.backend_name!r})"
