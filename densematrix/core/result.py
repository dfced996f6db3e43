"""
Generic result container for densematrix computations.

Operations that do more than return a matrix (inversion, with its phase
timings and backend choice) wrap their payload in a Result so callers can
inspect how it was produced without the payload type knowing about it.

Design decisions:
    - Generic over payload P
    - info dict for flexible metadata (method, tolerance, size)
    - timing is optional
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The operation-specific payload type

    Attributes:
        params: Operation payload (e.g. the inverse matrix)
        info: Structured metadata (method, tolerance, n)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=InverseParams(inverse=inv),
        ...     info={'method': 'gauss_jordan', 'n': 3, 'tol': 1e-9},
        ...     timing={'total_seconds': 0.001, 'forward_elimination': 0.0004},
        ...     backend_name='cpu_gauss_jordan'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
