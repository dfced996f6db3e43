"""
Core protocols for densematrix.

We use Protocol (structural typing) rather than ABC (nominal typing) so a
backend only has to look like a backend; nothing needs to subclass.
"""

from typing import Protocol, TypeVar, Any, TYPE_CHECKING, runtime_checkable

from numpy.typing import NDArray

if TYPE_CHECKING:
    from densematrix.core.result import Result

P = TypeVar('P', covariant=True)  # Payload type


@runtime_checkable
class InversionBackend(Protocol[P]):
    """
    Protocol for Gauss-Jordan inversion backends.

    A backend receives a validated, square float64 array and a pivot
    tolerance and returns the inverse wrapped in a Result. Backends hold
    only construction-time configuration (device, worker count), so they
    are cheap to build per call and easy to swap in tests.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_gauss_jordan', 'threads_gauss_jordan', 'gpu_gauss_jordan_fp64'
        """
        ...

    def solve(self, matrix: NDArray[Any], *, tol: float) -> 'Result[P]':
        """
        Invert the matrix.

        Args:
            matrix: Square float64 array; never modified
            tol: Pivot magnitudes below this are fatal

        Returns:
            Result envelope containing the inverse and timing

        Raises:
            SingularMatrixError: If a pivot falls below tol
        """
        ...
