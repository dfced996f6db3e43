"""
Matrix inversion module.

Gauss-Jordan elimination against an augmented identity, without row
pivoting, with CPU, threaded and GPU backends.

Public API:
    invert(matrix)  - Inverse plus backend, timing and residual diagnostics
"""

from densematrix.inverse.solution import InverseParams, InverseSolution
from densematrix.inverse.solvers import invert

__all__ = [
    "invert",
    "InverseParams",
    "InverseSolution",
]
