"""
Tolerance constants for elimination and numerical validation.

PIVOT_TOLERANCE is the default threshold below which a diagonal entry is
treated as zero during inversion. Callers override it per call with tol=.

The tiers describe how closely results of each compute path are expected
to agree with a double-precision reference (scipy.linalg.inv). They are
used by the test suite and by InverseSolution.check().
"""

from dataclasses import dataclass


# |pivot| below this aborts inversion
PIVOT_TOLERANCE: float = 1.0e-9

# max |A @ inv(A) - I| accepted when checking an inverse
IDENTITY_ATOL: float = 1.0e-6


@dataclass(frozen=True)
class ToleranceTier:
    """Relative and absolute tolerances for one numerical precision tier."""
    rtol: float
    atol: float
    name: str
    description: str


# NumPy float64 on the CPU, vectorised or threaded
CPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    name='cpu_fp64',
    description='CPU double precision, no pivoting',
)

# CUDA with float64 tensors
GPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    name='gpu_fp64',
    description='GPU double precision, matches CPU',
)

# MPS has no float64; elimination runs in float32
GPU_FP32 = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='gpu_fp32',
    description='GPU single precision',
)


def select_tolerance(backend_name: str) -> ToleranceTier:
    """Select the tolerance tier for a given backend name."""
    if 'gpu' in backend_name:
        if 'fp64' in backend_name:
            return GPU_FP64
        return GPU_FP32
    return CPU_FP64
