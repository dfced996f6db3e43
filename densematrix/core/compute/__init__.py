"""
Shared compute infrastructure for densematrix.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    tolerances: Pivot threshold and comparison tolerance tiers
"""

from densematrix.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from densematrix.core.compute.timing import Timer
from densematrix.core.compute.tolerances import (
    IDENTITY_ATOL,
    PIVOT_TOLERANCE,
    ToleranceTier,
    select_tolerance,
)

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    # Tolerances
    "IDENTITY_ATOL",
    "PIVOT_TOLERANCE",
    "ToleranceTier",
    "select_tolerance",
]
