"""
Centralized constants for screw_algebra.

This module defines the default values and numeric thresholds used throughout
the library. Using these constants keeps the singular-branch handling of the
quaternion and dual quaternion code consistent.

Usage:
    from screw_algebra.core.constants import DEFAULT_ATOL, SMALL_ANGLE_SQ

    def my_function(atol: float = DEFAULT_ATOL):
        ...
"""

import math

# =============================================================================
# Numeric Constants
# =============================================================================

PI: float = math.pi
TAU: float = 2.0 * math.pi

RAD_TO_DEG: float = 180.0 / math.pi
DEG_TO_RAD: float = math.pi / 180.0

# Squared magnitude below which exp/log switch to their series expansions.
# exp compares |v|^2 against it; log compares (|v| / w)^2, the argument of its
# atan series. Both series stop after the fourth-order term, so the truncation
# error at the threshold is below float64 resolution.
SMALL_ANGLE_SQ: float = 1e-6

# Default absolute tolerance for allclose and role checks
DEFAULT_ATOL: float = 1e-5


# =============================================================================
# Precision Defaults
# =============================================================================

# Supported scalar widths, by configuration name
SUPPORTED_DTYPES = ("float32", "float64")

DEFAULT_DTYPE: str = "float32"
DEFAULT_DEVICE: str = "cpu"


# =============================================================================
# Angle Defaults
# =============================================================================

# Unit used by Angle.new()
ANGLE_UNITS = ("radians", "degrees")
DEFAULT_ANGLE_UNIT: str = "radians"


# =============================================================================
# Component Layouts
# =============================================================================

# Quaternion: [w, i, j, k]
QUATERNION_SIZE: int = 4

# Dual quaternion: real quaternion followed by dual quaternion
# [w, i, j, k, we, ie, je, ke]
DUAL_QUATERNION_SIZE: int = 8
