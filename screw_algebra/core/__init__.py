"""
Core module for screw_algebra.

Contains:
- Constants: Centralized default values and numeric thresholds
- Types: Type aliases and component layouts
- Precision: The process-wide scalar dtype
- Errors: Exception hierarchy
"""

from .constants import (
    PI,
    TAU,
    RAD_TO_DEG,
    DEG_TO_RAD,
    SMALL_ANGLE_SQ,
    DEFAULT_ATOL,
    DEFAULT_DTYPE,
    DEFAULT_ANGLE_UNIT,
)

from .types import (
    ScalarLike,
    Vector3Like,
    PositionLike,
    DirectionLike,
)

from .precision import (
    get_scalar_dtype,
    set_scalar_dtype,
    get_device,
    set_device,
    scalar_eps,
    as_scalar,
)

from .errors import (
    AlgebraError,
    SingularityError,
    PreconditionError,
    RoleError,
)

__all__ = [
    # Constants
    "PI",
    "TAU",
    "RAD_TO_DEG",
    "DEG_TO_RAD",
    "SMALL_ANGLE_SQ",
    "DEFAULT_ATOL",
    "DEFAULT_DTYPE",
    "DEFAULT_ANGLE_UNIT",
    # Types
    "ScalarLike",
    "Vector3Like",
    "PositionLike",
    "DirectionLike",
    # Precision
    "get_scalar_dtype",
    "set_scalar_dtype",
    "get_device",
    "set_device",
    "scalar_eps",
    "as_scalar",
    # Errors
    "AlgebraError",
    "SingularityError",
    "PreconditionError",
    "RoleError",
]
