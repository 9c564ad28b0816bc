"""
Algebra module for screw_algebra.

Provides:
- Angle with synchronised radians and degrees
- 3-vector helpers (dot, cross, normalize)
- Complex and dual numbers
- Quaternions for rotations
- Dual quaternions for rigid body (screw) motions
- Checked variants of the singular operations
"""

from .angle import (
    Angle,
    AngleLike,
    as_angle,
    get_angle_unit,
    set_angle_unit,
)

from .vector3 import (
    vec3,
    dot,
    cross,
    norm,
    normalize,
)

from .complex import Complex

from .dual_number import DualNumber

from .quaternion import (
    Quaternion,
    hamilton_product,
)

from .dual_quaternion import (
    DualQuaternion,
    IDX_W, IDX_I, IDX_J, IDX_K,
    IDX_WE, IDX_IE, IDX_JE, IDX_KE,
)

from .checked import (
    checked_rotor,
    checked_dual_rotor,
    checked_normalized,
    checked_log,
    checked_exp,
    checked_sclerp,
    ensure_finite,
    is_normalized_motion,
    is_pure_generator,
)

__all__ = [
    # Angle
    "Angle",
    "AngleLike",
    "as_angle",
    "get_angle_unit",
    "set_angle_unit",
    # Vectors
    "vec3",
    "dot",
    "cross",
    "norm",
    "normalize",
    # Rings
    "Complex",
    "DualNumber",
    # Quaternions
    "Quaternion",
    "hamilton_product",
    # Dual quaternions
    "DualQuaternion",
    "IDX_W", "IDX_I", "IDX_J", "IDX_K",
    "IDX_WE", "IDX_IE", "IDX_JE", "IDX_KE",
    # Checked variants
    "checked_rotor",
    "checked_dual_rotor",
    "checked_normalized",
    "checked_log",
    "checked_exp",
    "checked_sclerp",
    "ensure_finite",
    "is_normalized_motion",
    "is_pure_generator",
]
