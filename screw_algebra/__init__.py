"""
screw_algebra: Quaternion and Dual Quaternion Algebra for Screw Motions

A PyTorch library for representing, composing and interpolating rigid 3D
motions with exact algebra.

Key Features:
- Complex numbers, dual numbers, quaternions and dual quaternions
- Angles that keep radians and degrees in sync
- Screw motions from (axis line, angle, distance) via the closed-form
  exponential of a screw generator
- Logarithm, real powers and screw-linear interpolation (sclerp)
- Point, direction and Plücker line transforms
- Tagged Point/Line/Motion wrappers and opt-in checked variants

API Design:
- Every value is backed by a tensor whose last dimension holds its components
- All values share one process-wide scalar dtype (float32 unless configured)
- Domain singularities yield non-finite values; checked_* functions raise

Example:
    >>> from screw_algebra.algebra import Angle, DualQuaternion
    >>> axis = DualQuaternion.line([0.0, 1.0, 0.0], [1.0, 0.0, 0.0])
    >>> m = DualQuaternion.screw(axis, Angle.degrees(90.0), 2.0)
    >>> m.transform_point([0.0, 0.0, 0.0])
    tensor([ 2.,  1., -1.])
"""

__version__ = "0.1.0"
__author__ = "screw_algebra Contributors"

from . import core
from . import algebra
from . import geometry
from . import utils

__all__ = [
    "core",
    "algebra",
    "geometry",
    "utils",
]
