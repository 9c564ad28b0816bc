"""
Geometry module: points, lines and motions with fixed roles.

Provides:
- Point, Line: tagged dual quaternions that transform by the right sandwich
- Motion: rigid body motions with composition, inversion and sclerp
- Functional transforms, including the explicit sandwich products
"""

from .primitives import Point, Line
from .motion import Motion
from .transforms import (
    sandwich_point,
    sandwich_line,
    transform_point,
    transform_direction,
    transform_line,
)

__all__ = [
    # Primitives
    "Point",
    "Line",
    # Motions
    "Motion",
    # Transforms
    "sandwich_point",
    "sandwich_line",
    "transform_point",
    "transform_direction",
    "transform_line",
]
