"""
Functional transforms of points, directions and lines.

Two families:
- `sandwich_point` / `sandwich_line` evaluate the explicit products
  M * X * nconj(M) and M * X * conj(M). They are the definition.
- `transform_point` / `transform_direction` / `transform_line` use the
  expanded closed forms on DualQuaternion, which agree with the sandwiches
  for normalized motions.
"""

import torch

from ..algebra.dual_quaternion import DualQuaternion
from ..core.types import PositionLike, DirectionLike


def sandwich_point(motion: DualQuaternion, point: DualQuaternion) -> DualQuaternion:
    """
    Move an embedded point by the explicit product M * P * nconj(M).

    Args:
        motion: Motion dual quaternion
        point: Point embedding 1 + eps * p

    Returns:
        The moved point embedding
    """
    return motion.product(point).product(motion.nconj())


def sandwich_line(motion: DualQuaternion, line: DualQuaternion) -> DualQuaternion:
    """
    Move a Plücker line by the explicit product M * L * conj(M).

    Args:
        motion: Motion dual quaternion
        line: Line (0, u | 0, m)

    Returns:
        The moved line
    """
    return motion.product(line).product(motion.conj())


def transform_point(motion: DualQuaternion, point: PositionLike) -> torch.Tensor:
    """
    Transform 3D point coordinates.

    Args:
        motion: Motion dual quaternion
        point: Points of shape (..., 3)

    Returns:
        Transformed points of shape (..., 3)
    """
    return motion.transform_point(point)


def transform_direction(motion: DualQuaternion, direction: DirectionLike) -> torch.Tensor:
    """Rotate free vectors of shape (..., 3); translation does not apply."""
    return motion.transform_direction(direction)


def transform_line(motion: DualQuaternion, line: DualQuaternion) -> DualQuaternion:
    return motion.transform_line(line)
