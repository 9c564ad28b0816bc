"""
Rigid body motions as tagged dual quaternions.

A Motion is a normalized dual quaternion Q0 + eps * Q1 with unit Q0 and the
Study condition w*we + v.m = 0. Motions compose by the product:

    M = A * B

represents applying B first, then A. The inverse of a motion is its line
conjugate.
"""

from __future__ import annotations
from typing import Union

import torch

from .primitives import Point, Line
from ..algebra.angle import AngleLike
from ..algebra.checked import is_normalized_motion
from ..algebra.dual_quaternion import DualQuaternion
from ..algebra.quaternion import Quaternion
from ..core.constants import DEFAULT_ATOL
from ..core.errors import RoleError
from ..core.types import ScalarLike, PositionLike, DirectionLike, Vector3Like


class Motion:
    """
    A rigid body motion (rotation + translation).

    Can be constructed from:
    - a rotation about an axis through the origin
    - a translation vector
    - a screw about a line (rotation about it, travel along it)
    - a validated raw dual quaternion
    """

    def __init__(self, dq: DualQuaternion = None):
        """
        Initialize a Motion.

        Args:
            dq: Normalized dual quaternion, taken as given. Use
                `from_dual_quaternion` to validate. None gives the identity.
        """
        self._dq = dq if dq is not None else DualQuaternion.identity()

    @classmethod
    def identity(cls) -> 'Motion':
        """Create identity motion (no transformation)."""
        return cls(DualQuaternion.identity())

    @classmethod
    def rotation(cls, angle: AngleLike, axis: Vector3Like) -> 'Motion':
        """Rotation by `angle` about `axis` through the origin."""
        return cls(DualQuaternion.rotor(angle, axis))

    @classmethod
    def translation_by(cls, translation: Vector3Like) -> 'Motion':
        return cls(DualQuaternion.translator(translation))

    @classmethod
    def screw(cls, line: Union[Line, DualQuaternion], angle: AngleLike,
              distance: ScalarLike) -> 'Motion':
        """
        Rotate by `angle` about `line` and travel `distance` along it.

        Args:
            line: Screw axis, as a Line or a raw Plücker dual quaternion
            angle: Rotation angle
            distance: Travel along the line's direction
        """
        if isinstance(line, Line):
            line = line.as_dual_quaternion()
        return cls(DualQuaternion.screw(line, angle, distance))

    @classmethod
    def from_dual_quaternion(cls, dq: DualQuaternion,
                             atol: float = DEFAULT_ATOL) -> 'Motion':
        """
        Interpret a raw value as a motion.

        Raises:
            RoleError: unless the real part has unit norm and the Study
                       condition holds, within `atol`
        """
        if not is_normalized_motion(dq, atol):
            raise RoleError(
                "Not a motion: requires a unit real part and w*we + v.m = 0"
            )
        return cls(dq)

    @property
    def shape(self) -> torch.Size:
        return self._dq.shape

    # =========================================================================
    # Composition
    # =========================================================================

    def compose(self, other: 'Motion') -> 'Motion':
        """
        Compose two motions: self * other

        This represents applying 'other' first, then 'self'.
        """
        return Motion(self._dq.product(other._dq))

    def __mul__(self, other: 'Motion') -> 'Motion':
        """Motion composition."""
        if isinstance(other, Motion):
            return self.compose(other)
        return NotImplemented

    def inverse(self) -> 'Motion':
        """
        Inverse motion: M^{-1} where M * M^{-1} = 1

        For normalized motions the inverse equals the line conjugate.
        """
        return Motion(self._dq.conj())

    # =========================================================================
    # Application
    # =========================================================================

    def apply_point(self, point: Union[Point, PositionLike]) -> torch.Tensor:
        """
        Apply motion to a point.

        Args:
            point: Point, or coordinates of shape (..., 3)

        Returns:
            Transformed coordinates of shape (..., 3)
        """
        if isinstance(point, Point):
            point = point.position
        return self._dq.transform_point(point)

    def apply_direction(self, direction: DirectionLike) -> torch.Tensor:
        """Rotate a free vector; the translation is ignored."""
        return self._dq.transform_direction(direction)

    def apply_line(self, line: Line) -> Line:
        return Line._wrap(self._dq.transform_line(line.as_dual_quaternion()))

    # =========================================================================
    # Interpolation
    # =========================================================================

    def log(self) -> DualQuaternion:
        """Screw generator of this motion (a pure dual quaternion)."""
        return self._dq.log()

    def power(self, f: ScalarLike) -> 'Motion':
        """The same screw, scaled in angle and distance by `f`."""
        return Motion(self._dq.power(f))

    def sclerp(self, other: 'Motion', t: ScalarLike) -> 'Motion':
        """
        Screw-linear interpolation between two motions.

            M(t) = self * (self^{-1} * other)^t

        Args:
            other: Target motion
            t: Interpolation parameter in [0, 1]

        Returns:
            Interpolated motion
        """
        return Motion(self._dq.sclerp(other._dq, t))

    # =========================================================================
    # Decomposition
    # =========================================================================

    def translation(self) -> torch.Tensor:
        """
        Extract translation vector.

        For M = T(t) * R, Q1 = (t/2) * Q0, so t = 2 * vec(Q1 * conj(Q0)).
        """
        dq = self._dq
        return 2.0 * dq.dual.product(dq.real.conj()).vector

    def rotation_quaternion(self) -> Quaternion:
        """Extract the rotation as a unit quaternion."""
        return self._dq.real

    def as_dual_quaternion(self) -> DualQuaternion:
        return self._dq

    def allclose(self, other: 'Motion', atol: float = DEFAULT_ATOL) -> bool:
        return self._dq.allclose(other._dq, atol=atol)

    def __repr__(self) -> str:
        return f"Motion({self._dq})"
