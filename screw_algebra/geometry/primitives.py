"""
Points and lines as tagged dual quaternions.

A raw DualQuaternion can hold a point, a line or a motion, and nothing stops a
caller from sandwiching a point with the line conjugate. The wrappers here fix
the role at construction, so each one is transformed by the right formula:

- Point: 1 + eps * (x*i + y*j + z*k), moved by M * P * nconj(M)
- Line: Plücker coordinates (u | m), moved by M * L * conj(M)

Conversion back from a raw value checks that its components fit the role and
raises RoleError otherwise.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import torch

from ..algebra.dual_quaternion import DualQuaternion
from ..algebra.vector3 import vec3, cross
from ..core.constants import DEFAULT_ATOL
from ..core.errors import RoleError
from ..core.types import PositionLike, DirectionLike

if TYPE_CHECKING:
    from .motion import Motion


class Point:
    """
    A point in space.

    Example:
        >>> p = Point([1.0, 2.0, 3.0])
        >>> p.transformed(Motion.translation_by([1.0, 0.0, 0.0])).position
        tensor([2., 2., 3.])
    """

    def __init__(self, position: PositionLike):
        """
        Args:
            position: Coordinates of shape (..., 3)
        """
        self._dq = DualQuaternion.point(position)

    @classmethod
    def _wrap(cls, dq: DualQuaternion) -> 'Point':
        point = cls.__new__(cls)
        point._dq = dq
        return point

    @classmethod
    def from_dual_quaternion(cls, dq: DualQuaternion,
                             atol: float = DEFAULT_ATOL) -> 'Point':
        """
        Interpret a raw value as a point, dividing out its weight w.

        Raises:
            RoleError: if w vanishes, or the real vector part or we do not
        """
        if bool((torch.abs(dq.w) <= atol).any()):
            raise RoleError("Not a point: weight w is zero")
        stray = torch.abs(dq.real_vector).amax(dim=-1)
        if bool(((stray > atol) | (torch.abs(dq.we) > atol)).any()):
            raise RoleError("Not a point: real vector part and we must vanish")
        return cls(dq.dual_vector / dq.w.unsqueeze(-1))

    @property
    def position(self) -> torch.Tensor:
        """Coordinates (x, y, z)."""
        return self._dq.dual_vector

    def transformed(self, motion: 'Motion') -> 'Point':
        return Point(motion.apply_point(self.position))

    def as_dual_quaternion(self) -> DualQuaternion:
        return self._dq

    def __repr__(self) -> str:
        return f"Point({self.position.tolist()})"


class Line:
    """
    An oriented line in Plücker coordinates.

    The direction u is a unit vector and the moment is m = p x u for any point
    p on the line, so the real part is (0, u) and the dual part is (0, m).
    """

    def __init__(self, position: PositionLike, direction: DirectionLike):
        """
        Args:
            position: Any point on the line
            direction: Line direction, normalized internally
        """
        self._dq = DualQuaternion.line(position, direction)

    @classmethod
    def _wrap(cls, dq: DualQuaternion) -> 'Line':
        line = cls.__new__(cls)
        line._dq = dq
        return line

    @classmethod
    def from_plucker(cls, direction: DirectionLike, moment: PositionLike) -> 'Line':
        """
        Build a line directly from Plücker coordinates.

        The pair is taken as given: no normalisation, and the caller is
        responsible for direction . moment = 0.
        """
        u = vec3(direction)
        m = vec3(moment)
        u, m = torch.broadcast_tensors(u, m)
        zero = torch.zeros_like(u[..., :1])
        return cls._wrap(DualQuaternion(torch.cat([zero, u, zero, m], dim=-1)))

    @classmethod
    def from_dual_quaternion(cls, dq: DualQuaternion,
                             atol: float = DEFAULT_ATOL) -> 'Line':
        """
        Interpret a raw value as a line.

        Raises:
            RoleError: if either scalar part (w, we) is non-zero
        """
        if bool(((torch.abs(dq.w) > atol) | (torch.abs(dq.we) > atol)).any()):
            raise RoleError("Not a line: scalar parts w and we must vanish")
        return cls._wrap(dq)

    @property
    def direction(self) -> torch.Tensor:
        return self._dq.real_vector

    @property
    def moment(self) -> torch.Tensor:
        return self._dq.dual_vector

    @property
    def closest_point(self) -> torch.Tensor:
        """Point of the line nearest the origin, u x m (for unit u)."""
        return cross(self.direction, self.moment)

    @property
    def distance_to_origin(self) -> torch.Tensor:
        return self._dq.inorm()

    def transformed(self, motion: 'Motion') -> 'Line':
        return motion.apply_line(self)

    def as_dual_quaternion(self) -> DualQuaternion:
        return self._dq

    def __repr__(self) -> str:
        return f"Line(direction={self.direction.tolist()}, moment={self.moment.tolist()})"
