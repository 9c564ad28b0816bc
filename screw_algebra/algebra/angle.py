"""
Angles that carry both radians and degrees.

Some callers think in radians, others in degrees. An Angle keeps both
projections in sync (deg = rad * 180 / pi) from construction onwards, and every
arithmetic operator updates the two fields together, so neither can drift.

Positive angles are counter-clockwise.

`Angle.new(x)` reads its unit from the configuration (radians by default);
`Angle.radians` and `Angle.degrees` are explicit.
"""

from __future__ import annotations
import logging
from typing import Tuple, Union

import torch

from ..core.constants import RAD_TO_DEG, DEG_TO_RAD, ANGLE_UNITS, DEFAULT_ANGLE_UNIT
from ..core.precision import as_scalar
from ..core.types import ScalarLike

logger = logging.getLogger(__name__)

_angle_unit: str = DEFAULT_ANGLE_UNIT


def get_angle_unit() -> str:
    """Unit used by `Angle.new`."""
    return _angle_unit


def set_angle_unit(unit: str) -> str:
    """
    Select the unit used by `Angle.new`.

    Returns:
        The previous unit

    Raises:
        ValueError: for anything other than "radians" or "degrees"
    """
    global _angle_unit
    if unit not in ANGLE_UNITS:
        raise ValueError(f"Unknown angle unit {unit!r}, expected one of {ANGLE_UNITS}")
    previous = _angle_unit
    _angle_unit = unit
    if unit != previous:
        logger.info(f"Angle.new() now reads {unit}")
    return previous


def _round_half_away(x: torch.Tensor) -> torch.Tensor:
    return torch.sign(x) * torch.floor(torch.abs(x) + 0.5)


class Angle:
    """
    An angle stored as a synchronised (radians, degrees) pair.

    Both fields are scalars of the configured width and are read-only.
    """

    __slots__ = ("_rad", "_deg")

    def __init__(self, rad: torch.Tensor, deg: torch.Tensor):
        # Use Angle.radians / Angle.degrees; this keeps the pair as given.
        self._rad = rad
        self._deg = deg

    # === Constructors ===

    @classmethod
    def radians(cls, angle: ScalarLike) -> 'Angle':
        """Create an Angle from radians."""
        rad = as_scalar(angle)
        return cls(rad, rad * RAD_TO_DEG)

    @classmethod
    def degrees(cls, angle: ScalarLike) -> 'Angle':
        """Create an Angle from degrees."""
        deg = as_scalar(angle)
        return cls(deg * DEG_TO_RAD, deg)

    @classmethod
    def new(cls, angle: ScalarLike) -> 'Angle':
        """Create an Angle in the configured default unit."""
        if _angle_unit == "degrees":
            return cls.degrees(angle)
        return cls.radians(angle)

    @classmethod
    def full(cls) -> 'Angle':
        """360 degrees."""
        return cls.degrees(360.0)

    @classmethod
    def half(cls) -> 'Angle':
        """180 degrees."""
        return cls.degrees(180.0)

    @classmethod
    def quarter(cls) -> 'Angle':
        """90 degrees."""
        return cls.degrees(90.0)

    @classmethod
    def eighth(cls) -> 'Angle':
        """45 degrees."""
        return cls.degrees(45.0)

    @classmethod
    def zero(cls) -> 'Angle':
        return cls.degrees(0.0)

    # === Projections ===

    @property
    def rad(self) -> torch.Tensor:
        """This angle in radians."""
        return self._rad

    @property
    def deg(self) -> torch.Tensor:
        """This angle in degrees."""
        return self._deg

    def sin(self) -> torch.Tensor:
        return torch.sin(self._rad)

    def cos(self) -> torch.Tensor:
        return torch.cos(self._rad)

    def tan(self) -> torch.Tensor:
        return torch.tan(self._rad)

    def sin_cos(self) -> Tuple[torch.Tensor, torch.Tensor]:
        """(sin, cos) of the radian projection."""
        return torch.sin(self._rad), torch.cos(self._rad)

    # === Arithmetic ===

    def __add__(self, other: 'Angle') -> 'Angle':
        if isinstance(other, Angle):
            return Angle(self._rad + other._rad, self._deg + other._deg)
        return NotImplemented

    def __sub__(self, other: 'Angle') -> 'Angle':
        if isinstance(other, Angle):
            return Angle(self._rad - other._rad, self._deg - other._deg)
        return NotImplemented

    def __neg__(self) -> 'Angle':
        return Angle(-self._rad, -self._deg)

    def __mod__(self, other: 'Angle') -> 'Angle':
        """Truncated remainder (sign of the dividend), applied to both fields."""
        if isinstance(other, Angle):
            return Angle(torch.fmod(self._rad, other._rad), torch.fmod(self._deg, other._deg))
        return NotImplemented

    def __mul__(self, other: ScalarLike) -> 'Angle':
        if isinstance(other, (int, float, torch.Tensor)):
            return Angle(self._rad * other, self._deg * other)
        return NotImplemented

    def __rmul__(self, other: ScalarLike) -> 'Angle':
        return self.__mul__(other)

    def __truediv__(self, other: ScalarLike) -> 'Angle':
        if isinstance(other, (int, float, torch.Tensor)):
            return Angle(self._rad / other, self._deg / other)
        return NotImplemented

    # === Comparison ===
    # Batched angles compare elementwise; the boolean forms hold only when
    # every element satisfies them.

    def __eq__(self, other) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return bool((self._rad == other._rad).all()) and bool((self._deg == other._deg).all())

    def __lt__(self, other: 'Angle') -> bool:
        return bool((self._deg < other._deg).all())

    def __le__(self, other: 'Angle') -> bool:
        return bool((self._deg <= other._deg).all())

    def __gt__(self, other: 'Angle') -> bool:
        return bool((self._deg > other._deg).all())

    def __ge__(self, other: 'Angle') -> bool:
        return bool((self._deg >= other._deg).all())

    def isclose(self, other: 'Angle', atol: float = 1e-5) -> bool:
        """Compare degrees within an absolute tolerance."""
        return bool((torch.abs(self._deg - other._deg) <= atol).all())

    def _select(self, mask: torch.Tensor, other: 'Angle') -> 'Angle':
        return Angle(torch.where(mask, self._rad, other._rad), torch.where(mask, self._deg, other._deg))

    # === Rounding and range correction ===

    def min(self, angle: 'Angle') -> 'Angle':
        return self._select(self._deg < angle._deg, angle)

    def max(self, angle: 'Angle') -> 'Angle':
        return self._select(self._deg > angle._deg, angle)

    def clamp(self, min: 'Angle', max: 'Angle') -> 'Angle':
        """Clamp this angle between two angles, elementwise."""
        return max._select(self._deg > max._deg, min._select(self._deg < min._deg, self))

    def abs(self) -> 'Angle':
        """Drop the sign."""
        return Angle(torch.abs(self._rad), torch.abs(self._deg))

    def signum(self) -> torch.Tensor:
        """+1 or -1, following the sign bit of the angle (so -0 gives -1)."""
        return torch.copysign(torch.ones_like(self._deg), self._deg)

    def floor(self, angle: 'Angle') -> 'Angle':
        """Round toward zero to a multiple of `angle`."""
        n = torch.trunc(self._deg / angle._deg)
        return angle * n

    def ceil(self, angle: 'Angle') -> 'Angle':
        """Round away from zero to a multiple of `angle`."""
        a = self._deg / angle._deg
        n = torch.where(a < 0, torch.floor(a), torch.ceil(a))
        return angle * n

    def round(self, angle: 'Angle') -> 'Angle':
        """Round to the nearest multiple of `angle` (halves away from zero)."""
        n = _round_half_away(self._deg / angle._deg)
        return angle * n

    def corrected(self) -> 'Angle':
        """
        Map this angle into [0 deg, 360 deg).

        -20 deg becomes 340 deg.
        """
        modulo = torch.fmod(self._deg, 360.0)
        deg = torch.where(self._deg < 0, 360.0 + modulo, modulo)
        return Angle.degrees(deg)

    def sign_corrected(self) -> 'Angle':
        """
        Make this angle non-negative without wrapping it into one turn.

        -380 deg becomes 700 deg.
        """
        turns = torch.floor(self._deg / 360.0) * -360.0
        deg = torch.where(self._deg < 0, turns + torch.fmod(self._deg, 360.0), self._deg)
        return Angle.degrees(deg)

    def range_corrected(self) -> 'Angle':
        """Map this angle into (-360 deg, 360 deg), keeping its sign."""
        return Angle.degrees(torch.fmod(self._deg, 360.0))

    # === Display ===

    def __repr__(self) -> str:
        return f"Angle(deg={float(self._deg):g}, rad={float(self._rad):g})"

    def __str__(self) -> str:
        return f"{float(self._deg):g}° / {float(self._rad):g} rad"


AngleLike = Union[Angle, ScalarLike]


def as_angle(angle: AngleLike) -> Angle:
    """Accept an Angle, or a bare number in the configured `Angle.new` unit."""
    if isinstance(angle, Angle):
        return angle
    return Angle.new(angle)
