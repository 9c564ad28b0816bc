"""
Quaternions for rotation handling.

Quaternions are represented as (w, i, j, k) where w is the scalar part and
(i, j, k) is the vector part:
    q = w + i*i + j*j + k*k

A quaternion can play several roles that the type does not distinguish:
- a point/vector (w = 0)
- a rotor (unit norm), applied with `transform`
- a scaled rotor (norm^2 = scale), applied with `transform_scaled`
- a general element of the ring

Components are stored as a tensor of shape (..., 4).
"""

from __future__ import annotations
from typing import Union

import torch

from .angle import Angle, AngleLike, as_angle
from .vector3 import vec3, cross, normalize
from ..core.constants import SMALL_ANGLE_SQ, DEFAULT_ATOL, QUATERNION_SIZE
from ..core.precision import as_scalar, stack_scalars, scalar_eps
from ..core.types import ScalarLike, Vector3Like


def hamilton_product(q1: torch.Tensor, q2: torch.Tensor) -> torch.Tensor:
    """
    Compute the quaternion product q1 * q2 on raw component tensors.

    Uses the Hamilton product formula:
        (a1 + b1i + c1j + d1k)(a2 + b2i + c2j + d2k)

    Args:
        q1: First quaternion of shape (..., 4) as [w, i, j, k]
        q2: Second quaternion of shape (..., 4) as [w, i, j, k]

    Returns:
        Product quaternion of shape (..., 4)
    """
    w1, x1, y1, z1 = q1.unbind(dim=-1)
    w2, x2, y2, z2 = q2.unbind(dim=-1)

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    return torch.stack([w, x, y, z], dim=-1)


def sinc(r: torch.Tensor, r_sq: torch.Tensor) -> torch.Tensor:
    """
    sin(r) / r, with its series below the small-angle threshold.

    Args:
        r: Magnitudes (non-negative)
        r_sq: r * r, passed in because callers already have it
    """
    small = r_sq < SMALL_ANGLE_SQ
    r_safe = torch.where(small, torch.ones_like(r), r)
    series = 1.0 - r_sq / 6.0 + r_sq * r_sq / 120.0
    return torch.where(small, series, torch.sin(r_safe) / r_safe)


def atan_ratio_series(r_sq: torch.Tensor, w: torch.Tensor) -> torch.Tensor:
    """atan(r/w) / r for w > 0 and small r/w, to order (r/w)^4."""
    x_sq = r_sq / (w * w)
    return (1.0 - x_sq / 3.0 + x_sq * x_sq / 5.0) / w


def _format_terms(values, suffixes) -> str:
    eps = scalar_eps()
    terms = [
        f"{float(v):g}{suffix}"
        for v, suffix in zip(values, suffixes)
        if float(v) ** 2 > eps
    ]
    return " + ".join(terms) if terms else "0"


class Quaternion:
    """
    A quaternion w + i*i + j*j + k*k.

    Supports:
    - Hamilton product (multiplication), scaling, addition
    - Conjugation, norm, normalisation, inversion, division
    - Exponential, logarithm and real powers
    - Rotation of 3-vectors by (scaled) rotors
    - Linear and spherical interpolation
    """

    def __init__(self, components: torch.Tensor):
        """
        Initialize a quaternion from its components.

        Args:
            components: Tensor of shape (..., 4) as [w, i, j, k]
        """
        components = as_scalar(components)
        if components.dim() == 0 or components.shape[-1] != QUATERNION_SIZE:
            raise ValueError(
                f"Expected {QUATERNION_SIZE} components, got shape {tuple(components.shape)}"
            )
        self.q = components

    # === Constructors ===

    @classmethod
    def new(cls, w: ScalarLike = 0.0, i: ScalarLike = 0.0,
            j: ScalarLike = 0.0, k: ScalarLike = 0.0) -> 'Quaternion':
        return cls(stack_scalars(w, i, j, k))

    @classmethod
    def identity(cls) -> 'Quaternion':
        """The multiplicative identity 1."""
        return cls.new(1.0)

    @classmethod
    def zero(cls) -> 'Quaternion':
        return cls.new()

    @classmethod
    def x_axis(cls) -> 'Quaternion':
        return cls.new(i=1.0)

    @classmethod
    def y_axis(cls) -> 'Quaternion':
        return cls.new(j=1.0)

    @classmethod
    def z_axis(cls) -> 'Quaternion':
        return cls.new(k=1.0)

    @classmethod
    def point(cls, pos: Vector3Like) -> 'Quaternion':
        """A point in space as the pure quaternion x*i + y*j + z*k."""
        p = vec3(pos)
        zero = torch.zeros_like(p[..., :1])
        return cls(torch.cat([zero, p], dim=-1))

    @classmethod
    def rotor(cls, angle: AngleLike, axis: Vector3Like) -> 'Quaternion':
        """
        Create a rotor (unit quaternion) from axis-angle representation.

        q = cos(angle/2) + sin(angle/2) * (ax*i + ay*j + az*k)

        Args:
            angle: Rotation angle (Angle, or a number in the Angle.new unit)
            axis: Rotation axis, normalized internally. A zero axis is not
                  guarded and yields NaN components.
        """
        half = as_angle(angle) * 0.5
        sin_half, cos_half = half.sin_cos()
        n = normalize(vec3(axis))

        v = sin_half.unsqueeze(-1) * n
        w = cos_half.unsqueeze(-1).expand(*v.shape[:-1], 1)
        return cls(torch.cat([w, v], dim=-1))

    @classmethod
    def scaled_rotor(cls, angle: AngleLike, axis: Vector3Like,
                     scale: ScalarLike) -> 'Quaternion':
        """
        Create a scaled rotor: rotates by `angle` and scales by `scale`
        when applied with `transform_scaled`.

        The rotor is multiplied by sqrt(scale), since the sandwich product
        applies it twice.
        """
        return cls.rotor(angle, axis) * torch.sqrt(as_scalar(scale))

    # === Properties ===

    @property
    def shape(self) -> torch.Size:
        """Batch shape (excluding the 4 components)."""
        return self.q.shape[:-1]

    @property
    def dtype(self) -> torch.dtype:
        return self.q.dtype

    @property
    def w(self) -> torch.Tensor:
        return self.q[..., 0]

    @property
    def i(self) -> torch.Tensor:
        return self.q[..., 1]

    @property
    def j(self) -> torch.Tensor:
        return self.q[..., 2]

    @property
    def k(self) -> torch.Tensor:
        return self.q[..., 3]

    @property
    def vector(self) -> torch.Tensor:
        """The vector part (i, j, k) of shape (..., 3)."""
        return self.q[..., 1:]

    # === Named operations ===

    def add(self, other: 'Quaternion') -> 'Quaternion':
        return Quaternion(self.q + other.q)

    def sub(self, other: 'Quaternion') -> 'Quaternion':
        return Quaternion(self.q - other.q)

    def scale(self, s: ScalarLike) -> 'Quaternion':
        """Multiply every component by a real scalar."""
        if isinstance(s, torch.Tensor):
            return Quaternion(self.q * as_scalar(s).unsqueeze(-1))
        return Quaternion(self.q * s)

    def product(self, other: 'Quaternion') -> 'Quaternion':
        """Hamilton product self * other. Non-commutative."""
        return Quaternion(hamilton_product(self.q, other.q))

    multiply = product

    def conj(self) -> 'Quaternion':
        """Conjugate: q* = w - i*i - j*j - k*k"""
        return Quaternion(torch.cat([self.q[..., :1], -self.q[..., 1:]], dim=-1))

    conjugate = conj

    def norm_squared(self) -> torch.Tensor:
        return (self.q * self.q).sum(dim=-1)

    def norm(self) -> torch.Tensor:
        """Euclidean 4-norm; zero only for the zero quaternion."""
        return torch.sqrt(self.norm_squared())

    def normalized(self) -> 'Quaternion':
        """
        Divide by the norm.

        Not guarded: the zero quaternion yields non-finite components.
        """
        return self.scale(1.0 / self.norm())

    def inverse(self) -> 'Quaternion':
        """
        Multiplicative inverse: q^{-1} = q* / |q|^2

        For unit quaternions, the inverse equals the conjugate.
        """
        return self.conj().scale(1.0 / self.norm_squared())

    def angle(self) -> Angle:
        """
        Polar angle x of this quaternion, where q = |q| (cos x + sin x * axis).

        For a rotor this is half the rotation angle.
        """
        return Angle.radians(torch.acos(self.normalized().w))

    # === Analytic functions ===

    def exp(self) -> 'Quaternion':
        """
        Exponential of a quaternion.

        exp(w + v) = exp(w) * (cos|v| + sin|v|/|v| * v)

        As |v| -> 0 the result tends to exp(w) with zero vector part; the
        sin(x)/x factor is evaluated by its series there.
        """
        w = self.w
        v = self.vector
        r_sq = (v * v).sum(dim=-1)
        r = torch.sqrt(r_sq)

        radius = torch.exp(w)
        real = radius * torch.cos(r)
        imag = (radius * sinc(r, r_sq)).unsqueeze(-1) * v

        return Quaternion(torch.cat([real.unsqueeze(-1), imag], dim=-1))

    def log(self) -> 'Quaternion':
        """
        Principal logarithm, the inverse of `exp`.

        log(q) = ln|q| + atan2(|v|, w)/|v| * v

        Positive real quaternions take the exact limit (ln w, v / w).
        Non-positive real quaternions lie on the branch cut and the zero
        quaternion has no logarithm; both yield non-finite components.
        """
        w = self.w
        v = self.vector
        r_sq = (v * v).sum(dim=-1)
        r = torch.sqrt(r_sq)

        theta = torch.atan2(r, w)

        near_real = (r_sq < SMALL_ANGLE_SQ * w * w) & (w > 0)
        r_safe = torch.where(near_real, torch.ones_like(r), r)
        w_safe = torch.where(near_real, w, torch.ones_like(w))
        factor = torch.where(near_real, atan_ratio_series(r_sq, w_safe), theta / r_safe)

        real = torch.log(self.norm())
        imag = factor.unsqueeze(-1) * v

        return Quaternion(torch.cat([real.unsqueeze(-1), imag], dim=-1))

    def power(self, f: ScalarLike) -> 'Quaternion':
        """
        Raise this quaternion to a real power: exp(f * log(q)).

        Pure real quaternions take the fast path w^f, which also gives the
        right answer for negative reals raised to integer powers.
        """
        general = self.log().scale(f).exp()

        w = self.w
        is_real = (self.vector == 0).all(dim=-1)
        real_power = torch.cat(
            [(w ** as_scalar(f)).unsqueeze(-1), torch.zeros_like(self.vector)], dim=-1
        )

        return Quaternion(torch.where(is_real.unsqueeze(-1), real_power, general.q))

    powf = power

    # === Transforms ===

    def transform(self, vector: Vector3Like) -> torch.Tensor:
        """
        Rotate a vector by this rotor.

        v' = v + 2 * (w*a + u x a),   a = u x v,   u = (i, j, k)

        Requires a unit rotor. For scaled rotors use `transform_scaled`.

        Args:
            vector: Vector of shape (..., 3)

        Returns:
            Rotated vector of shape (..., 3)
        """
        v = vec3(vector)
        u = self.vector
        w = self.w.unsqueeze(-1)

        a = cross(u, v)
        return v + 2.0 * (w * a + cross(u, a))

    def transform_scaled(self, vector: Vector3Like) -> torch.Tensor:
        """
        Rotate and scale a vector by this (possibly non-unit) rotor.

        If q = sqrt(s) q' with q' a unit rotor, q v q~ = s (q' v q'~), so the
        unit formula gains the factor s = |q|^2 on its leading term:

            v' = |q|^2 v + 2 * (w*a + u x a),   a = u x v
        """
        v = vec3(vector)
        u = self.vector
        w = self.w.unsqueeze(-1)
        s = self.norm_squared().unsqueeze(-1)

        a = cross(u, v)
        return s * v + 2.0 * (w * a + cross(u, a))

    transform_vector = transform
    transform_vector_scaled = transform_scaled

    # === Interpolation ===

    def lerp(self, other: 'Quaternion', alpha: ScalarLike) -> 'Quaternion':
        """Linear interpolation (1 - alpha) * self + alpha * other."""
        return self.scale(1.0 - alpha).add(other.scale(alpha))

    def slerp(self, other: 'Quaternion', alpha: ScalarLike) -> 'Quaternion':
        """
        Spherical linear interpolation, extended to interpolate magnitude.

        q(alpha) = (q1 * q0*)^alpha * q0   on the normalized inputs,
        scaled by (1 - alpha)|self| + alpha|other|.

        alpha outside [0, 1] extrapolates.
        """
        r0, r1 = self.norm(), other.norm()
        q0, q1 = self.normalized(), other.normalized()

        q = q1.product(q0.conj()).power(alpha).product(q0)

        return q.scale((1.0 - alpha) * r0 + alpha * r1)

    # === Operators ===

    def __add__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.sub(other)
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return Quaternion(-self.q)

    def __mul__(self, other: Union['Quaternion', ScalarLike]) -> 'Quaternion':
        """Hamilton product, or scaling by a real scalar."""
        if isinstance(other, Quaternion):
            return self.product(other)
        if isinstance(other, (int, float, torch.Tensor)):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: ScalarLike) -> 'Quaternion':
        if isinstance(other, (int, float, torch.Tensor)):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other: Union['Quaternion', ScalarLike]) -> 'Quaternion':
        """self * other^{-1}, or division by a real scalar."""
        if isinstance(other, Quaternion):
            return self.product(other.inverse())
        if isinstance(other, (int, float)):
            return Quaternion(self.q / other)
        if isinstance(other, torch.Tensor):
            return Quaternion(self.q / as_scalar(other).unsqueeze(-1))
        return NotImplemented

    def __rtruediv__(self, other: ScalarLike) -> 'Quaternion':
        if isinstance(other, (int, float, torch.Tensor)):
            return self.inverse().scale(other)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return torch.equal(self.q, other.q)

    def allclose(self, other: 'Quaternion', atol: float = DEFAULT_ATOL) -> bool:
        return torch.allclose(self.q, other.q, atol=atol)

    def isfinite(self) -> bool:
        return bool(torch.isfinite(self.q).all())

    def __str__(self) -> str:
        return _format_terms(self.q.reshape(-1, QUATERNION_SIZE)[0], ("", "i", "j", "k"))

    def __repr__(self) -> str:
        return f"Quaternion({self.q.tolist()})"
