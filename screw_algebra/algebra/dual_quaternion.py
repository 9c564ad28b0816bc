"""
Dual quaternions for rigid body motion.

A dual quaternion pairs a real quaternion Q0 with a dual quaternion Q1:

    DQ = Q0 + eps * Q1,    eps^2 = 0

Component ordering:
[w, i, j, k, we, ie, je, ke]
 0  1  2  3  4   5   6   7

The same eight numbers serve four geometric roles, which the type itself does
not tag (see screw_algebra.geometry for tagged wrappers):

- Line (Plücker coordinates): w = we = 0, (i, j, k) the unit direction u and
  (ie, je, ke) the moment m = p x u for any point p on the line.
- Point: 1 + eps * (x*i + y*j + z*k).
- Motion: unit Q0 and a Q1 satisfying the Study condition w*we + v.m = 0.
- Raw intermediate value.

The three conjugations transform different objects and are not
interchangeable:

    conj   negate i, j, k, ie, je, ke     M * L * conj(M)   moves a line
    nconj  negate i, j, k, we             M * P * nconj(M)  moves a point
    iconj  negate ie, je, ke, we          the dual (eps -> -eps) automorphism

Motions compose by the product, M = T * R applies R first and then T.
"""

from __future__ import annotations
from typing import Union

import torch

from .angle import AngleLike, as_angle
from .quaternion import Quaternion, hamilton_product, sinc, atan_ratio_series, _format_terms
from .vector3 import vec3, cross, dot, normalize
from ..core.constants import SMALL_ANGLE_SQ, DEFAULT_ATOL, DUAL_QUATERNION_SIZE
from ..core.precision import as_scalar, stack_scalars
from ..core.types import ScalarLike, Vector3Like


# Component indices
IDX_W = 0
IDX_I = 1
IDX_J = 2
IDX_K = 3
IDX_WE = 4
IDX_IE = 5
IDX_JE = 6
IDX_KE = 7

REAL_SLICE = slice(0, 4)
DUAL_SLICE = slice(4, 8)
REAL_VECTOR_SLICE = slice(1, 4)
DUAL_VECTOR_SLICE = slice(5, 8)

# Sign tables for the three conjugations
CONJ_SIGNS = torch.tensor([1, -1, -1, -1, 1, -1, -1, -1], dtype=torch.float32)
NCONJ_SIGNS = torch.tensor([1, -1, -1, -1, -1, 1, 1, 1], dtype=torch.float32)
ICONJ_SIGNS = torch.tensor([1, 1, 1, 1, -1, -1, -1, -1], dtype=torch.float32)

_DISPLAY_ORDER = (IDX_W, IDX_I, IDX_J, IDX_K, IDX_IE, IDX_JE, IDX_KE, IDX_WE)
_DISPLAY_SUFFIXES = ("", "i", "j", "k", "ie", "je", "ke", "we")


def _assemble(w: torch.Tensor, v: torch.Tensor,
              we: torch.Tensor, m: torch.Tensor) -> torch.Tensor:
    """Pack scalar/vector parts of both halves into (..., 8) components."""
    v, m = torch.broadcast_tensors(v, m)
    batch_shape = v.shape[:-1]
    w = w.expand(batch_shape).unsqueeze(-1)
    we = we.expand(batch_shape).unsqueeze(-1)
    return torch.cat([w, v, we, m], dim=-1)


class DualQuaternion:
    """
    A dual quaternion Q0 + eps * Q1.

    Supports:
    - Product (built on two Hamilton products), scaling, addition
    - Line, point and dual conjugations
    - Real-part norm, dual-part norm, normalisation
    - Point, direction and line transforms
    - Exponential of pure generators, logarithm of motions, powers
    - Screw-linear interpolation (sclerp)
    """

    def __init__(self, components: torch.Tensor):
        """
        Initialize a dual quaternion from its components.

        Args:
            components: Tensor of shape (..., 8) containing
                        [w, i, j, k, we, ie, je, ke]
        """
        components = as_scalar(components)
        if components.dim() == 0 or components.shape[-1] != DUAL_QUATERNION_SIZE:
            raise ValueError(
                f"Expected {DUAL_QUATERNION_SIZE} components, got shape {tuple(components.shape)}"
            )
        self.dq = components

    # === Constructors ===

    @classmethod
    def new(cls, w: ScalarLike = 0.0, i: ScalarLike = 0.0, j: ScalarLike = 0.0,
            k: ScalarLike = 0.0, ie: ScalarLike = 0.0, je: ScalarLike = 0.0,
            ke: ScalarLike = 0.0, we: ScalarLike = 0.0) -> 'DualQuaternion':
        """Build from named components (any omitted component is zero)."""
        return cls(stack_scalars(w, i, j, k, we, ie, je, ke))

    @classmethod
    def from_quaternions(cls, real: Quaternion, dual: Quaternion) -> 'DualQuaternion':
        """real + eps * dual"""
        r, d = torch.broadcast_tensors(real.q, dual.q)
        return cls(torch.cat([r, d], dim=-1))

    @classmethod
    def identity(cls) -> 'DualQuaternion':
        """The identity motion 1."""
        return cls.new(w=1.0)

    @classmethod
    def zero(cls) -> 'DualQuaternion':
        return cls.new()

    @classmethod
    def dual_unit(cls) -> 'DualQuaternion':
        """The dual unit eps."""
        return cls.new(we=1.0)

    @classmethod
    def point(cls, pos: Vector3Like) -> 'DualQuaternion':
        """Embed a point as 1 + eps * (x*i + y*j + z*k)."""
        p = vec3(pos)
        one = torch.ones_like(p[..., 0])
        zero = torch.zeros_like(p[..., 0])
        return cls(_assemble(one, torch.zeros_like(p), zero, p))

    @classmethod
    def line(cls, pos: Vector3Like, dir: Vector3Like) -> 'DualQuaternion':
        """
        Create a line in Plücker coordinates from a point on it and a direction.

        The direction is normalized to u and the moment is m = pos x u, so the
        point of the line closest to the origin is u x m and the dual-part
        norm is the line's distance from the origin.

        Args:
            pos: Any point on the line
            dir: Line direction, normalized internally (zero is not guarded)
        """
        u = normalize(vec3(dir))
        m = cross(vec3(pos), u)
        zero = torch.zeros_like(u[..., 0])
        return cls(_assemble(zero, u, zero, m))

    @classmethod
    def rotor(cls, angle: AngleLike, axis: Vector3Like) -> 'DualQuaternion':
        """
        Pure rotation about an axis through the origin.

        w = cos(angle/2), (i, j, k) = sin(angle/2) * normalize(axis), dual part 0.
        """
        real = Quaternion.rotor(angle, axis)
        return cls.from_quaternions(real, Quaternion(torch.zeros_like(real.q)))

    @classmethod
    def translator(cls, translation: Vector3Like) -> 'DualQuaternion':
        """Pure translation: 1 + eps * (t/2)."""
        t = vec3(translation)
        one = torch.ones_like(t[..., 0])
        zero = torch.zeros_like(t[..., 0])
        return cls(_assemble(one, torch.zeros_like(t), zero, 0.5 * t))

    @classmethod
    def screw(cls, line: 'DualQuaternion', angle: AngleLike,
              distance: ScalarLike) -> 'DualQuaternion':
        """
        Screw motion about a line: rotate by `angle` about it and travel
        `distance` along it.

        Exponentiates the pure generator built from the normalized line (u, m):

            G = (angle/2) * u + eps * ((angle/2) * m + (distance/2) * u)

        Rotation about a line and translation along it commute, so this equals
        `screw_composed`.
        """
        line = line.normalized()
        half_angle = (as_angle(angle).rad * 0.5).unsqueeze(-1)
        half_distance = (as_scalar(distance) * 0.5).unsqueeze(-1)

        u = line.real_vector
        m = line.dual_vector
        zero = torch.zeros_like(u[..., 0])

        generator = cls(_assemble(zero, u * half_angle, zero,
                                  m * half_angle + u * half_distance))
        return generator.exp()

    @classmethod
    def screw_composed(cls, line: 'DualQuaternion', angle: AngleLike,
                       distance: ScalarLike) -> 'DualQuaternion':
        """
        The same screw as `screw`, built from translators and a rotor:

            T(distance * u) * T(p) * R(angle, u) * T(-p),   p = u x m
        """
        line = line.normalized()
        u = line.real_vector
        p = cross(u, line.dual_vector)

        about_line = cls.translator(p) * cls.rotor(angle, u) * cls.translator(-p)
        return cls.translator(u * as_scalar(distance).unsqueeze(-1)) * about_line

    # === Properties ===

    @property
    def shape(self) -> torch.Size:
        """Batch shape (excluding the 8 components)."""
        return self.dq.shape[:-1]

    @property
    def dtype(self) -> torch.dtype:
        return self.dq.dtype

    @property
    def w(self) -> torch.Tensor:
        return self.dq[..., IDX_W]

    @property
    def i(self) -> torch.Tensor:
        return self.dq[..., IDX_I]

    @property
    def j(self) -> torch.Tensor:
        return self.dq[..., IDX_J]

    @property
    def k(self) -> torch.Tensor:
        return self.dq[..., IDX_K]

    @property
    def we(self) -> torch.Tensor:
        return self.dq[..., IDX_WE]

    @property
    def ie(self) -> torch.Tensor:
        return self.dq[..., IDX_IE]

    @property
    def je(self) -> torch.Tensor:
        return self.dq[..., IDX_JE]

    @property
    def ke(self) -> torch.Tensor:
        return self.dq[..., IDX_KE]

    @property
    def real(self) -> Quaternion:
        """The real quaternion Q0 = (w, i, j, k)."""
        return Quaternion(self.dq[..., REAL_SLICE])

    @property
    def dual(self) -> Quaternion:
        """The dual quaternion Q1 = (we, ie, je, ke)."""
        return Quaternion(self.dq[..., DUAL_SLICE])

    @property
    def real_vector(self) -> torch.Tensor:
        """(i, j, k): a line's direction, a rotor's scaled axis."""
        return self.dq[..., REAL_VECTOR_SLICE]

    @property
    def dual_vector(self) -> torch.Tensor:
        """(ie, je, ke): a line's moment, a point's position."""
        return self.dq[..., DUAL_VECTOR_SLICE]

    # === Named operations ===

    def add(self, other: 'DualQuaternion') -> 'DualQuaternion':
        return DualQuaternion(self.dq + other.dq)

    def sub(self, other: 'DualQuaternion') -> 'DualQuaternion':
        return DualQuaternion(self.dq - other.dq)

    def scale(self, s: ScalarLike) -> 'DualQuaternion':
        """Multiply all eight components by a real scalar."""
        if isinstance(s, torch.Tensor):
            return DualQuaternion(self.dq * as_scalar(s).unsqueeze(-1))
        return DualQuaternion(self.dq * s)

    def product(self, other: 'DualQuaternion') -> 'DualQuaternion':
        """
        (r1 + eps d1)(r2 + eps d2) = r1 r2 + eps (r1 d2 + d1 r2)

        Non-commutative.
        """
        r1, d1 = self.dq[..., REAL_SLICE], self.dq[..., DUAL_SLICE]
        r2, d2 = other.dq[..., REAL_SLICE], other.dq[..., DUAL_SLICE]

        real = hamilton_product(r1, r2)
        dual = hamilton_product(r1, d2) + hamilton_product(d1, r2)

        return DualQuaternion(torch.cat([real, dual], dim=-1))

    multiply = product

    def conj(self) -> 'DualQuaternion':
        """
        Line conjugate: negate i, j, k, ie, je, ke.

        Use as the trailing factor when sandwiching lines. For motions this is
        also the inverse.
        """
        return DualQuaternion(self.dq * CONJ_SIGNS.to(self.dq))

    conjugate = conj

    def nconj(self) -> 'DualQuaternion':
        """
        Point conjugate: negate i, j, k and we.

        Use as the trailing factor when sandwiching points.
        """
        return DualQuaternion(self.dq * NCONJ_SIGNS.to(self.dq))

    def iconj(self) -> 'DualQuaternion':
        """Dual conjugate: negate the dual part (ie, je, ke, we)."""
        return DualQuaternion(self.dq * ICONJ_SIGNS.to(self.dq))

    def norm(self) -> torch.Tensor:
        """
        Norm of the real quaternion.

        For lines this is the length of the direction vector.
        """
        real = self.dq[..., REAL_SLICE]
        return torch.sqrt((real * real).sum(dim=-1))

    def inorm(self) -> torch.Tensor:
        """
        Norm of the dual quaternion ("ideal" norm).

        For normalized lines this is the distance from the origin.
        """
        dual = self.dq[..., DUAL_SLICE]
        return torch.sqrt((dual * dual).sum(dim=-1))

    def normalized(self) -> 'DualQuaternion':
        """
        Divide all eight components by the real-part norm.

        The dual part is not re-orthogonalised against the Study condition, so
        drift accumulated by repeated composition is kept.
        """
        return self.scale(1.0 / self.norm())

    def study_residual(self) -> torch.Tensor:
        """w*we + v.m, which vanishes for every rigid motion."""
        return self.w * self.we + dot(self.real_vector, self.dual_vector)

    # === Transforms ===

    def transform_point(self, point: Vector3Like) -> torch.Tensor:
        """
        Move a point by this motion (rotation about and travel along its axis).

        p' = p + 2 * (w*a + v x a - we*v),   a = v x p + m

        Equal to the dual vector of M * point(p) * nconj(M).
        """
        p = vec3(point)
        v = self.real_vector
        m = self.dual_vector
        w = self.w.unsqueeze(-1)
        we = self.we.unsqueeze(-1)

        a = cross(v, p) + m
        return p + 2.0 * (w * a + cross(v, a) - we * v)

    def transform_direction(self, direction: Vector3Like) -> torch.Tensor:
        """
        Rotate a free vector by this motion; translation does not apply.

        d' = d + 2 * (w*a + v x a),   a = v x d
        """
        d = vec3(direction)
        v = self.real_vector
        w = self.w.unsqueeze(-1)

        a = cross(v, d)
        return d + 2.0 * (w * a + cross(v, a))

    transform_vector3 = transform_direction

    def transform_line(self, line: 'DualQuaternion') -> 'DualQuaternion':
        """
        Move a line by this motion; equal to M * line * conj(M).

        The direction rotates like a free vector. The moment picks up the
        derivative of that rotation along the dual part of the motion:

            l'  = l  + 2 * (w*a + v x a)
            lm' = lm + 2 * (we*a + w*d + v x d + m x a)

        with a = v x l and d = v x lm + m x l.
        """
        l = line.real_vector
        lm = line.dual_vector

        v = self.real_vector
        m = self.dual_vector
        w = self.w.unsqueeze(-1)
        we = self.we.unsqueeze(-1)

        a = cross(v, l)
        d = cross(v, lm) + cross(m, l)

        l_out = l + 2.0 * (w * a + cross(v, a))
        lm_out = lm + 2.0 * (we * a + w * d + cross(v, d) + cross(m, a))

        zero = torch.zeros_like(l_out[..., 0])
        return DualQuaternion(_assemble(zero, l_out, zero, lm_out))

    # === Analytic functions ===

    def exp(self) -> 'DualQuaternion':
        """
        Exponential of a pure generator (w = we = 0); the scalar parts are
        ignored, so other inputs give wrong results.

        With r = |v| and t = v.m:

            w'  = cos r
            v'  = (sin r / r) * v
            we' = -(sin r / r) * t
            m'  = (sin r / r) * m + (cos r / r^2 - sin r / r^3) * t * v

        Both coefficients use their series near r = 0, where the result tends
        to 1 + eps * m: the identity for a generator with no dual part, a pure
        translator otherwise. The result is always finite for finite input.
        """
        v = self.real_vector
        m = self.dual_vector

        r_sq = (v * v).sum(dim=-1)
        r = torch.sqrt(r_sq)
        t = dot(v, m)

        small = r_sq < SMALL_ANGLE_SQ
        r_safe = torch.where(small, torch.ones_like(r), r)

        s = sinc(r, r_sq)
        c = torch.where(
            small,
            -1.0 / 3.0 + r_sq / 30.0 - r_sq * r_sq / 840.0,
            (torch.cos(r_safe) - torch.sin(r_safe) / r_safe) / (r_safe * r_safe),
        )

        w_out = torch.cos(r)
        v_out = s.unsqueeze(-1) * v
        we_out = -s * t
        m_out = s.unsqueeze(-1) * m + (c * t).unsqueeze(-1) * v

        return DualQuaternion(_assemble(w_out, v_out, we_out, m_out))

    def log(self) -> 'DualQuaternion':
        """
        Logarithm of a normalized motion, returning a pure generator.

        With r = |v|, t = v.m:

            alpha = atan2(r, w) / r
            beta  = t / r^2
            v'    = alpha * v
            m'    = alpha * m + ((w - alpha) * beta - we) * v

        This is the principal branch, so exp(log(M)) == M. When w > 0 and r / w
        is small both coefficients use their series. The branch cut is r = 0 with
        w < 0 (a full turn, M = -1), where the result is non-finite.
        Unnormalized input gives finite but wrong results.
        """
        w = self.w
        we = self.we
        v = self.real_vector
        m = self.dual_vector

        r_sq = (v * v).sum(dim=-1)
        r = torch.sqrt(r_sq)
        t = dot(v, m)

        near = (r_sq < SMALL_ANGLE_SQ * w * w) & (w > 0)
        r_safe = torch.where(near, torch.ones_like(r), r)
        w_safe = torch.where(near, w, torch.ones_like(w))

        alpha = torch.where(near, atan_ratio_series(r_sq, w_safe), torch.atan2(r, w) / r_safe)

        # (w - alpha) / r^2 for a unit real part, where w^2 - 1 = -r^2
        w3 = w_safe * w_safe * w_safe
        gap_series = -1.0 / w_safe + 1.0 / (3.0 * w3) - r_sq / (5.0 * w3 * w_safe * w_safe)
        coeff = torch.where(
            near,
            gap_series * t - we,
            (w - alpha) * (t / (r_safe * r_safe)) - we,
        )

        v_out = alpha.unsqueeze(-1) * v
        m_out = alpha.unsqueeze(-1) * m + coeff.unsqueeze(-1) * v
        zero = torch.zeros_like(w)

        return DualQuaternion(_assemble(zero, v_out, zero, m_out))

    def power(self, f: ScalarLike) -> 'DualQuaternion':
        """
        Raise a normalized motion to a real power: exp(f * log(M)).

        Inherits the singularities of `log` and `exp`.
        """
        return self.log().scale(f).exp()

    powf = power

    # === Interpolation ===

    def lerp(self, other: 'DualQuaternion', alpha: ScalarLike) -> 'DualQuaternion':
        """Linear interpolation (1 - alpha) * self + alpha * other."""
        return self.scale(1.0 - alpha).add(other.scale(alpha))

    def sclerp(self, other: 'DualQuaternion', alpha: ScalarLike) -> 'DualQuaternion':
        """
        Screw-linear interpolation between two normalized motions.

            self * (conj(self) * other)^alpha

        alpha in [0, 1] moves along the screw axis joining the two motions;
        values outside extrapolate.
        """
        return self.product(self.conj().product(other).power(alpha))

    # === Operators ===

    def __add__(self, other: 'DualQuaternion') -> 'DualQuaternion':
        if isinstance(other, DualQuaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'DualQuaternion') -> 'DualQuaternion':
        if isinstance(other, DualQuaternion):
            return self.sub(other)
        return NotImplemented

    def __neg__(self) -> 'DualQuaternion':
        return DualQuaternion(-self.dq)

    def __mul__(self, other: Union['DualQuaternion', ScalarLike]) -> 'DualQuaternion':
        """Dual quaternion product, or scaling by a real scalar."""
        if isinstance(other, DualQuaternion):
            return self.product(other)
        if isinstance(other, (int, float, torch.Tensor)):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: ScalarLike) -> 'DualQuaternion':
        if isinstance(other, (int, float, torch.Tensor)):
            return self.scale(other)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, DualQuaternion):
            return NotImplemented
        return torch.equal(self.dq, other.dq)

    def allclose(self, other: 'DualQuaternion', atol: float = DEFAULT_ATOL) -> bool:
        return torch.allclose(self.dq, other.dq, atol=atol)

    def isfinite(self) -> bool:
        return bool(torch.isfinite(self.dq).all())

    def __str__(self) -> str:
        first = self.dq.reshape(-1, DUAL_QUATERNION_SIZE)[0]
        return _format_terms([first[idx] for idx in _DISPLAY_ORDER], _DISPLAY_SUFFIXES)

    def __repr__(self) -> str:
        return f"DualQuaternion({self.dq.tolist()})"
