"""
Dual numbers a + b*eps with eps^2 = 0.

Components are stored as a tensor of shape (..., 2) holding [re, du].

Powers of a dual number follow directly from eps^2 = 0:

    (a + b eps)^n = a^n + n a^(n-1) b eps

which gives closed forms for exp, log, sqrt and real powers. sqrt, log and
powf are only defined for a positive real part; anything else yields
non-finite values.
"""

from __future__ import annotations
from typing import Union

import torch

from ..core.precision import as_scalar, stack_scalars
from ..core.types import ScalarLike


class DualNumber:
    """A dual number re + du*eps."""

    def __init__(self, components: torch.Tensor):
        """
        Args:
            components: Tensor of shape (..., 2) holding [re, du]
        """
        components = as_scalar(components)
        if components.dim() == 0 or components.shape[-1] != 2:
            raise ValueError(f"Expected 2 components, got shape {tuple(components.shape)}")
        self.dn = components

    @classmethod
    def new(cls, re: ScalarLike, du: ScalarLike = 0.0) -> 'DualNumber':
        return cls(stack_scalars(re, du))

    @property
    def re(self) -> torch.Tensor:
        return self.dn[..., 0]

    @property
    def du(self) -> torch.Tensor:
        return self.dn[..., 1]

    def conj(self) -> 'DualNumber':
        return DualNumber.new(self.re, -self.du)

    def seminorm(self) -> torch.Tensor:
        """
        The norm induced by conjugation, |re|.

        Zero does not imply the dual number is zero: the dual part is ignored.
        """
        return torch.abs(self.re)

    def seminormalized(self) -> 'DualNumber':
        return self * (1.0 / self.seminorm())

    def norm(self) -> torch.Tensor:
        """Euclidean norm over both parts; zero only for the zero dual number."""
        return torch.sqrt(self.re * self.re + self.du * self.du)

    def normalized(self) -> 'DualNumber':
        return self * (1.0 / self.norm())

    # === Analytic functions ===

    def sqrt(self) -> 'DualNumber':
        # (A + B eps)^2 = A^2 + 2AB eps  =>  A = sqrt(a), B = b / 2sqrt(a)
        s = torch.sqrt(self.re)
        return DualNumber.new(s, self.du / (2.0 * s))

    def exp(self) -> 'DualNumber':
        """exp(a + b eps) = exp(a) (1 + b eps)"""
        e = torch.exp(self.re)
        return DualNumber.new(e, self.du * e)

    def log(self) -> 'DualNumber':
        """log(a + b eps) = log(a) + (b / a) eps"""
        return DualNumber.new(torch.log(self.re), self.du / self.re)

    def powf(self, f: ScalarLike) -> 'DualNumber':
        """Raise to a real power via exp(f * log(self))."""
        return (self.log() * f).exp()

    def powi(self, n: int) -> 'DualNumber':
        """Raise to an integer power, negative exponents included."""
        return DualNumber.new(self.re ** n, n * self.re ** (n - 1) * self.du)

    # === Binary operations ===

    def __add__(self, other: Union['DualNumber', ScalarLike]) -> 'DualNumber':
        if isinstance(other, DualNumber):
            return DualNumber(self.dn + other.dn)
        if isinstance(other, (int, float, torch.Tensor)):
            return DualNumber.new(self.re + other, self.du)
        return NotImplemented

    def __radd__(self, other: ScalarLike) -> 'DualNumber':
        return self.__add__(other)

    def __sub__(self, other: Union['DualNumber', ScalarLike]) -> 'DualNumber':
        if isinstance(other, DualNumber):
            return DualNumber(self.dn - other.dn)
        if isinstance(other, (int, float, torch.Tensor)):
            return DualNumber.new(self.re - other, self.du)
        return NotImplemented

    def __rsub__(self, other: ScalarLike) -> 'DualNumber':
        if isinstance(other, (int, float, torch.Tensor)):
            return DualNumber.new(other - self.re, -self.du)
        return NotImplemented

    def __neg__(self) -> 'DualNumber':
        return DualNumber(-self.dn)

    def __mul__(self, other: Union['DualNumber', ScalarLike]) -> 'DualNumber':
        if isinstance(other, DualNumber):
            return DualNumber.new(
                self.re * other.re,
                self.re * other.du + self.du * other.re,
            )
        if isinstance(other, (int, float)):
            return DualNumber(self.dn * other)
        if isinstance(other, torch.Tensor):
            return DualNumber(self.dn * as_scalar(other).unsqueeze(-1))
        return NotImplemented

    def __rmul__(self, other: ScalarLike) -> 'DualNumber':
        return self.__mul__(other)

    def __truediv__(self, other: Union['DualNumber', ScalarLike]) -> 'DualNumber':
        if isinstance(other, DualNumber):
            return self * other.conj() * (1.0 / other.seminorm() ** 2)
        if isinstance(other, (int, float)):
            return DualNumber(self.dn / other)
        if isinstance(other, torch.Tensor):
            return DualNumber(self.dn / as_scalar(other).unsqueeze(-1))
        return NotImplemented

    def __rtruediv__(self, other: ScalarLike) -> 'DualNumber':
        if isinstance(other, (int, float, torch.Tensor)):
            return self.conj() * (other / self.seminorm() ** 2)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, DualNumber):
            return NotImplemented
        return torch.equal(self.dn, other.dn)

    def allclose(self, other: 'DualNumber', atol: float = 1e-5) -> bool:
        return torch.allclose(self.dn, other.dn, atol=atol)

    def __repr__(self) -> str:
        return f"DualNumber({self.dn.tolist()})"
