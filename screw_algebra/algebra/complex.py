"""
Complex numbers a + bi with i^2 = -1.

Components are stored as a tensor of shape (..., 2) holding [re, im].
"""

from __future__ import annotations
from typing import Union

import torch

from ..core.precision import as_scalar, stack_scalars
from ..core.types import ScalarLike


class Complex:
    """A complex number re + im*i."""

    def __init__(self, components: torch.Tensor):
        """
        Args:
            components: Tensor of shape (..., 2) holding [re, im]
        """
        components = as_scalar(components)
        if components.dim() == 0 or components.shape[-1] != 2:
            raise ValueError(f"Expected 2 components, got shape {tuple(components.shape)}")
        self.z = components

    @classmethod
    def new(cls, re: ScalarLike, im: ScalarLike = 0.0) -> 'Complex':
        return cls(stack_scalars(re, im))

    @property
    def re(self) -> torch.Tensor:
        return self.z[..., 0]

    @property
    def im(self) -> torch.Tensor:
        return self.z[..., 1]

    def conj(self) -> 'Complex':
        return Complex(torch.stack([self.re, -self.im], dim=-1))

    def norm(self) -> torch.Tensor:
        return torch.sqrt(self.re * self.re + self.im * self.im)

    def normalized(self) -> 'Complex':
        """Divide by the norm; non-finite for zero."""
        return self * (1.0 / self.norm())

    # === Binary operations ===

    def __add__(self, other: Union['Complex', ScalarLike]) -> 'Complex':
        if isinstance(other, Complex):
            return Complex(self.z + other.z)
        if isinstance(other, (int, float, torch.Tensor)):
            return Complex.new(self.re + other, self.im)
        return NotImplemented

    def __radd__(self, other: ScalarLike) -> 'Complex':
        return self.__add__(other)

    def __sub__(self, other: Union['Complex', ScalarLike]) -> 'Complex':
        if isinstance(other, Complex):
            return Complex(self.z - other.z)
        if isinstance(other, (int, float, torch.Tensor)):
            return Complex.new(self.re - other, self.im)
        return NotImplemented

    def __rsub__(self, other: ScalarLike) -> 'Complex':
        if isinstance(other, (int, float, torch.Tensor)):
            return Complex.new(other - self.re, -self.im)
        return NotImplemented

    def __neg__(self) -> 'Complex':
        return Complex(-self.z)

    def __mul__(self, other: Union['Complex', ScalarLike]) -> 'Complex':
        if isinstance(other, Complex):
            re = self.re * other.re - self.im * other.im
            im = self.im * other.re + self.re * other.im
            return Complex(torch.stack([re, im], dim=-1))
        if isinstance(other, (int, float)):
            return Complex(self.z * other)
        if isinstance(other, torch.Tensor):
            return Complex(self.z * as_scalar(other).unsqueeze(-1))
        return NotImplemented

    def __rmul__(self, other: ScalarLike) -> 'Complex':
        return self.__mul__(other)

    def __truediv__(self, other: Union['Complex', ScalarLike]) -> 'Complex':
        if isinstance(other, Complex):
            return self * other.conj() * (1.0 / other.norm() ** 2)
        if isinstance(other, (int, float)):
            return Complex(self.z / other)
        if isinstance(other, torch.Tensor):
            return Complex(self.z / as_scalar(other).unsqueeze(-1))
        return NotImplemented

    def __rtruediv__(self, other: ScalarLike) -> 'Complex':
        if isinstance(other, (int, float, torch.Tensor)):
            return self.conj() * (other / self.norm() ** 2)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Complex):
            return NotImplemented
        return torch.equal(self.z, other.z)

    def allclose(self, other: 'Complex', atol: float = 1e-5) -> bool:
        return torch.allclose(self.z, other.z, atol=atol)

    def __repr__(self) -> str:
        return f"Complex({self.z.tolist()})"
