"""
3-vector helpers shared by the quaternion and dual quaternion code.

Positions and directions are plain tensors of shape (..., 3). These helpers
only cover what the transforms need: dot and cross products, norm and
normalisation. They are deliberately unguarded: normalising a zero vector
yields NaN, which then propagates through whatever consumes it.
"""

import torch

from ..core.precision import as_scalar
from ..core.types import Vector3Like


def vec3(values: Vector3Like) -> torch.Tensor:
    """
    Convert a length-3 sequence or tensor to a 3-vector of the configured dtype.

    Raises:
        ValueError: if the trailing dimension is not 3
    """
    v = as_scalar(values)
    if v.dim() == 0 or v.shape[-1] != 3:
        raise ValueError(f"Expected 3 components, got shape {tuple(v.shape)}")
    return v


def dot(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Dot product over the last dimension."""
    return (a * b).sum(dim=-1)


def cross(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Cross product a x b over the last dimension."""
    a, b = torch.broadcast_tensors(a, b)
    return torch.linalg.cross(a, b, dim=-1)


def norm(v: torch.Tensor) -> torch.Tensor:
    """Euclidean length over the last dimension."""
    return torch.sqrt((v * v).sum(dim=-1))


def normalize(v: torch.Tensor) -> torch.Tensor:
    """v / |v|, without an epsilon guard."""
    return v / norm(v).unsqueeze(-1)
