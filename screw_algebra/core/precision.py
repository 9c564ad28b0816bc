"""
Process-wide scalar precision.

Every value type in screw_algebra stores its components in one torch floating
dtype, chosen once for the whole process (float32 unless configured
otherwise). Constructors route their inputs through `as_scalar`, so values
built after the precision is set never mix widths.

Usage:
    from screw_algebra.core.precision import set_scalar_dtype
    set_scalar_dtype("float64")   # once, at start-up
"""

import logging
from typing import Union

import torch

from .constants import SUPPORTED_DTYPES, DEFAULT_DTYPE, DEFAULT_DEVICE

logger = logging.getLogger(__name__)

_DTYPES = {
    "float32": torch.float32,
    "float64": torch.float64,
}

_scalar_dtype: torch.dtype = _DTYPES[DEFAULT_DTYPE]
_device: torch.device = torch.device(DEFAULT_DEVICE)


def _resolve_dtype(dtype: Union[str, torch.dtype]) -> torch.dtype:
    if isinstance(dtype, torch.dtype):
        for resolved in _DTYPES.values():
            if dtype == resolved:
                return resolved
    elif dtype in _DTYPES:
        return _DTYPES[dtype]
    raise ValueError(
        f"Unsupported scalar dtype {dtype!r}, expected one of {SUPPORTED_DTYPES}"
    )


def dtype_name(dtype: torch.dtype) -> str:
    """Configuration name ("float32"/"float64") of a supported dtype."""
    for name, resolved in _DTYPES.items():
        if resolved == dtype:
            return name
    raise ValueError(f"Unsupported scalar dtype {dtype!r}")


def get_scalar_dtype() -> torch.dtype:
    """The torch dtype every value is built with."""
    return _scalar_dtype


def set_scalar_dtype(dtype: Union[str, torch.dtype]) -> torch.dtype:
    """
    Select the scalar width for the whole process.

    Args:
        dtype: "float32", "float64" or the matching torch dtype

    Returns:
        The previously configured dtype

    Raises:
        ValueError: for any other dtype
    """
    global _scalar_dtype
    resolved = _resolve_dtype(dtype)
    previous = _scalar_dtype
    if resolved != previous:
        logger.warning(
            f"Scalar precision changed from {dtype_name(previous)} to "
            f"{dtype_name(resolved)}; values built earlier keep their dtype"
        )
    _scalar_dtype = resolved
    return previous


def get_device() -> torch.device:
    return _device


def set_device(device: Union[str, torch.device]) -> torch.device:
    """Select the device values are allocated on. Returns the previous one."""
    global _device
    previous = _device
    _device = torch.device(device)
    if _device != previous:
        logger.info(f"Scalar device changed from {previous} to {_device}")
    return previous


def scalar_eps() -> float:
    """Machine epsilon of the configured scalar width."""
    return torch.finfo(_scalar_dtype).eps


def as_scalar(value) -> torch.Tensor:
    """
    Convert a number, sequence or tensor to the configured dtype and device.

    Tensors already in the configured dtype and device are returned as-is.
    """
    if isinstance(value, torch.Tensor):
        return value.to(device=_device, dtype=_scalar_dtype)
    return torch.as_tensor(value, dtype=_scalar_dtype, device=_device)


def stack_scalars(*values) -> torch.Tensor:
    """Broadcast scalars (numbers or tensors) and stack them along a new last dim."""
    tensors = torch.broadcast_tensors(*[as_scalar(v) for v in values])
    return torch.stack(tensors, dim=-1)
