"""
Validating variants of the singular operations.

The operations on Quaternion and DualQuaternion never raise: a zero axis, a
zero norm or a logarithm on its branch cut yields NaN/Inf components that
propagate. The functions here evaluate the same operations but raise instead:

- SingularityError when the input sits on a domain singularity or the result
  is not finite.
- PreconditionError when the input does not play the role the operation
  assumes (a pure generator for exp, normalized motions for sclerp).

Each rejection is logged at DEBUG level before raising.
"""

import logging
from typing import Union

import torch

from .angle import AngleLike
from .quaternion import Quaternion
from .dual_quaternion import DualQuaternion
from .vector3 import vec3, norm
from ..core.constants import DEFAULT_ATOL
from ..core.errors import SingularityError, PreconditionError
from ..core.types import ScalarLike, Vector3Like

logger = logging.getLogger(__name__)

Value = Union[Quaternion, DualQuaternion]


def _components(value: Value) -> torch.Tensor:
    if isinstance(value, DualQuaternion):
        return value.dq
    if isinstance(value, Quaternion):
        return value.q
    raise TypeError(f"Expected Quaternion or DualQuaternion, got {type(value).__name__}")


def _singular(operation: str, reason: str) -> SingularityError:
    logger.debug(f"Rejected {operation}: {reason}")
    return SingularityError(operation, reason)


def _precondition(operation: str, reason: str) -> PreconditionError:
    logger.debug(f"Rejected {operation}: {reason}")
    return PreconditionError(operation, reason)


def ensure_finite(value: Value, operation: str) -> Value:
    """
    Return `value` unchanged if every component is finite.

    Raises:
        SingularityError: if any component is NaN or infinite
    """
    if not bool(torch.isfinite(_components(value)).all()):
        raise _singular(operation, "result is not finite")
    return value


def is_normalized_motion(dq: DualQuaternion, atol: float = DEFAULT_ATOL) -> bool:
    """Unit real part and a vanishing Study residual, within `atol`."""
    unit = torch.abs(dq.norm() - 1.0) <= atol
    study = torch.abs(dq.study_residual()) <= atol
    return bool((unit & study).all())


def is_pure_generator(dq: DualQuaternion, atol: float = DEFAULT_ATOL) -> bool:
    """Both scalar parts (w, we) vanish within `atol`."""
    return bool(((torch.abs(dq.w) <= atol) & (torch.abs(dq.we) <= atol)).all())


# =============================================================================
# Constructors
# =============================================================================

def checked_rotor(angle: AngleLike, axis: Vector3Like) -> Quaternion:
    """
    Quaternion.rotor that rejects a zero-length axis.

    Raises:
        SingularityError: if the axis has zero length
    """
    if bool((norm(vec3(axis)) == 0).any()):
        raise _singular("rotor", "rotation axis has zero length")
    return Quaternion.rotor(angle, axis)


def checked_dual_rotor(angle: AngleLike, axis: Vector3Like) -> DualQuaternion:
    """DualQuaternion.rotor that rejects a zero-length axis."""
    if bool((norm(vec3(axis)) == 0).any()):
        raise _singular("dual rotor", "rotation axis has zero length")
    return DualQuaternion.rotor(angle, axis)


# =============================================================================
# Unary operations
# =============================================================================

def checked_normalized(value: Value) -> Value:
    """
    Normalize, rejecting a zero real norm.

    Raises:
        SingularityError: if the (real part) norm is zero
    """
    if bool((value.norm() == 0).any()):
        raise _singular("normalized", "norm is zero")
    return value.normalized()


def checked_log(value: Value) -> Value:
    """
    Logarithm that rejects the branch cut.

    For a Quaternion the cut is the non-positive real axis (zero vector part,
    w <= 0). For a DualQuaternion motion it is a zero rotation vector with
    w <= 0, the full turn.

    Raises:
        SingularityError: on the branch cut, or if the result is not finite
    """
    v = value.real_vector if isinstance(value, DualQuaternion) else value.vector
    on_cut = ((v == 0).all(dim=-1) & (value.w <= 0)).any()
    if bool(on_cut):
        raise _singular("log", "argument lies on the branch cut (zero vector part, w <= 0)")
    return ensure_finite(value.log(), "log")


def checked_exp(value: Value) -> Value:
    """
    Exponential that rejects non-finite values.

    A DualQuaternion must be a pure generator (w = we = 0), since the closed
    form ignores both scalar parts.

    Raises:
        SingularityError: if the input or result is not finite
        PreconditionError: for a DualQuaternion that is not a pure generator
    """
    ensure_finite(value, "exp")
    if isinstance(value, DualQuaternion) and not is_pure_generator(value):
        raise _precondition("exp", "dual quaternion is not a pure generator (w = we = 0)")
    return ensure_finite(value.exp(), "exp")


# =============================================================================
# Interpolation
# =============================================================================

def checked_sclerp(a: DualQuaternion, b: DualQuaternion, alpha: ScalarLike,
                   atol: float = DEFAULT_ATOL) -> DualQuaternion:
    """
    Screw-linear interpolation between two validated motions.

    Raises:
        PreconditionError: if either endpoint is not a normalized motion
        SingularityError: if the relative motion is a full turn or the result
                          is not finite
    """
    for name, value in (("start", a), ("end", b)):
        if not is_normalized_motion(value, atol):
            raise _precondition(
                "sclerp",
                f"{name} is not a normalized motion (unit real part, Study condition)",
            )
    relative = a.conj().product(b)
    checked_log(relative)
    return ensure_finite(a.sclerp(b, alpha), "sclerp")
