"""
Type aliases and shape conventions for screw_algebra.

Shape Conventions:
==================

Every value type is backed by a tensor whose LAST dimension holds the
components:

    Complex:         (..., 2)  [re, im]
    DualNumber:      (..., 2)  [re, du]
    Quaternion:      (..., 4)  [w, i, j, k]
    DualQuaternion:  (..., 8)  [w, i, j, k, we, ie, je, ke]
    3-vectors:       (..., 3)  [x, y, z]

The dual quaternion keeps its real quaternion in the first four slots and its
dual quaternion in the last four, so `dq[..., :4]` and `dq[..., 4:]` are the
two halves of Q0 + eps * Q1.
"""

from typing import Sequence, Union
import torch


# =============================================================================
# Basic Type Aliases
# =============================================================================

# Anything that can become a scalar of the configured width
ScalarLike = Union[float, int, torch.Tensor]

# Anything that can become a 3-vector: a tensor (..., 3) or a length-3 sequence
Vector3Like = Union[torch.Tensor, Sequence[float]]

# A position in space (x, y, z)
PositionLike = Vector3Like

# A free direction (dx, dy, dz), unaffected by translation
DirectionLike = Vector3Like
