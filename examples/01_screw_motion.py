"""
Example 01: Screw Motions

Demonstrates:
1. Building a Plücker line and a screw motion about it.
2. Checking the closed-form screw against the rotor/translator composition.
3. Moving points, directions and lines, each with its own transform.
4. Interpolating between two poses with sclerp.

A screw motion rotates about a line and travels along it at the same time.
Every rigid motion is a screw, and sclerp moves along that screw.
"""

import logging

import torch

from screw_algebra.algebra import Angle, DualQuaternion, checked_sclerp
from screw_algebra.geometry import Point, Line, Motion
from screw_algebra.utils import Config, apply_config

logging.basicConfig(level=logging.INFO)

# =============================================================================
# 1. Configuration
# =============================================================================

apply_config(Config(dtype="float64", angle_unit="degrees"))

# =============================================================================
# 2. A screw about a line
# =============================================================================

# The line through (0, 1, 0) pointing along +x
axis = Line([0.0, 1.0, 0.0], [1.0, 0.0, 0.0])
print(f"Axis direction: {axis.direction.tolist()}, moment: {axis.moment.tolist()}")

# Quarter turn about the axis, travelling 2 units along it
# (bare numbers are read in degrees after apply_config above)
screw = Motion.screw(axis, 90.0, 2.0)
print(f"Screw: {screw.as_dual_quaternion()}")

composed = DualQuaternion.screw_composed(axis.as_dual_quaternion(), 90.0, 2.0)
print(f"Matches composed form: {screw.as_dual_quaternion().allclose(composed)}")

# =============================================================================
# 3. Transforming points, directions and lines
# =============================================================================

origin = Point([0.0, 0.0, 0.0])
print(f"Origin moves to: {origin.transformed(screw).position.tolist()}")

# Directions only rotate
print(f"+y rotates to: {screw.apply_direction([0.0, 1.0, 0.0]).tolist()}")

# Lines move with both rotation and translation
line = Line([0.0, 0.0, 0.0], [0.0, 0.0, 1.0])
moved = line.transformed(screw)
print(f"z-axis moves to the line through {moved.closest_point.tolist()} "
      f"along {moved.direction.tolist()}")

# =============================================================================
# 4. Interpolating poses
# =============================================================================

start = Motion.identity()
end = Motion.translation_by([0.0, 0.0, 3.0]) * Motion.rotation(Angle.degrees(120.0), [0.0, 0.0, 1.0])

print("\nsclerp from identity to a 120 degree turn lifted by 3:")
for t in torch.linspace(0.0, 1.0, 5).tolist():
    pose = start.sclerp(end, t)
    p = pose.apply_point([1.0, 0.0, 0.0])
    print(f"  t={t:.2f}: (1, 0, 0) -> ({p[0]:+.3f}, {p[1]:+.3f}, {p[2]:+.3f})")

# The checked variant validates both endpoints first
checked = checked_sclerp(start.as_dual_quaternion(), end.as_dual_quaternion(), 0.5)
print(f"Checked midpoint agrees: {checked.allclose(start.sclerp(end, 0.5).as_dual_quaternion())}")
