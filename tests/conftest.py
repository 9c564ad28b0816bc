"""
Pytest configuration and fixtures for screw_algebra tests.
"""

import math

import pytest
import torch

from screw_algebra.core.constants import DEFAULT_DTYPE, DEFAULT_DEVICE, DEFAULT_ANGLE_UNIT
from screw_algebra.core.precision import set_scalar_dtype, set_device
from screw_algebra.algebra.angle import Angle, set_angle_unit
from screw_algebra.algebra.dual_quaternion import DualQuaternion


@pytest.fixture(autouse=True)
def default_settings():
    """Restore the process-wide settings around every test."""
    set_scalar_dtype(DEFAULT_DTYPE)
    set_device(DEFAULT_DEVICE)
    set_angle_unit(DEFAULT_ANGLE_UNIT)
    yield
    set_scalar_dtype(DEFAULT_DTYPE)
    set_device(DEFAULT_DEVICE)
    set_angle_unit(DEFAULT_ANGLE_UNIT)


@pytest.fixture
def float64():
    """Run a test in float64."""
    set_scalar_dtype("float64")
    yield torch.float64


@pytest.fixture
def half_sqrt2():
    """cos(45 deg) = sin(45 deg)."""
    return math.sqrt(2.0) / 2.0


@pytest.fixture
def x_line_through_y():
    """The line through (0, 1, 0) along +x."""
    return DualQuaternion.line([0.0, 1.0, 0.0], [1.0, 0.0, 0.0])


@pytest.fixture
def quarter_screw(x_line_through_y):
    """90 degree screw about x_line_through_y, travelling 2 along it."""
    return DualQuaternion.screw(x_line_through_y, Angle.degrees(90.0), 2.0)


@pytest.fixture
def general_motion():
    """A motion with rotation and translation along no special axis."""
    rotor = DualQuaternion.rotor(Angle.degrees(70.0), [1.0, 2.0, -0.5])
    translator = DualQuaternion.translator([0.3, -1.2, 2.5])
    return translator * rotor


@pytest.fixture
def other_motion():
    rotor = DualQuaternion.rotor(Angle.degrees(-40.0), [0.2, -1.0, 0.7])
    translator = DualQuaternion.translator([-2.0, 0.5, 1.0])
    return translator * rotor


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
