"""
Tests for the checked variants.

The default operations let singularities through as non-finite values; the
checked variants raise at each singular branch instead.
"""

import logging

import pytest
import torch

from screw_algebra.algebra.angle import Angle
from screw_algebra.algebra.quaternion import Quaternion
from screw_algebra.algebra.dual_quaternion import DualQuaternion
from screw_algebra.algebra.checked import (
    checked_rotor,
    checked_dual_rotor,
    checked_normalized,
    checked_log,
    checked_exp,
    checked_sclerp,
    ensure_finite,
    is_normalized_motion,
    is_pure_generator,
)
from screw_algebra.core.errors import SingularityError, PreconditionError, AlgebraError


class TestErrors:

    def test_hierarchy(self):
        assert issubclass(SingularityError, AlgebraError)
        assert issubclass(SingularityError, ValueError)
        assert issubclass(PreconditionError, AlgebraError)
        assert issubclass(PreconditionError, ValueError)

    def test_message_names_operation(self):
        err = SingularityError("log", "argument lies on the branch cut")
        assert err.operation == "log"
        assert str(err) == "log: argument lies on the branch cut"


# =============================================================================
# Constructor Tests
# =============================================================================

class TestCheckedRotor:
    """Zero-length axes are rejected."""

    def test_unchecked_zero_axis_is_nan(self):
        assert not Quaternion.rotor(1.0, [0.0, 0.0, 0.0]).isfinite()

    def test_zero_axis_raises(self):
        with pytest.raises(SingularityError):
            checked_rotor(1.0, [0.0, 0.0, 0.0])

    def test_dual_zero_axis_raises(self):
        with pytest.raises(SingularityError):
            checked_dual_rotor(1.0, [0.0, 0.0, 0.0])

    def test_valid_axis_matches_unchecked(self):
        q = checked_rotor(Angle.degrees(40.0), [1.0, 2.0, 3.0])
        assert q == Quaternion.rotor(Angle.degrees(40.0), [1.0, 2.0, 3.0])
        dq = checked_dual_rotor(Angle.degrees(40.0), [1.0, 2.0, 3.0])
        assert dq == DualQuaternion.rotor(Angle.degrees(40.0), [1.0, 2.0, 3.0])

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="screw_algebra.algebra.checked"):
            with pytest.raises(SingularityError):
                checked_rotor(1.0, [0.0, 0.0, 0.0])
        assert "zero length" in caplog.text


# =============================================================================
# Unary Operation Tests
# =============================================================================

class TestCheckedNormalized:

    def test_zero_quaternion_raises(self):
        with pytest.raises(SingularityError):
            checked_normalized(Quaternion.zero())

    def test_zero_real_part_raises(self):
        with pytest.raises(SingularityError):
            checked_normalized(DualQuaternion.dual_unit())

    def test_valid(self):
        q = checked_normalized(Quaternion.new(0.0, 3.0, 4.0, 0.0))
        assert q.allclose(Quaternion.new(0.0, 0.6, 0.8, 0.0))


class TestCheckedLog:

    def test_negative_real_quaternion_raises(self):
        with pytest.raises(SingularityError):
            checked_log(Quaternion.new(-2.0))

    def test_zero_quaternion_raises(self):
        with pytest.raises(SingularityError):
            checked_log(Quaternion.zero())

    def test_full_turn_raises(self):
        full_turn = DualQuaternion.rotor(Angle.full(), [0.0, 0.0, 1.0])
        full_turn = DualQuaternion(torch.where(full_turn.dq.abs() < 1e-6,
                                               torch.zeros_like(full_turn.dq), full_turn.dq))
        with pytest.raises(SingularityError):
            checked_log(full_turn)

    def test_valid_motion(self, general_motion):
        assert checked_log(general_motion).allclose(general_motion.log())

    def test_positive_real_quaternion(self):
        assert checked_log(Quaternion.new(1.0)).allclose(Quaternion.zero())


class TestCheckedExp:

    def test_non_generator_raises(self):
        with pytest.raises(PreconditionError):
            checked_exp(DualQuaternion.new(w=1.0, i=0.5))

    def test_non_finite_input_raises(self):
        with pytest.raises(SingularityError):
            checked_exp(DualQuaternion.new(i=float("nan")))

    def test_overflow_raises(self):
        with pytest.raises(SingularityError):
            checked_exp(Quaternion.new(1000.0))

    def test_valid_generator(self):
        g = DualQuaternion.new(k=0.4, ie=1.0)
        assert checked_exp(g).allclose(g.exp())

    def test_quaternion_with_real_part_allowed(self):
        q = Quaternion.new(0.5, 0.1, 0.0, 0.0)
        assert checked_exp(q).allclose(q.exp())


# =============================================================================
# Interpolation Tests
# =============================================================================

class TestCheckedSclerp:

    def test_valid(self, general_motion, other_motion):
        out = checked_sclerp(general_motion, other_motion, 0.3)
        assert out.allclose(general_motion.sclerp(other_motion, 0.3))

    def test_unnormalized_endpoint_raises(self, general_motion):
        with pytest.raises(PreconditionError):
            checked_sclerp(general_motion, general_motion * 2.0, 0.5)

    def test_study_violation_raises(self, general_motion):
        broken = DualQuaternion.new(w=1.0, we=0.3)
        with pytest.raises(PreconditionError):
            checked_sclerp(broken, general_motion, 0.5)

    def test_full_turn_apart_raises(self):
        a = DualQuaternion.identity()
        with pytest.raises(SingularityError):
            checked_sclerp(a, -a, 0.5)


# =============================================================================
# Helper Tests
# =============================================================================

class TestHelpers:

    def test_ensure_finite_passes_value_through(self):
        q = Quaternion.identity()
        assert ensure_finite(q, "test") is q

    def test_ensure_finite_raises(self):
        with pytest.raises(SingularityError) as info:
            ensure_finite(Quaternion.new(float("inf")), "test")
        assert info.value.operation == "test"

    def test_ensure_finite_rejects_other_types(self):
        with pytest.raises(TypeError):
            ensure_finite(torch.zeros(4), "test")

    def test_is_normalized_motion(self, general_motion):
        assert is_normalized_motion(general_motion)
        assert not is_normalized_motion(general_motion * 2.0)

    def test_is_pure_generator(self, general_motion):
        assert is_pure_generator(general_motion.log())
        assert not is_pure_generator(general_motion)
