"""
Tests for quaternions.

These tests define quaternion behavior:

1. Representation: (w, i, j, k) = w + i*i + j*j + k*k
2. Ring operations: product, conjugate, norm, inverse, division
3. Rotors: axis-angle construction, vector rotation, scaled rotors
4. Analytic functions: exp, log, power
5. Interpolation: lerp, slerp
"""

import math

import pytest
import torch

from screw_algebra.algebra.angle import Angle
from screw_algebra.algebra.quaternion import Quaternion, hamilton_product
from screw_algebra.core.precision import set_scalar_dtype


# =============================================================================
# Construction Tests
# =============================================================================

class TestConstruction:
    """Tests for quaternion constructors and accessors."""

    def test_new_and_accessors(self):
        q = Quaternion.new(1.0, 2.0, 3.0, 4.0)
        assert float(q.w) == 1.0
        assert float(q.i) == 2.0
        assert float(q.j) == 3.0
        assert float(q.k) == 4.0
        assert torch.equal(q.vector, torch.tensor([2.0, 3.0, 4.0]))

    def test_identity_and_zero(self):
        assert Quaternion.identity() == Quaternion.new(1.0)
        assert float(Quaternion.zero().norm()) == 0.0

    def test_axes(self):
        assert Quaternion.x_axis() == Quaternion.new(i=1.0)
        assert Quaternion.y_axis() == Quaternion.new(j=1.0)
        assert Quaternion.z_axis() == Quaternion.new(k=1.0)

    def test_point(self):
        assert Quaternion.point([1.0, 2.0, 3.0]) == Quaternion.new(0.0, 1.0, 2.0, 3.0)

    def test_rotor_components(self):
        q = Quaternion.rotor(Angle.degrees(90.0), [0.0, 0.0, 2.0])
        h = math.sqrt(2.0) / 2.0
        assert q.allclose(Quaternion.new(h, 0.0, 0.0, h))

    def test_wrong_size_rejected(self):
        with pytest.raises(ValueError):
            Quaternion(torch.zeros(3))

    def test_components_follow_precision(self, float64):
        assert Quaternion.identity().dtype == torch.float64

    def test_batched_shape(self):
        q = Quaternion(torch.randn(5, 4))
        assert q.shape == (5,)
        assert (q * q).shape == (5,)


# =============================================================================
# Ring Operation Tests
# =============================================================================

class TestRingOperations:
    """Tests for the Hamilton product and related operations."""

    def test_basis_products(self):
        """i*j = k, j*k = i, k*i = j, i*i = -1"""
        i, j, k = Quaternion.x_axis(), Quaternion.y_axis(), Quaternion.z_axis()
        assert i * j == k
        assert j * k == i
        assert k * i == j
        assert i * i == -Quaternion.identity()

    def test_non_commutative(self):
        i, j = Quaternion.x_axis(), Quaternion.y_axis()
        assert j * i == -(i * j)

    def test_hamilton_product_kernel(self):
        q1 = torch.tensor([1.0, 2.0, 3.0, 4.0])
        q2 = torch.tensor([5.0, 6.0, 7.0, 8.0])
        expected = torch.tensor([-60.0, 12.0, 30.0, 24.0])
        assert torch.equal(hamilton_product(q1, q2), expected)

    def test_conjugate(self):
        q = Quaternion.new(1.0, 2.0, 3.0, 4.0)
        assert q.conj() == Quaternion.new(1.0, -2.0, -3.0, -4.0)

    def test_product_with_conjugate_is_norm_squared(self):
        q = Quaternion.new(1.0, 2.0, 3.0, 4.0)
        assert (q * q.conj()).allclose(Quaternion.new(30.0))
        assert float(q.norm_squared()) == 30.0

    def test_inverse(self):
        q = Quaternion.new(1.0, -2.0, 0.5, 3.0)
        assert (q * q.inverse()).allclose(Quaternion.identity())
        assert (q.inverse() * q).allclose(Quaternion.identity())

    def test_division(self):
        a = Quaternion.new(1.0, -2.0, 0.5, 3.0)
        b = Quaternion.new(0.5, 1.0, 1.0, -1.0)
        assert ((a * b) / b).allclose(a, atol=1e-4)
        assert (a / 2.0) == Quaternion.new(0.5, -1.0, 0.25, 1.5)

    def test_scalar_scaling_both_sides(self):
        q = Quaternion.new(1.0, 2.0, 3.0, 4.0)
        assert 2.0 * q == q * 2.0
        assert (q * 2.0) == Quaternion.new(2.0, 4.0, 6.0, 8.0)

    def test_normalized(self):
        q = Quaternion.new(1.0, 1.0, 1.0, 1.0).normalized()
        assert q.allclose(Quaternion.new(0.5, 0.5, 0.5, 0.5))

    def test_normalized_zero_not_finite(self):
        assert not Quaternion.zero().normalized().isfinite()

    def test_angle_is_half_rotation(self):
        q = Quaternion.rotor(Angle.degrees(120.0), [1.0, 1.0, 0.0])
        assert q.angle().isclose(Angle.degrees(60.0), atol=1e-3)


# =============================================================================
# Rotor Tests
# =============================================================================

class TestRotation:
    """Tests for rotating vectors."""

    def test_quarter_turn_about_z(self):
        q = Quaternion.rotor(Angle.degrees(90.0), [0.0, 0.0, 1.0])
        out = q.transform([1.0, 0.0, 0.0])
        assert torch.allclose(out, torch.tensor([0.0, 1.0, 0.0]), atol=1e-5)

    def test_matches_sandwich_product(self):
        q = Quaternion.rotor(Angle.degrees(73.0), [1.0, -2.0, 0.5])
        v = [0.3, 1.7, -2.2]
        sandwich = q * Quaternion.point(v) * q.conj()
        assert torch.allclose(q.transform(v), sandwich.vector, atol=1e-5)

    def test_preserves_length(self):
        q = Quaternion.rotor(Angle.radians(2.1), [0.4, 0.4, -1.0])
        v = torch.randn(10, 3)
        out = q.transform(v)
        assert torch.allclose(out.norm(dim=-1), v.norm(dim=-1), atol=1e-5)

    def test_composition_applies_right_first(self):
        """(a * b) rotates by b, then by a."""
        a = Quaternion.rotor(Angle.degrees(90.0), [0.0, 0.0, 1.0])
        b = Quaternion.rotor(Angle.degrees(90.0), [1.0, 0.0, 0.0])
        v = [0.0, 1.0, 0.0]
        assert torch.allclose((a * b).transform(v), a.transform(b.transform(v)), atol=1e-5)

    def test_scaled_rotor(self):
        q = Quaternion.scaled_rotor(Angle.degrees(90.0), [0.0, 0.0, 1.0], 3.0)
        out = q.transform_scaled([1.0, 0.0, 0.0])
        assert torch.allclose(out, torch.tensor([0.0, 3.0, 0.0]), atol=1e-5)

    def test_scaled_matches_unit_for_unit_rotor(self):
        q = Quaternion.rotor(Angle.degrees(33.0), [1.0, 1.0, 1.0])
        v = [1.0, -2.0, 0.5]
        assert torch.allclose(q.transform_scaled(v), q.transform(v), atol=1e-5)


# =============================================================================
# Analytic Function Tests
# =============================================================================

class TestExpLog:
    """Tests for exp, log and power."""

    def test_exp_of_pure_vector_is_rotor(self):
        """exp(theta/2 * n) = rotor(theta, n)"""
        half = 0.6
        q = Quaternion.new(0.0, half, 0.0, 0.0).exp()
        assert q.allclose(Quaternion.rotor(Angle.radians(2 * half), [1.0, 0.0, 0.0]))

    def test_exp_of_real(self):
        assert Quaternion.new(1.0).exp().allclose(Quaternion.new(math.e))

    def test_exp_small_vector_finite(self):
        q = Quaternion.new(0.0, 1e-5, 0.0, 0.0).exp()
        assert q.isfinite()
        assert q.allclose(Quaternion.new(1.0, 1e-5, 0.0, 0.0))

    def test_log_exp_roundtrip(self):
        q = Quaternion.new(0.2, 0.5, -1.0, 0.8)
        assert q.log().exp().allclose(q, atol=1e-5)

    def test_exp_log_roundtrip(self):
        g = Quaternion.new(0.3, 0.4, -0.2, 1.1)
        assert g.exp().log().allclose(g, atol=1e-5)

    def test_log_positive_real(self):
        q = Quaternion.new(2.0).log()
        assert q.allclose(Quaternion.new(math.log(2.0)))
        assert q.isfinite()

    def test_log_negative_real_not_finite(self):
        assert not Quaternion.new(-1.0).log().isfinite()

    def test_log_near_real_uses_limit(self):
        q = Quaternion.new(2.0, 1e-4, 0.0, 0.0)
        assert q.log().allclose(Quaternion.new(math.log(2.0), 5e-5, 0.0, 0.0))

    def test_log_small_norm_angle(self, float64):
        # |v| is tiny but large relative to w
        q = Quaternion.new(1e-4, 5e-4, 0.0, 0.0).log()
        assert q.i.item() == pytest.approx(math.atan2(5e-4, 1e-4), rel=1e-12)
        assert q.w.item() == pytest.approx(math.log(math.hypot(1e-4, 5e-4)), rel=1e-12)

    @pytest.mark.parametrize("dtype", ["float32", "float64"])
    @pytest.mark.parametrize("components", [
        (1e-4, 5e-4, 0.0, 0.0),
        (5e-4, 5e-4, 0.0, 0.0),
        (1e-3, 0.0, 1e-4, 0.0),
        (3.0, 0.2, -0.1, 0.4),
    ])
    def test_log_exp_roundtrip_any_norm(self, dtype, components):
        set_scalar_dtype(dtype)
        q = Quaternion.new(*components)
        back = q.log().exp()
        assert torch.allclose(back.q, q.q, rtol=1e-4, atol=1e-9)

    def test_power_halves_rotation(self):
        q = Quaternion.rotor(Angle.degrees(90.0), [0.0, 1.0, 0.0])
        assert q.power(0.5).allclose(Quaternion.rotor(Angle.degrees(45.0), [0.0, 1.0, 0.0]))

    def test_power_of_real(self):
        assert Quaternion.new(-2.0).power(2.0).allclose(Quaternion.new(4.0))
        assert Quaternion.new(4.0).power(0.5).allclose(Quaternion.new(2.0))

    def test_power_integer_matches_product(self):
        q = Quaternion.new(0.5, 0.3, -0.2, 0.6)
        assert q.power(3.0).allclose(q * q * q, atol=1e-5)


# =============================================================================
# Interpolation Tests
# =============================================================================

class TestInterpolation:
    """Tests for lerp and slerp."""

    def test_lerp(self):
        a, b = Quaternion.new(1.0), Quaternion.new(0.0, 1.0)
        assert a.lerp(b, 0.25).allclose(Quaternion.new(0.75, 0.25))

    def test_slerp_endpoints(self):
        a = Quaternion.rotor(Angle.degrees(10.0), [1.0, 0.0, 0.0])
        b = Quaternion.rotor(Angle.degrees(100.0), [0.0, 1.0, 1.0])
        assert a.slerp(b, 0.0).allclose(a)
        assert a.slerp(b, 1.0).allclose(b)

    def test_slerp_midpoint(self):
        a = Quaternion.identity()
        b = Quaternion.rotor(Angle.degrees(90.0), [0.0, 0.0, 1.0])
        mid = a.slerp(b, 0.5)
        assert mid.allclose(Quaternion.rotor(Angle.degrees(45.0), [0.0, 0.0, 1.0]))

    def test_slerp_interpolates_magnitude(self):
        a = Quaternion.identity() * 2.0
        b = Quaternion.rotor(Angle.degrees(60.0), [0.0, 0.0, 1.0]) * 4.0
        assert math.isclose(float(a.slerp(b, 0.5).norm()), 3.0, abs_tol=1e-5)


class TestDisplay:

    def test_str_skips_zero_terms(self):
        assert str(Quaternion.new(1.0, 0.0, -2.5, 0.0)) == "1 + -2.5j"

    def test_str_zero(self):
        assert str(Quaternion.zero()) == "0"
