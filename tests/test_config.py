"""
Tests for configuration and the process-wide scalar precision.
"""

import json
import logging

import pytest
import torch

from screw_algebra.algebra.angle import Angle, get_angle_unit
from screw_algebra.algebra.dual_quaternion import DualQuaternion
from screw_algebra.core.precision import (
    get_scalar_dtype, set_scalar_dtype, get_device, scalar_eps,
    as_scalar, stack_scalars, dtype_name,
)
from screw_algebra.utils.config import (
    Config, load_config, save_config, apply_config, current_config,
)


# =============================================================================
# Precision Tests
# =============================================================================

class TestPrecision:
    """Tests for the scalar dtype shared by all values."""

    def test_default_is_float32(self):
        assert get_scalar_dtype() == torch.float32
        assert get_device() == torch.device("cpu")

    def test_set_returns_previous(self):
        previous = set_scalar_dtype("float64")
        assert previous == torch.float32
        assert get_scalar_dtype() == torch.float64

    def test_accepts_torch_dtype(self):
        set_scalar_dtype(torch.float64)
        assert get_scalar_dtype() == torch.float64

    def test_unsupported_dtype_rejected(self):
        with pytest.raises(ValueError):
            set_scalar_dtype("float16")
        with pytest.raises(ValueError):
            set_scalar_dtype(torch.int32)

    def test_change_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="screw_algebra.core.precision"):
            set_scalar_dtype("float64")
        assert "float32 to float64" in caplog.text

    def test_as_scalar_casts(self):
        assert as_scalar(1).dtype == torch.float32
        assert as_scalar(torch.tensor([1.0], dtype=torch.float64)).dtype == torch.float32
        set_scalar_dtype("float64")
        assert as_scalar(1.5).dtype == torch.float64

    def test_stack_scalars_broadcasts(self):
        out = stack_scalars(1.0, torch.tensor([2.0, 3.0]), 0.0)
        assert out.shape == (2, 3)
        assert torch.equal(out[1], torch.tensor([1.0, 3.0, 0.0]))

    def test_scalar_eps(self):
        assert scalar_eps() == torch.finfo(torch.float32).eps
        set_scalar_dtype("float64")
        assert scalar_eps() == torch.finfo(torch.float64).eps

    def test_dtype_name(self):
        assert dtype_name(torch.float32) == "float32"
        assert dtype_name(torch.float64) == "float64"


# =============================================================================
# Config Tests
# =============================================================================

class TestConfig:
    """Tests for the Config dataclass."""

    def test_defaults(self):
        config = Config()
        assert config.dtype == "float32"
        assert config.device == "cpu"
        assert config.angle_unit == "radians"
        assert config.extra == {}

    def test_to_dict(self):
        d = Config(dtype="float64").to_dict()
        assert d == {"dtype": "float64", "device": "cpu", "angle_unit": "radians", "extra": {}}

    def test_from_dict_collects_unknown_keys(self):
        config = Config.from_dict({"dtype": "float64", "note": "lab setup"})
        assert config.dtype == "float64"
        assert config.extra == {"note": "lab setup"}

    def test_update_returns_new_config(self):
        config = Config()
        updated = config.update(angle_unit="degrees")
        assert updated.angle_unit == "degrees"
        assert config.angle_unit == "radians"

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            Config(dtype="float16")
        with pytest.raises(ValueError):
            Config(angle_unit="turns")

    def test_save_load_roundtrip(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = Config(dtype="float64", angle_unit="degrees", extra={"note": "x"})
        save_config(config, str(path))

        with open(path) as f:
            assert json.load(f)["dtype"] == "float64"

        loaded = load_config(str(path))
        assert loaded == config

    def test_load_logs(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        save_config(Config(), str(path))
        with caplog.at_level(logging.INFO, logger="screw_algebra.utils.config"):
            load_config(str(path))
        assert "Loaded config" in caplog.text


class TestApplyConfig:
    """Tests for applying a Config process-wide."""

    def test_current_config_reflects_settings(self):
        assert current_config() == Config()

    def test_apply_sets_everything(self):
        previous = apply_config(Config(dtype="float64", angle_unit="degrees"))
        assert previous == Config()
        assert get_scalar_dtype() == torch.float64
        assert get_angle_unit() == "degrees"
        assert current_config() == Config(dtype="float64", angle_unit="degrees")

    def test_values_follow_applied_precision(self):
        apply_config(Config(dtype="float64"))
        assert DualQuaternion.identity().dtype == torch.float64

    def test_angle_unit_applies_to_new(self):
        apply_config(Config(angle_unit="degrees"))
        assert Angle.new(180.0).isclose(Angle.half())

    def test_restore_previous(self):
        previous = apply_config(Config(dtype="float64"))
        apply_config(previous)
        assert get_scalar_dtype() == torch.float32
