"""
Configuration management for screw_algebra.

Provides a configuration class for the process-wide settings (scalar
precision, device, default angle unit) and JSON load/save helpers.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Any
from pathlib import Path

from ..algebra.angle import get_angle_unit, set_angle_unit
from ..core.constants import (
    SUPPORTED_DTYPES, ANGLE_UNITS,
    DEFAULT_DTYPE, DEFAULT_DEVICE, DEFAULT_ANGLE_UNIT,
)
from ..core.precision import (
    get_scalar_dtype, set_scalar_dtype, get_device, set_device, dtype_name,
)

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Process-wide settings for screw_algebra.

    Attributes:
        dtype: Scalar width of every value ('float32' or 'float64')
        device: Device values are allocated on ('cpu', 'cuda', ...)
        angle_unit: Unit read by Angle.new ('radians' or 'degrees')
        extra: Unknown keys found when loading, kept for round-tripping
    """

    dtype: str = DEFAULT_DTYPE
    device: str = DEFAULT_DEVICE
    angle_unit: str = DEFAULT_ANGLE_UNIT

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.dtype not in SUPPORTED_DTYPES:
            raise ValueError(
                f"Unsupported dtype {self.dtype!r}, expected one of {SUPPORTED_DTYPES}"
            )
        if self.angle_unit not in ANGLE_UNITS:
            raise ValueError(
                f"Unknown angle unit {self.angle_unit!r}, expected one of {ANGLE_UNITS}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra = {**config.extra, **extra_kwargs}
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)


def current_config() -> Config:
    """Snapshot of the settings currently in effect."""
    return Config(
        dtype=dtype_name(get_scalar_dtype()),
        device=str(get_device()),
        angle_unit=get_angle_unit(),
    )


def apply_config(config: Config) -> Config:
    """
    Make `config` the process-wide setting.

    Values built before this call keep their dtype and device, so apply the
    configuration once at start-up.

    Args:
        config: Settings to apply

    Returns:
        The settings that were in effect before
    """
    previous = current_config()
    set_scalar_dtype(config.dtype)
    set_device(config.device)
    set_angle_unit(config.angle_unit)
    logger.info(
        f"Applied config: dtype={config.dtype}, device={config.device}, "
        f"angle_unit={config.angle_unit}"
    )
    return previous


def load_config(filepath: str) -> Config:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        Config object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        config_dict = json.load(f)
    config = Config.from_dict(config_dict)
    logger.info(f"Loaded config from {filepath}")
    return config


def save_config(config: Config, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Config object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info(f"Saved config to {filepath}")
