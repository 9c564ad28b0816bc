"""
Utility functions for screw_algebra.

Includes configuration management.
"""

from .config import (
    Config,
    load_config,
    save_config,
    apply_config,
    current_config,
)

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "apply_config",
    "current_config",
]
