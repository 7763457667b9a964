"""Configuration management."""

from __future__ import annotations

from bfset.config.config import (
    ConfigManager,
    get_bitfield_config,
    get_config,
    get_observability_config,
    init_config,
    reload_config,
    reset_config,
    set_config,
)

__all__ = [
    "ConfigManager",
    "get_bitfield_config",
    "get_config",
    "get_observability_config",
    "init_config",
    "reload_config",
    "reset_config",
    "set_config",
]
