"""Configuration module for optiscope.

Provides centralized configuration management using:
- Environment variables for overrides
- YAML files for indicator presets
- Pydantic for validation
"""

from config.settings import (
    Settings,
    get_settings,
    SmoothingConfig,
    BandsConfig,
    MomentumConfig,
    SqueezeConfig,
    TrendConfig,
    ZoneConfig,
    SummaryConfig,
    LoggingConfig,
)

__all__ = [
    "Settings",
    "get_settings",
    "SmoothingConfig",
    "BandsConfig",
    "MomentumConfig",
    "SqueezeConfig",
    "TrendConfig",
    "ZoneConfig",
    "SummaryConfig",
    "LoggingConfig",
]
