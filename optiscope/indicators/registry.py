"""Indicator calculator registry and configuration loading."""

from pathlib import Path
from typing import Any

import yaml

from config.settings import Settings, get_settings
from .bands import BandIndicatorCalculator
from .base import BaseIndicatorCalculator
from .momentum import MomentumIndicatorCalculator, SqueezeIndicatorCalculator
from .smoothing import SmoothingIndicatorCalculator
from .trend import TrendIndicatorCalculator


# Global registry of calculator classes
_CALCULATOR_REGISTRY: dict[str, type[BaseIndicatorCalculator]] = {}


def register_calculator(name: str):
    """Decorator to register an indicator calculator class.

    Args:
        name: Registry name for the calculator

    Returns:
        Decorator function
    """

    def decorator(cls: type[BaseIndicatorCalculator]) -> type[BaseIndicatorCalculator]:
        _CALCULATOR_REGISTRY[name] = cls
        return cls

    return decorator


def get_calculator(name: str) -> type[BaseIndicatorCalculator]:
    """Get a calculator class by name.

    Args:
        name: Registry name of the calculator

    Returns:
        Calculator class

    Raises:
        KeyError: If calculator name is not registered
    """
    if name not in _CALCULATOR_REGISTRY:
        raise KeyError(
            f"Calculator '{name}' not found. Available: {list(_CALCULATOR_REGISTRY.keys())}"
        )
    return _CALCULATOR_REGISTRY[name]


def list_calculators() -> list[str]:
    """List all registered calculator names."""
    return list(_CALCULATOR_REGISTRY.keys())


# Register all built-in calculators
register_calculator("smoothing")(SmoothingIndicatorCalculator)
register_calculator("bands")(BandIndicatorCalculator)
register_calculator("momentum")(MomentumIndicatorCalculator)
register_calculator("squeeze")(SqueezeIndicatorCalculator)
register_calculator("trend")(TrendIndicatorCalculator)


def load_indicator_config(config_path: str | Path) -> dict[str, Any]:
    """Load indicator configuration from YAML file.

    Config format:
    ```yaml
    calculators:
      momentum:
        enabled: true
        params:
          rsi_period: 9
      squeeze:
        enabled: false
    pipeline:
      include_zones: true
      include_summaries: true
    zones:
      lookback: 3
    summary:
      rsi_overbought: 75
    ```

    Args:
        config_path: Path to YAML config file

    Returns:
        Parsed configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If config file is invalid YAML
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        config = yaml.safe_load(f)

    return config or {}


def create_calculators_from_config(
    config: dict[str, Any]
) -> list[BaseIndicatorCalculator]:
    """Create calculator instances from configuration.

    Args:
        config: Configuration dictionary (from load_indicator_config)

    Returns:
        List of instantiated calculator objects
    """
    calculators = []
    calc_configs = config.get("calculators", {}) or {}

    for name, calc_config in calc_configs.items():
        calc_config = calc_config or {}
        if not calc_config.get("enabled", True):
            continue

        calc_class = get_calculator(name)
        params = calc_config.get("params", {}) or {}
        calculators.append(calc_class(**params))

    return calculators


def get_default_calculators(settings: Settings | None = None) -> list[BaseIndicatorCalculator]:
    """Get the default set of indicator calculators.

    Args:
        settings: Settings providing indicator parameters (defaults to get_settings())

    Returns:
        List of default calculator instances
    """
    settings = settings or get_settings()
    return [
        SmoothingIndicatorCalculator(
            sma_periods=tuple(settings.smoothing.sma_periods),
            ema_periods=tuple(settings.smoothing.ema_periods),
        ),
        BandIndicatorCalculator(
            bollinger_period=settings.bands.bollinger_period,
            bollinger_std=settings.bands.bollinger_std,
            keltner_period=settings.bands.keltner_period,
            keltner_multiplier=settings.bands.keltner_multiplier,
        ),
        MomentumIndicatorCalculator(
            rsi_period=settings.momentum.rsi_period,
            macd_fast=settings.momentum.macd_fast,
            macd_slow=settings.momentum.macd_slow,
            macd_signal=settings.momentum.macd_signal,
        ),
        SqueezeIndicatorCalculator(
            period=settings.squeeze.period,
            bb_multiplier=settings.squeeze.bb_multiplier,
            kc_multiplier=settings.squeeze.kc_multiplier,
        ),
        TrendIndicatorCalculator(dmi_period=settings.trend.dmi_period),
    ]
