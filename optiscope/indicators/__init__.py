"""Technical indicators computed over per-period option-chain series.

Indicators are plain functions over a float series (absent positions are
NaN) plus calculator classes that emit aligned DataFrame columns for the
pipeline. Groups: smoothing, bands, momentum, squeeze, trend, zones.

Quick Start:
    >>> from optiscope.indicators import IndicatorPipeline
    >>> pipeline = IndicatorPipeline.default()
    >>> report = pipeline.analyze(period_series)

Single indicators:
    >>> from optiscope.indicators import rsi, macd
    >>> rsi(period_series, 14)
"""

from .bands import (
    BandIndicatorCalculator,
    average_range_proxy,
    bollinger_bands,
    keltner_channels,
    rolling_std,
)
from .base import (
    BaseIndicatorCalculator,
    IndicatorSpec,
    as_series,
    check_same_length,
    last_defined,
    to_optional_list,
    validate_period,
)
from .momentum import (
    MomentumBar,
    MomentumIndicatorCalculator,
    SqueezeIndicatorCalculator,
    classify_momentum_bar,
    linear_regression_endpoint,
    macd,
    momentum_bar_colors,
    rsi,
    squeeze_momentum,
    ttm_squeeze,
)
from .pipeline import IndicatorPipeline, IndicatorReport, PipelineConfig
from .registry import (
    create_calculators_from_config,
    get_calculator,
    get_default_calculators,
    list_calculators,
    load_indicator_config,
    register_calculator,
)
from .smoothing import SmoothingIndicatorCalculator, apply_to_defined, ema, sma, wilder_smoothing
from .summary import (
    adx_strength,
    format_bollinger_summary,
    format_date_range,
    format_dmi_summary,
    format_keltner_summary,
    format_macd_summary,
    format_rsi_summary,
    format_ttm_squeeze_summary,
    format_value_range,
    format_zone_summary,
)
from .trend import TrendIndicatorCalculator, directional_movement, dmi
from .zones import (
    SwingKind,
    SwingPoint,
    Zone,
    ZoneKind,
    ZoneSet,
    cluster_swing_points,
    detect_zones,
    find_swing_points,
)

__all__ = [
    # Base classes
    "BaseIndicatorCalculator",
    "IndicatorSpec",
    # Utility functions
    "as_series",
    "check_same_length",
    "last_defined",
    "to_optional_list",
    "validate_period",
    # Smoothing
    "sma",
    "ema",
    "wilder_smoothing",
    "apply_to_defined",
    # Bands
    "rolling_std",
    "average_range_proxy",
    "bollinger_bands",
    "keltner_channels",
    # Momentum
    "rsi",
    "macd",
    "linear_regression_endpoint",
    "squeeze_momentum",
    "ttm_squeeze",
    "MomentumBar",
    "classify_momentum_bar",
    "momentum_bar_colors",
    # Trend
    "directional_movement",
    "dmi",
    # Zones
    "SwingKind",
    "SwingPoint",
    "Zone",
    "ZoneKind",
    "ZoneSet",
    "find_swing_points",
    "cluster_swing_points",
    "detect_zones",
    # Summaries
    "adx_strength",
    "format_rsi_summary",
    "format_macd_summary",
    "format_bollinger_summary",
    "format_keltner_summary",
    "format_dmi_summary",
    "format_ttm_squeeze_summary",
    "format_zone_summary",
    "format_value_range",
    "format_date_range",
    # Calculators
    "SmoothingIndicatorCalculator",
    "BandIndicatorCalculator",
    "MomentumIndicatorCalculator",
    "SqueezeIndicatorCalculator",
    "TrendIndicatorCalculator",
    # Registry
    "register_calculator",
    "get_calculator",
    "list_calculators",
    "load_indicator_config",
    "create_calculators_from_config",
    "get_default_calculators",
    # Pipeline
    "IndicatorPipeline",
    "IndicatorReport",
    "PipelineConfig",
]
