"""Display strings describing the latest point of each indicator.

Every formatter returns ``"N/A"`` when the input holds nothing defined.
RSI, MACD and DMI report their last defined values; the band and squeeze
formatters report the final position only.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from config.settings import SummaryConfig, get_settings
from .base import PriceInput, as_series, last_defined
from .zones import ZoneSet

NOT_AVAILABLE = "N/A"


def _summary_config(config: SummaryConfig | None) -> SummaryConfig:
    return config if config is not None else get_settings().summary


def _last_position(frame: pd.DataFrame, column: str) -> float | None:
    if frame.empty or column not in frame.columns:
        return None
    value = frame[column].iloc[-1]
    if pd.isna(value):
        return None
    return float(value)


def format_rsi_summary(
    rsi: PriceInput,
    overbought: float | None = None,
    oversold: float | None = None,
    config: SummaryConfig | None = None,
) -> str:
    """Format the latest RSI value and its overbought/oversold status.

    Example:
        ``"Current: 55.12% | Status: Neutral"``
    """
    current = last_defined(as_series(rsi))
    if current is None:
        return NOT_AVAILABLE

    cfg = _summary_config(config)
    overbought = cfg.rsi_overbought if overbought is None else overbought
    oversold = cfg.rsi_oversold if oversold is None else oversold

    if current >= overbought:
        status = "Overbought"
    elif current <= oversold:
        status = "Oversold"
    else:
        status = "Neutral"
    return f"Current: {current:.2f}% | Status: {status}"


def format_macd_summary(frame: pd.DataFrame) -> str:
    """Format the latest MACD, signal and histogram values.

    Args:
        frame: Output of ``macd()`` (columns macd, signal, histogram)
    """
    if frame.empty:
        return NOT_AVAILABLE
    current_macd = last_defined(frame["macd"])
    current_signal = last_defined(frame["signal"])
    if current_macd is None or current_signal is None:
        return NOT_AVAILABLE
    current_hist = last_defined(frame["histogram"])
    if current_hist is None:
        current_hist = 0.0

    if current_macd > current_signal:
        bias = "Bullish"
    elif current_macd < current_signal:
        bias = "Bearish"
    else:
        bias = "Neutral"
    return (
        f"MACD: {current_macd:.3f} | Signal: {current_signal:.3f} | "
        f"Histogram: {current_hist:.3f} | {bias}"
    )


def format_bollinger_summary(frame: pd.DataFrame) -> str:
    """Format the Bollinger Bands at the final position."""
    upper = _last_position(frame, "upper")
    if upper is None:
        return NOT_AVAILABLE
    middle = _last_position(frame, "middle")
    lower = _last_position(frame, "lower")
    return f"Upper: ${upper:.2f} | Middle: ${middle:.2f} | Lower: ${lower:.2f}"


def format_keltner_summary(frame: pd.DataFrame) -> str:
    """Format the Keltner Channels at the final position."""
    upper = _last_position(frame, "upper")
    if upper is None:
        return NOT_AVAILABLE
    lower = _last_position(frame, "lower")
    return f"Upper: ${upper:.2f} | Lower: ${lower:.2f}"


def adx_strength(adx: float, config: SummaryConfig | None = None) -> str:
    """Describe trend strength for an ADX reading."""
    cfg = _summary_config(config)
    if adx >= cfg.adx_very_strong:
        return "Very Strong"
    if adx >= cfg.adx_strong:
        return "Strong"
    if adx >= cfg.adx_moderate:
        return "Moderate"
    return "Weak"


def format_dmi_summary(frame: pd.DataFrame, config: SummaryConfig | None = None) -> str:
    """Format the latest +DI, -DI and ADX with trend direction and strength.

    A missing ADX (short series) reads as 0.

    Example:
        ``"DI+: 25.0 | DI-: 15.0 | ADX: 30.0 | Bullish (Strong)"``
    """
    if frame.empty:
        return NOT_AVAILABLE
    plus_di = last_defined(frame["plus_di"])
    minus_di = last_defined(frame["minus_di"])
    if plus_di is None or minus_di is None:
        return NOT_AVAILABLE
    adx = last_defined(frame["adx"])
    if adx is None:
        adx = 0.0

    if plus_di > minus_di:
        trend = "Bullish"
    elif minus_di > plus_di:
        trend = "Bearish"
    else:
        trend = "Neutral"
    return (
        f"DI+: {plus_di:.1f} | DI-: {minus_di:.1f} | ADX: {adx:.1f} | "
        f"{trend} ({adx_strength(adx, config)})"
    )


def format_ttm_squeeze_summary(frame: pd.DataFrame) -> str:
    """Format the TTM Squeeze bands, momentum and status at the final position."""
    upper = _last_position(frame, "upper")
    if upper is None:
        return NOT_AVAILABLE
    lower = _last_position(frame, "lower")
    momentum = _last_position(frame, "momentum")
    momentum_text = NOT_AVAILABLE if momentum is None else f"{momentum:.4f}"

    in_squeeze = frame["squeeze"].iloc[-1]
    status = "IN SQUEEZE" if (not pd.isna(in_squeeze) and bool(in_squeeze)) else "NO SQUEEZE"
    return f"Upper: ${upper:.2f} | Lower: ${lower:.2f} | Momentum: {momentum_text} | Status: {status}"


def format_zone_summary(zones: ZoneSet | None) -> str:
    """Format zone counts and the most recent zone of each kind."""
    if zones is None or zones.is_empty():
        return NOT_AVAILABLE

    info = f"Demand: {len(zones.demand)} zones | Supply: {len(zones.supply)} zones"
    if zones.demand:
        strongest = zones.demand[0]
        info += f" | Strongest Demand: ${strongest.price:.2f} ({strongest.touches} touches)"
    if zones.supply:
        strongest = zones.supply[0]
        info += f" | Strongest Supply: ${strongest.price:.2f} ({strongest.touches} touches)"
    return info


def format_value_range(values: PriceInput) -> str:
    """Format the min/max of the defined values, e.g. ``"$1.00 - $2.00"``."""
    defined = as_series(values).dropna()
    defined = defined[np.isfinite(defined)]
    if defined.empty:
        return NOT_AVAILABLE
    low = f"{defined.min():.2f}"
    high = f"{defined.max():.2f}"
    return f"${low}" if low == high else f"${low} - ${high}"


def format_date_range(period_keys: Sequence[str] | pd.Index) -> str:
    """Format the first and last period key, or the single key when equal."""
    keys = [str(key) for key in period_keys if key is not None and str(key)]
    if not keys:
        return NOT_AVAILABLE
    start, end = keys[0], keys[-1]
    return start if start == end else f"{start} - {end}"
