"""Momentum indicators: RSI, MACD and the TTM Squeeze.

The TTM Squeeze momentum is the endpoint of a least-squares line fitted
through ``price - midpoint`` values, where the midpoint averages the
Donchian middle and the SMA of the same window. The squeeze flag is set
while the Bollinger Bands sit strictly inside the Keltner Channels.
"""

import logging
import math
from enum import Enum
from typing import Any, Optional

import numpy as np
import pandas as pd

from .bands import bollinger_bands, keltner_channels
from .base import BaseIndicatorCalculator, IndicatorSpec, PriceInput, as_series, validate_period
from .smoothing import apply_to_defined, ema, sma, wilder_smoothing

logger = logging.getLogger(__name__)


class MomentumBar(str, Enum):
    """Display color of one TTM Squeeze histogram bar."""

    POSITIVE_RISING = "#2196F3"
    POSITIVE_FALLING = "#00BCD4"
    NEGATIVE_RISING = "#FFEB3B"
    NEGATIVE_FALLING = "#F44336"
    NEUTRAL = "rgba(128, 128, 128, 0.5)"


def rsi(series: PriceInput, period: int = 14) -> pd.Series:
    """Relative Strength Index with Wilder's smoothing.

    The first value sits at index ``period`` and uses the plain average of
    the first ``period`` gains and losses. When the average loss is zero
    the RSI is exactly 100.

    Args:
        series: Input values
        period: Lookback period

    Returns:
        RSI series in [0, 100], aligned to the input
    """
    validate_period(period)
    values = as_series(series)
    delta = values.diff()
    gains = delta.clip(lower=0.0)
    losses = (-delta).clip(lower=0.0)

    avg_gain = wilder_smoothing(gains, period)
    avg_loss = wilder_smoothing(losses, period)

    with np.errstate(divide="ignore", invalid="ignore"):
        result = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    result = result.where(avg_loss != 0, 100.0).where(avg_loss.notna())
    result.name = values.name

    logger.debug("RSI(%d) computed: %d defined of %d", period, result.notna().sum(), len(result))
    return result


def macd(
    series: PriceInput,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> pd.DataFrame:
    """Moving Average Convergence/Divergence.

    Args:
        series: Input values
        fast: Fast EMA period
        slow: Slow EMA period
        signal: Signal line EMA period

    Returns:
        DataFrame with columns ``macd``, ``signal``, ``histogram``. The
        signal line is the EMA of the defined MACD values, written back to
        the positions they came from. Everything is NaN when the input is
        shorter than ``slow``.
    """
    for name, period in (("fast", fast), ("slow", slow), ("signal", signal)):
        validate_period(period, name)
    values = as_series(series)

    if len(values) < slow:
        empty = pd.Series(np.nan, index=values.index)
        return pd.DataFrame({"macd": empty, "signal": empty, "histogram": empty})

    macd_line = ema(values, fast) - ema(values, slow)
    signal_line = apply_to_defined(macd_line, lambda s: ema(s, signal))
    histogram = macd_line - signal_line

    return pd.DataFrame(
        {"macd": macd_line, "signal": signal_line, "histogram": histogram},
        index=values.index,
    )


def linear_regression_endpoint(values: np.ndarray | list[float]) -> float:
    """Fitted value at the last point of an OLS line through ``values``.

    x runs 0..n-1. Empty input gives 0; a degenerate denominator (a single
    point) gives the last value.
    """
    y = np.asarray(values, dtype=float)
    n = len(y)
    if n == 0:
        return 0.0

    x = np.arange(n, dtype=float)
    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return float(y[-1])

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(intercept + slope * (n - 1))


def squeeze_momentum(series: PriceInput, period: int = 20) -> pd.Series:
    """TTM Squeeze linear-regression momentum.

    The base value at ``k`` is ``price[k] - ((max + min) / 2 + sma) / 2``
    over the window ending at ``k``. Momentum at ``i`` is the regression
    endpoint through the defined base values of the window ending at ``i``,
    so the first few windows hold fewer than ``period`` points.
    """
    validate_period(period)
    values = as_series(series)
    window = values.rolling(window=period, min_periods=period)
    donchian_mid = (window.max() + window.min()) / 2.0
    midpoint = (donchian_mid + sma(values, period)) / 2.0
    base = (values - midpoint).to_numpy()

    out = np.full(len(base), np.nan)
    for i in range(len(base)):
        if np.isnan(base[i]):
            continue
        recent = base[max(0, i - period + 1): i + 1]
        out[i] = linear_regression_endpoint(recent[~np.isnan(recent)])

    return pd.Series(out, index=values.index, name=values.name)


def ttm_squeeze(
    series: PriceInput,
    period: int = 20,
    bb_multiplier: float = 2.0,
    kc_multiplier: float = 1.5,
) -> pd.DataFrame:
    """TTM Squeeze: Keltner bands, regression momentum and squeeze flag.

    Args:
        series: Input values
        period: Window shared by the bands and the momentum
        bb_multiplier: Bollinger standard deviation multiplier
        kc_multiplier: Keltner range multiplier

    Returns:
        DataFrame with columns ``upper`` and ``lower`` (Keltner bands),
        ``momentum`` and ``squeeze`` (nullable boolean, NA before the
        window fills)
    """
    values = as_series(series)
    kc = keltner_channels(values, period, kc_multiplier)
    bb = bollinger_bands(values, period, bb_multiplier)

    defined = kc["upper"].notna() & bb["upper"].notna()
    inside = (bb["upper"] < kc["upper"]) & (bb["lower"] > kc["lower"])
    squeeze = inside.astype("boolean").mask(~defined)

    result = pd.DataFrame(
        {
            "upper": kc["upper"],
            "lower": kc["lower"],
            "momentum": squeeze_momentum(values, period),
            "squeeze": squeeze,
        },
        index=values.index,
    )
    logger.debug(
        "TTM Squeeze(%d, bb=%.2f, kc=%.2f): %d of %d periods in squeeze",
        period, bb_multiplier, kc_multiplier, int(squeeze.sum()), len(values),
    )
    return result


def _is_absent(value: Optional[float]) -> bool:
    return value is None or value is pd.NA or (isinstance(value, float) and math.isnan(value))


def classify_momentum_bar(current: Optional[float], previous: Optional[float]) -> MomentumBar:
    """Classify a momentum bar by sign and direction.

    Zero counts as positive. Without a previous value the bar counts as
    rising.
    """
    if _is_absent(current):
        return MomentumBar.NEUTRAL

    rising = True if _is_absent(previous) else current > previous
    if current >= 0:
        return MomentumBar.POSITIVE_RISING if rising else MomentumBar.POSITIVE_FALLING
    return MomentumBar.NEGATIVE_RISING if rising else MomentumBar.NEGATIVE_FALLING


def momentum_bar_colors(momentum: PriceInput) -> list[MomentumBar]:
    """Classify every position of a momentum series."""
    values = as_series(momentum).tolist()
    previous: list[Optional[float]] = [None, *values[:-1]]
    return [classify_momentum_bar(cur, prev) for cur, prev in zip(values, previous)]


class MomentumIndicatorCalculator(BaseIndicatorCalculator):
    """Computes RSI and MACD.

    Features:
        - rsi: Relative Strength Index
        - macd / macd_signal / macd_hist: MACD line, signal line, histogram
    """

    def __init__(
        self,
        rsi_period: int = 14,
        macd_fast: int = 12,
        macd_slow: int = 26,
        macd_signal: int = 9,
    ):
        validate_period(rsi_period, "rsi_period")
        for name, period in (("macd_fast", macd_fast), ("macd_slow", macd_slow),
                             ("macd_signal", macd_signal)):
            validate_period(period, name)
        self.rsi_period = rsi_period
        self.macd_fast = macd_fast
        self.macd_slow = macd_slow
        self.macd_signal = macd_signal

    @property
    def indicator_specs(self) -> list[IndicatorSpec]:
        signal_lookback = self.macd_slow + self.macd_signal - 2
        return [
            IndicatorSpec("rsi", f"Relative Strength Index ({self.rsi_period})", self.rsi_period, "momentum"),
            IndicatorSpec("macd", "MACD Line", self.macd_slow - 1, "momentum"),
            IndicatorSpec("macd_signal", "MACD Signal Line", signal_lookback, "momentum"),
            IndicatorSpec("macd_hist", "MACD Histogram", signal_lookback, "momentum"),
        ]

    def compute(self, series: pd.Series, **kwargs: Any) -> pd.DataFrame:
        values = as_series(series)
        logger.debug("Computing momentum indicators for %d periods", len(values))
        result = pd.DataFrame(index=values.index)
        result["rsi"] = rsi(values, self.rsi_period)

        lines = macd(values, self.macd_fast, self.macd_slow, self.macd_signal)
        result["macd"] = lines["macd"]
        result["macd_signal"] = lines["signal"]
        result["macd_hist"] = lines["histogram"]
        return result


class SqueezeIndicatorCalculator(BaseIndicatorCalculator):
    """Computes the TTM Squeeze.

    Features:
        - ttm_upper / ttm_lower: Keltner bands used for the squeeze
        - ttm_momentum: Linear-regression momentum
        - ttm_squeeze: Bollinger inside Keltner (nullable boolean)
    """

    def __init__(
        self,
        period: int = 20,
        bb_multiplier: float = 2.0,
        kc_multiplier: float = 1.5,
    ):
        validate_period(period)
        self.period = period
        self.bb_multiplier = bb_multiplier
        self.kc_multiplier = kc_multiplier

    @property
    def indicator_specs(self) -> list[IndicatorSpec]:
        lookback = self.period - 1
        return [
            IndicatorSpec("ttm_upper", "TTM Squeeze Upper (KC)", lookback, "squeeze"),
            IndicatorSpec("ttm_lower", "TTM Squeeze Lower (KC)", lookback, "squeeze"),
            IndicatorSpec("ttm_momentum", "TTM Squeeze Momentum", lookback, "squeeze"),
            IndicatorSpec("ttm_squeeze", "Bollinger inside Keltner", lookback, "squeeze"),
        ]

    def compute(self, series: pd.Series, **kwargs: Any) -> pd.DataFrame:
        squeeze = ttm_squeeze(series, self.period, self.bb_multiplier, self.kc_multiplier)
        return squeeze.add_prefix("ttm_")
