"""Volatility bands: Bollinger Bands and Keltner Channels.

Only one value per period is available (no separate high/low feed), so the
Keltner average true range is approximated from absolute period-to-period
changes inside the window.
"""

import logging
from typing import Any

import numpy as np
import pandas as pd

from .base import BaseIndicatorCalculator, IndicatorSpec, PriceInput, as_series, validate_period
from .smoothing import sma

logger = logging.getLogger(__name__)


def rolling_std(series: PriceInput, period: int) -> pd.Series:
    """Population standard deviation (divisor ``period``) over a trailing window."""
    validate_period(period)
    values = as_series(series)
    std = values.rolling(window=period, min_periods=period).std(ddof=0)
    # Rolling variance can come out as a tiny negative number on flat windows
    return std.clip(lower=0.0)


def average_range_proxy(series: PriceInput, period: int) -> pd.Series:
    """Mean absolute change between consecutive values inside each window.

    A window of ``period`` values holds ``period - 1`` changes. A window of
    one value has no change and yields 0.
    """
    validate_period(period)
    values = as_series(series)
    if period == 1:
        return values.where(values.isna(), 0.0)

    changes = values.diff().abs()
    return changes.rolling(window=period - 1, min_periods=period - 1).mean()


def bollinger_bands(
    series: PriceInput,
    period: int = 20,
    num_std: float = 2.0,
) -> pd.DataFrame:
    """Bollinger Bands.

    Args:
        series: Input values
        period: Window length
        num_std: Standard deviation multiplier

    Returns:
        DataFrame with columns ``upper``, ``middle``, ``lower``; the middle
        band is the SMA of the same window
    """
    values = as_series(series)
    middle = sma(values, period)
    width = num_std * rolling_std(values, period)
    return pd.DataFrame(
        {"upper": middle + width, "middle": middle, "lower": middle - width},
        index=values.index,
    )


def keltner_channels(
    series: PriceInput,
    period: int = 20,
    multiplier: float = 2.0,
) -> pd.DataFrame:
    """Keltner Channels around the SMA using the average range proxy.

    Args:
        series: Input values
        period: Window length
        multiplier: Range multiplier

    Returns:
        DataFrame with columns ``upper``, ``middle``, ``lower``
    """
    values = as_series(series)
    middle = sma(values, period)
    width = multiplier * average_range_proxy(values, period)
    # Keep the bands absent wherever the middle line is absent
    width = width.where(middle.notna(), np.nan)
    return pd.DataFrame(
        {"upper": middle + width, "middle": middle, "lower": middle - width},
        index=values.index,
    )


class BandIndicatorCalculator(BaseIndicatorCalculator):
    """Computes Bollinger Bands and Keltner Channels.

    Features:
        - bb_upper / bb_middle / bb_lower: Bollinger Bands
        - kc_upper / kc_middle / kc_lower: Keltner Channels
    """

    def __init__(
        self,
        bollinger_period: int = 20,
        bollinger_std: float = 2.0,
        keltner_period: int = 20,
        keltner_multiplier: float = 2.0,
    ):
        validate_period(bollinger_period, "bollinger_period")
        validate_period(keltner_period, "keltner_period")
        self.bollinger_period = bollinger_period
        self.bollinger_std = bollinger_std
        self.keltner_period = keltner_period
        self.keltner_multiplier = keltner_multiplier

    @property
    def indicator_specs(self) -> list[IndicatorSpec]:
        bb, kc = self.bollinger_period - 1, self.keltner_period - 1
        return [
            IndicatorSpec("bb_upper", "Bollinger Upper Band", bb, "bands"),
            IndicatorSpec("bb_middle", "Bollinger Middle Band (SMA)", bb, "bands"),
            IndicatorSpec("bb_lower", "Bollinger Lower Band", bb, "bands"),
            IndicatorSpec("kc_upper", "Keltner Upper Channel", kc, "bands"),
            IndicatorSpec("kc_middle", "Keltner Middle Line (SMA)", kc, "bands"),
            IndicatorSpec("kc_lower", "Keltner Lower Channel", kc, "bands"),
        ]

    def compute(self, series: pd.Series, **kwargs: Any) -> pd.DataFrame:
        values = as_series(series)
        logger.debug(
            "Computing bands for %d periods (bb=%d/%.2f, kc=%d/%.2f)",
            len(values), self.bollinger_period, self.bollinger_std,
            self.keltner_period, self.keltner_multiplier,
        )
        bb = bollinger_bands(values, self.bollinger_period, self.bollinger_std)
        kc = keltner_channels(values, self.keltner_period, self.keltner_multiplier)
        return pd.concat([bb.add_prefix("bb_"), kc.add_prefix("kc_")], axis=1)
