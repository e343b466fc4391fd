"""Trend strength: Directional Movement Index (+DI, -DI, DX, ADX).

With a single value per period the true range collapses to the absolute
change between consecutive values. When separate high/low series are
available they are used for the classic three-way true range instead;
passing ``high == low == close`` reproduces the single-value form.

Alignment for length ``N``: +DI/-DI are first defined at index ``N`` and
ADX at index ``2N - 1``.
"""

import logging
from typing import Any, Optional

import numpy as np
import pandas as pd

from .base import (
    BaseIndicatorCalculator,
    IndicatorSpec,
    PriceInput,
    as_series,
    check_same_length,
    validate_period,
)
from .smoothing import wilder_smoothing

logger = logging.getLogger(__name__)


def _aligned(values: PriceInput, index: pd.Index) -> pd.Series:
    return pd.Series(as_series(values).to_numpy(), index=index)


def directional_movement(
    close: PriceInput,
    high: Optional[PriceInput] = None,
    low: Optional[PriceInput] = None,
) -> pd.DataFrame:
    """True range and directional movement per period.

    Args:
        close: Closing (or only) value per period
        high: Optional period highs; requires ``low``
        low: Optional period lows; requires ``high``

    Returns:
        DataFrame with columns ``tr``, ``plus_dm``, ``minus_dm``; index 0 is
        NaN because it has no previous period

    Raises:
        ValueError: If only one of high/low is given or lengths differ
    """
    values = as_series(close)
    if (high is None) != (low is None):
        raise ValueError("high and low must be provided together")

    if high is None:
        high_s = low_s = values
    else:
        check_same_length(close=values, high=high, low=low)
        high_s = _aligned(high, values.index)
        low_s = _aligned(low, values.index)

    prev_close = values.shift(1)
    tr = pd.concat(
        [high_s - low_s, (high_s - prev_close).abs(), (low_s - prev_close).abs()],
        axis=1,
    ).max(axis=1, skipna=False)

    up = high_s.diff()
    down = -low_s.diff()
    has_prev = up.notna() & down.notna()
    plus_dm = up.where((up > down) & (up > 0), 0.0).where(has_prev)
    minus_dm = down.where((down > up) & (down > 0), 0.0).where(has_prev)

    return pd.DataFrame(
        {"tr": tr, "plus_dm": plus_dm, "minus_dm": minus_dm},
        index=values.index,
    )


def dmi(
    series: PriceInput,
    period: int = 14,
    high: Optional[PriceInput] = None,
    low: Optional[PriceInput] = None,
) -> pd.DataFrame:
    """Directional Movement Index with Wilder's smoothing.

    Args:
        series: Closing (or only) value per period
        period: Wilder length for TR, DM and ADX
        high: Optional period highs
        low: Optional period lows

    Returns:
        DataFrame with columns ``plus_di``, ``minus_di``, ``dx``, ``adx``.
        A zero smoothed true range gives DI = 0 and a zero DI sum gives
        DX = 0, so defined positions are never NaN or infinite.
    """
    validate_period(period)
    values = as_series(series)
    movement = directional_movement(values, high, low)

    smoothed_tr = wilder_smoothing(movement["tr"], period)
    smoothed_plus = wilder_smoothing(movement["plus_dm"], period)
    smoothed_minus = wilder_smoothing(movement["minus_dm"], period)

    defined = smoothed_tr.notna()
    flat = smoothed_tr == 0
    with np.errstate(divide="ignore", invalid="ignore"):
        plus_di = (100.0 * smoothed_plus / smoothed_tr).where(~flat, 0.0).where(defined)
        minus_di = (100.0 * smoothed_minus / smoothed_tr).where(~flat, 0.0).where(defined)
        # Rounding in the smoothed sums can push a ratio a hair past 100
        plus_di = plus_di.clip(0.0, 100.0)
        minus_di = minus_di.clip(0.0, 100.0)

        di_sum = plus_di + minus_di
        dx = (100.0 * (plus_di - minus_di).abs() / di_sum).where(di_sum != 0, 0.0).where(defined)

    adx = wilder_smoothing(dx, period)

    logger.debug(
        "DMI(%d) computed for %d periods: %d DI values, %d ADX values",
        period, len(values), int(defined.sum()), int(adx.notna().sum()),
    )
    return pd.DataFrame(
        {"plus_di": plus_di, "minus_di": minus_di, "dx": dx, "adx": adx},
        index=values.index,
    )


class TrendIndicatorCalculator(BaseIndicatorCalculator):
    """Computes the Directional Movement Index.

    Features:
        - plus_di / minus_di: Directional indicators
        - dx: Directional index
        - adx: Average directional index
    """

    def __init__(self, dmi_period: int = 14):
        validate_period(dmi_period, "dmi_period")
        self.dmi_period = dmi_period

    @property
    def indicator_specs(self) -> list[IndicatorSpec]:
        n = self.dmi_period
        return [
            IndicatorSpec("plus_di", f"Plus Directional Indicator ({n})", n, "trend"),
            IndicatorSpec("minus_di", f"Minus Directional Indicator ({n})", n, "trend"),
            IndicatorSpec("dx", f"Directional Index ({n})", n, "trend"),
            IndicatorSpec("adx", f"Average Directional Index ({n})", 2 * n - 1, "trend"),
        ]

    def compute(self, series: pd.Series, **kwargs: Any) -> pd.DataFrame:
        """Compute DMI columns.

        Args:
            series: Per-period values
            **kwargs:
                high, low: Optional per-period highs and lows
        """
        return dmi(series, self.dmi_period, high=kwargs.get("high"), low=kwargs.get("low"))
