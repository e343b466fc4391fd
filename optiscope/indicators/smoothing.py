"""Smoothing primitives shared by every higher-level indicator.

All functions take a per-period series and return a series of the same
length and index. Positions without enough history are NaN.
"""

import logging
from collections.abc import Callable
from typing import Any

import numpy as np
import pandas as pd

from .base import BaseIndicatorCalculator, IndicatorSpec, PriceInput, as_series, validate_period

logger = logging.getLogger(__name__)


def sma(series: PriceInput, period: int) -> pd.Series:
    """Simple moving average.

    Args:
        series: Input values
        period: Window length

    Returns:
        Mean of the trailing ``period`` values, defined from index ``period - 1``
    """
    validate_period(period)
    values = as_series(series)
    return values.rolling(window=period, min_periods=period).mean()


def ema(series: PriceInput, period: int) -> pd.Series:
    """Exponential moving average seeded with the SMA.

    The value at ``period - 1`` equals ``sma(series, period)`` at that
    position; afterwards ``ema[i] = x[i] * k + ema[i-1] * (1 - k)`` with
    ``k = 2 / (period + 1)``. Shorter input than ``period`` is all NaN.

    Args:
        series: Input values
        period: EMA span

    Returns:
        EMA series aligned to the input
    """
    validate_period(period)
    values = as_series(series)
    out = np.full(len(values), np.nan)
    if len(values) < period:
        return pd.Series(out, index=values.index, name=values.name)

    out[period - 1] = sma(values, period).iloc[period - 1]
    k = 2.0 / (period + 1)
    raw = values.to_numpy()
    for i in range(period, len(raw)):
        out[i] = raw[i] * k + out[i - 1] * (1 - k)

    return pd.Series(out, index=values.index, name=values.name)


def wilder_smoothing(series: PriceInput, period: int) -> pd.Series:
    """Wilder's smoothing (RMA).

    Smoothing starts at the first defined value, so difference series with
    a leading NaN (gains, losses, true range) can be passed directly. The
    first output is the plain mean of the first ``period`` defined values;
    afterwards ``s[i] = (s[i-1] * (period - 1) + x[i]) / period``. A NaN
    after the start propagates to every later position.

    Args:
        series: Input values (typically gains, losses, true range or DX)
        period: Smoothing length

    Returns:
        Smoothed series aligned to the input
    """
    validate_period(period)
    values = as_series(series)
    raw = values.to_numpy()
    out = np.full(len(raw), np.nan)

    defined = np.flatnonzero(~np.isnan(raw))
    if len(defined) == 0:
        return pd.Series(out, index=values.index, name=values.name)

    start = defined[0]
    seed_at = start + period - 1
    if seed_at >= len(raw):
        return pd.Series(out, index=values.index, name=values.name)

    out[seed_at] = raw[start:seed_at + 1].mean()
    for i in range(seed_at + 1, len(raw)):
        out[i] = (out[i - 1] * (period - 1) + raw[i]) / period

    return pd.Series(out, index=values.index, name=values.name)


def apply_to_defined(
    series: PriceInput,
    func: Callable[[pd.Series], pd.Series],
) -> pd.Series:
    """Apply ``func`` to the defined values only and realign the result.

    Absent positions are removed, ``func`` runs on the compact sub-series,
    and its consecutive outputs are written back to the consecutive
    originally-defined positions. Originally absent positions stay NaN.

    Args:
        series: Input with NaN for absent positions
        func: Length-preserving transform (e.g. ``lambda s: ema(s, 9)``)

    Returns:
        Series aligned to the input
    """
    values = as_series(series)
    mask = values.notna().to_numpy()
    out = np.full(len(values), np.nan)
    if mask.any():
        compact = pd.Series(values.to_numpy()[mask])
        out[mask] = func(compact).to_numpy(dtype=float)
    return pd.Series(out, index=values.index, name=values.name)


class SmoothingIndicatorCalculator(BaseIndicatorCalculator):
    """Computes simple and exponential moving averages.

    Features:
        - sma_{n}: Simple moving average for each configured period
        - ema_{n}: SMA-seeded exponential moving average for each period
    """

    def __init__(
        self,
        sma_periods: tuple[int, ...] = (20,),
        ema_periods: tuple[int, ...] = (20,),
    ):
        for period in (*sma_periods, *ema_periods):
            validate_period(period)
        self.sma_periods = tuple(sma_periods)
        self.ema_periods = tuple(ema_periods)

    @property
    def indicator_specs(self) -> list[IndicatorSpec]:
        specs = [
            IndicatorSpec(f"sma_{p}", f"Simple Moving Average ({p})", p - 1, "smoothing")
            for p in self.sma_periods
        ]
        specs.extend(
            IndicatorSpec(f"ema_{p}", f"Exponential Moving Average ({p})", p - 1, "smoothing")
            for p in self.ema_periods
        )
        return specs

    def compute(self, series: pd.Series, **kwargs: Any) -> pd.DataFrame:
        values = as_series(series)
        logger.debug("Computing moving averages for %d periods", len(values))
        result = pd.DataFrame(index=values.index)
        for period in self.sma_periods:
            result[f"sma_{period}"] = sma(values, period)
        for period in self.ema_periods:
            result[f"ema_{period}"] = ema(values, period)
        return result
