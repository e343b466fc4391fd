"""Shared fixtures for indicator tests."""

import numpy as np
import pandas as pd
import pytest


def period_keys(n: int, start: str = "2024-01-02") -> list[str]:
    """ISO date keys for ``n`` consecutive business days."""
    return list(pd.bdate_range(start=start, periods=n).strftime("%Y-%m-%d"))


@pytest.fixture
def prices() -> pd.Series:
    """Create a sample per-period price series.

    Returns 80 periods of a noisy upward drift, indexed by ISO period key
    the way aggregate_samples() returns it.
    """
    np.random.seed(42)
    n_periods = 80

    trend = np.linspace(100, 110, n_periods)
    noise = np.random.randn(n_periods) * 1.5
    values = trend + noise

    index = pd.Index(period_keys(n_periods), name="period_key")
    return pd.Series(values, index=index, name="underlying_price")


@pytest.fixture
def rising_prices() -> pd.Series:
    """Strictly increasing series (no losses, no downward movement)."""
    index = pd.Index(period_keys(40), name="period_key")
    return pd.Series(np.arange(100.0, 140.0), index=index, name="value")


@pytest.fixture
def flat_prices() -> pd.Series:
    """Constant series."""
    index = pd.Index(period_keys(40), name="period_key")
    return pd.Series(np.full(40, 50.0), index=index, name="value")


@pytest.fixture
def zone_prices() -> pd.Series:
    """Series with two swing lows near 100 and one isolated swing high.

    Index 5 (100.0) and index 11 (101.0) are swing lows for lookback 5 and
    lie within 2% of each other; index 8 (108.0) is a swing high with no
    second touch.
    """
    values = [
        110.0, 109.0, 108.0, 107.0, 106.0, 100.0, 106.0, 107.0, 108.0,
        107.0, 106.0, 101.0, 106.0, 107.0, 108.0, 109.0, 110.0,
    ]
    index = pd.Index(period_keys(len(values)), name="period_key")
    return pd.Series(values, index=index, name="value")
