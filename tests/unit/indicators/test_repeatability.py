"""Tests that indicator functions are repeatable and leave their input alone."""

import numpy as np
import pandas as pd
import pytest

from optiscope.indicators.bands import bollinger_bands, keltner_channels
from optiscope.indicators.momentum import macd, rsi, ttm_squeeze
from optiscope.indicators.smoothing import ema, sma
from optiscope.indicators.trend import dmi

INDICATORS = {
    "sma": lambda s: sma(s, 10),
    "ema": lambda s: ema(s, 10),
    "rsi": lambda s: rsi(s, 14),
    "macd": lambda s: macd(s, 12, 26, 9),
    "bollinger_bands": lambda s: bollinger_bands(s, 20, 2.0),
    "keltner_channels": lambda s: keltner_channels(s, 20, 2.0),
    "ttm_squeeze": lambda s: ttm_squeeze(s, 20, 2.0, 1.5),
    "dmi": lambda s: dmi(s, 14),
}


def _assert_same(first, second):
    if isinstance(first, pd.DataFrame):
        pd.testing.assert_frame_equal(first, second)
    else:
        pd.testing.assert_series_equal(first, second)


@pytest.fixture
def gapped_prices(prices: pd.Series) -> pd.Series:
    """The sample series with a few absent positions."""
    gapped = prices.copy()
    gapped.iloc[[3, 40, 41]] = np.nan
    return gapped


class TestRepeatability:
    """Same input, same output, input untouched."""

    @pytest.mark.parametrize("name", list(INDICATORS))
    def test_series_input(self, name: str, gapped_prices: pd.Series):
        """Test two runs agree and the input series is not modified."""
        original = gapped_prices.copy()
        indicator = INDICATORS[name]

        first = indicator(gapped_prices)
        second = indicator(gapped_prices)

        _assert_same(first, second)
        pd.testing.assert_series_equal(gapped_prices, original)

    @pytest.mark.parametrize("name", list(INDICATORS))
    def test_list_input(self, name: str, prices: pd.Series):
        """Test a plain list with None gaps is not modified."""
        values = prices.tolist()
        values[5] = None
        original = list(values)
        indicator = INDICATORS[name]

        _assert_same(indicator(values), indicator(values))
        assert values == original
