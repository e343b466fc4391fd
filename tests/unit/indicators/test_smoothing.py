"""Tests for smoothing primitives."""

import numpy as np
import pandas as pd
import pytest

from optiscope.indicators.smoothing import (
    SmoothingIndicatorCalculator,
    apply_to_defined,
    ema,
    sma,
    wilder_smoothing,
)


class TestSMA:
    """Tests for sma."""

    def test_basic_values(self):
        """Test SMA on a short list."""
        result = sma([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        assert result.iloc[:2].isna().all()
        assert np.allclose(result.iloc[2:].to_numpy(), [2.0, 3.0, 4.0])

    @pytest.mark.parametrize("period", [1, 5, 20])
    def test_defined_from_period_minus_one(self, prices: pd.Series, period: int):
        """Test SMA is absent before index period-1 and defined after."""
        result = sma(prices, period)
        assert result.iloc[: period - 1].isna().all()
        assert result.iloc[period - 1:].notna().all()

    def test_keeps_index(self, prices: pd.Series):
        """Test output is aligned to the period keys."""
        result = sma(prices, 10)
        assert result.index.equals(prices.index)

    def test_none_is_absent(self):
        """Test None inputs propagate as absent windows."""
        result = sma([1.0, None, 3.0, 4.0], 2)
        assert result.iloc[1:3].isna().all()
        assert np.isclose(result.iloc[3], 3.5)

    @pytest.mark.parametrize("period", [0, -3, 2.5, True])
    def test_invalid_period(self, period):
        """Test non-positive or non-integer periods are rejected."""
        with pytest.raises(ValueError):
            sma([1.0, 2.0, 3.0], period)


class TestEMA:
    """Tests for ema."""

    def test_seed_equals_sma(self, prices: pd.Series):
        """Test the seed value is exactly the SMA at period-1."""
        for period in (3, 12, 26):
            assert ema(prices, period).iloc[period - 1] == sma(prices, period).iloc[period - 1]

    def test_recurrence(self):
        """Test EMA update after the seed."""
        # k = 2/3; seed 1.5; 3*2/3 + 1.5/3 = 2.5; 4*2/3 + 2.5/3 = 3.5
        result = ema([1.0, 2.0, 3.0, 4.0], 2)
        assert np.isnan(result.iloc[0])
        assert np.allclose(result.iloc[1:].to_numpy(), [1.5, 2.5, 3.5])

    def test_short_input_all_absent(self):
        """Test input shorter than the period is entirely absent."""
        result = ema([1.0, 2.0, 3.0], 5)
        assert len(result) == 3
        assert result.isna().all()

    def test_absent_before_seed(self, prices: pd.Series):
        """Test positions before period-1 are absent."""
        result = ema(prices, 20)
        assert result.iloc[:19].isna().all()
        assert result.iloc[19:].notna().all()


class TestWilderSmoothing:
    """Tests for wilder_smoothing."""

    def test_seed_and_update(self):
        """Test plain-mean seed followed by Wilder updates."""
        result = wilder_smoothing([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        assert result.iloc[:2].isna().all()
        assert np.isclose(result.iloc[2], 2.0)
        assert np.isclose(result.iloc[3], 8.0 / 3.0)
        assert np.isclose(result.iloc[4], 31.0 / 9.0)

    def test_starts_at_first_defined_value(self):
        """Test a leading absent value (as in a diff series) is skipped."""
        result = wilder_smoothing([np.nan, 1.0, 2.0, 3.0, 4.0], 2)
        assert result.iloc[:2].isna().all()
        assert np.isclose(result.iloc[2], 1.5)
        assert np.isclose(result.iloc[3], 2.25)
        assert np.isclose(result.iloc[4], 3.125)

    def test_too_short(self):
        """Test fewer values than the period gives all absent."""
        assert wilder_smoothing([1.0, 2.0], 3).isna().all()
        assert wilder_smoothing([np.nan, np.nan], 1).isna().all()

    def test_one_fewer_leading_absent_than_ema_on_deltas(self, prices: pd.Series):
        """Test Wilder on price changes is defined from index period."""
        period = 14
        result = wilder_smoothing(prices.diff().abs(), period)
        assert result.first_valid_index() == prices.index[period]


class TestApplyToDefined:
    """Tests for apply_to_defined."""

    def test_realigns_to_defined_positions(self):
        """Test consecutive outputs land on consecutive defined positions."""
        result = apply_to_defined([np.nan, 1.0, np.nan, 2.0, 3.0], lambda s: s * 10)
        assert np.isnan(result.iloc[0])
        assert np.isnan(result.iloc[2])
        assert np.allclose(result.iloc[[1, 3, 4]].to_numpy(), [10.0, 20.0, 30.0])

    def test_ema_on_sub_series(self):
        """Test EMA over the compact sub-series keeps its own seed."""
        source = pd.Series([np.nan, np.nan, 1.0, 2.0, 3.0, 4.0])
        result = apply_to_defined(source, lambda s: ema(s, 2))
        assert result.iloc[:3].isna().all()
        assert np.allclose(result.iloc[3:].to_numpy(), [1.5, 2.5, 3.5])

    def test_all_absent(self):
        """Test an all-absent input stays absent."""
        result = apply_to_defined([np.nan, np.nan], lambda s: s)
        assert result.isna().all()


class TestSmoothingIndicatorCalculator:
    """Tests for SmoothingIndicatorCalculator."""

    @pytest.fixture
    def calculator(self) -> SmoothingIndicatorCalculator:
        return SmoothingIndicatorCalculator(sma_periods=(5, 20), ema_periods=(20,))

    def test_indicator_specs(self, calculator: SmoothingIndicatorCalculator):
        """Test that specs are properly defined."""
        names = [s.name for s in calculator.indicator_specs]
        assert names == ["sma_5", "sma_20", "ema_20"]
        assert calculator.max_lookback == 19

    def test_output_columns(self, calculator: SmoothingIndicatorCalculator, prices: pd.Series):
        """Test that compute returns expected columns."""
        result = calculator.compute(prices)
        assert list(result.columns) == ["sma_5", "sma_20", "ema_20"]
        assert result.index.equals(prices.index)
        pd.testing.assert_series_equal(result["sma_5"], sma(prices, 5), check_names=False)

    def test_invalid_period(self):
        """Test invalid periods are rejected at construction."""
        with pytest.raises(ValueError):
            SmoothingIndicatorCalculator(sma_periods=(0,))
