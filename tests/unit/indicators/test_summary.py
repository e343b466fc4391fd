"""Tests for summary formatters."""

import numpy as np
import pandas as pd
import pytest

from config.settings import SummaryConfig
from optiscope.indicators.summary import (
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
from optiscope.indicators.zones import Zone, ZoneKind, ZoneSet


class TestRSISummary:
    """Tests for format_rsi_summary."""

    @pytest.mark.parametrize(
        "value, status",
        [(55.123, "Neutral"), (70.0, "Overbought"), (30.0, "Oversold"), (12.5, "Oversold")],
    )
    def test_status(self, value: float, status: str):
        """Test thresholds are inclusive."""
        result = format_rsi_summary([np.nan, value], overbought=70, oversold=30)
        assert result == f"Current: {value:.2f}% | Status: {status}"

    def test_uses_last_defined_value(self):
        """Test trailing absent positions are skipped."""
        assert format_rsi_summary([40.0, 75.0, np.nan]) == "Current: 75.00% | Status: Overbought"

    def test_thresholds_from_config(self):
        """Test thresholds default to the summary config."""
        config = SummaryConfig(rsi_overbought=60.0, rsi_oversold=40.0)
        assert format_rsi_summary([65.0], config=config).endswith("Overbought")

    def test_not_available(self):
        """Test an all-absent series reads N/A."""
        assert format_rsi_summary([np.nan, None]) == "N/A"
        assert format_rsi_summary([]) == "N/A"


class TestMACDSummary:
    """Tests for format_macd_summary."""

    def test_bullish(self):
        """Test MACD above signal reads bullish."""
        frame = pd.DataFrame(
            {"macd": [np.nan, 0.123], "signal": [np.nan, 0.1], "histogram": [np.nan, 0.023]}
        )
        assert format_macd_summary(frame) == (
            "MACD: 0.123 | Signal: 0.100 | Histogram: 0.023 | Bullish"
        )

    def test_bearish_and_neutral(self):
        """Test the bias follows the line crossing."""
        bearish = pd.DataFrame({"macd": [-0.2], "signal": [0.1], "histogram": [-0.3]})
        neutral = pd.DataFrame({"macd": [0.1], "signal": [0.1], "histogram": [0.0]})
        assert format_macd_summary(bearish).endswith("| Bearish")
        assert format_macd_summary(neutral).endswith("| Neutral")

    def test_not_available(self):
        """Test no signal line reads N/A."""
        frame = pd.DataFrame({"macd": [0.5], "signal": [np.nan], "histogram": [np.nan]})
        assert format_macd_summary(frame) == "N/A"


class TestBandSummaries:
    """Tests for Bollinger and Keltner summaries."""

    def test_bollinger(self):
        """Test the final position is reported."""
        frame = pd.DataFrame(
            {"upper": [np.nan, 1.0], "middle": [np.nan, 0.9], "lower": [np.nan, 0.8]}
        )
        assert format_bollinger_summary(frame) == "Upper: $1.00 | Middle: $0.90 | Lower: $0.80"

    def test_bollinger_last_position_absent(self):
        """Test an absent final position reads N/A."""
        frame = pd.DataFrame({"upper": [1.0, np.nan], "middle": [0.9, np.nan], "lower": [0.8, np.nan]})
        assert format_bollinger_summary(frame) == "N/A"

    def test_keltner(self):
        """Test the Keltner summary."""
        frame = pd.DataFrame({"upper": [1.0], "middle": [0.9], "lower": [0.8]})
        assert format_keltner_summary(frame) == "Upper: $1.00 | Lower: $0.80"
        assert format_keltner_summary(pd.DataFrame()) == "N/A"


class TestDMISummary:
    """Tests for format_dmi_summary."""

    def test_bullish_strong(self):
        """Test direction and strength."""
        frame = pd.DataFrame({"plus_di": [25.0], "minus_di": [15.0], "adx": [30.0]})
        assert format_dmi_summary(frame) == "DI+: 25.0 | DI-: 15.0 | ADX: 30.0 | Bullish (Strong)"

    def test_missing_adx_is_zero(self):
        """Test an undefined ADX reads as 0 and Weak."""
        frame = pd.DataFrame({"plus_di": [10.0], "minus_di": [20.0], "adx": [np.nan]})
        assert format_dmi_summary(frame) == "DI+: 10.0 | DI-: 20.0 | ADX: 0.0 | Bearish (Weak)"

    @pytest.mark.parametrize(
        "adx, label",
        [(0.0, "Weak"), (19.9, "Weak"), (20.0, "Moderate"), (25.0, "Strong"), (49.9, "Strong"), (50.0, "Very Strong")],
    )
    def test_strength_bands(self, adx: float, label: str):
        """Test ADX strength bands."""
        assert adx_strength(adx, SummaryConfig()) == label

    def test_not_available(self):
        """Test absent DI reads N/A."""
        frame = pd.DataFrame({"plus_di": [np.nan], "minus_di": [np.nan], "adx": [np.nan]})
        assert format_dmi_summary(frame) == "N/A"


class TestTTMSqueezeSummary:
    """Tests for format_ttm_squeeze_summary."""

    def test_in_squeeze(self):
        """Test the final position is reported with its status."""
        frame = pd.DataFrame(
            {
                "upper": [1.0],
                "lower": [0.8],
                "momentum": [0.0123],
                "squeeze": pd.array([True], dtype="boolean"),
            }
        )
        assert format_ttm_squeeze_summary(frame) == (
            "Upper: $1.00 | Lower: $0.80 | Momentum: 0.0123 | Status: IN SQUEEZE"
        )

    def test_no_squeeze_missing_momentum(self):
        """Test an absent momentum renders as N/A inside the string."""
        frame = pd.DataFrame(
            {
                "upper": [1.0],
                "lower": [0.8],
                "momentum": [np.nan],
                "squeeze": pd.array([False], dtype="boolean"),
            }
        )
        assert format_ttm_squeeze_summary(frame) == (
            "Upper: $1.00 | Lower: $0.80 | Momentum: N/A | Status: NO SQUEEZE"
        )


class TestZoneSummary:
    """Tests for format_zone_summary."""

    def test_demand_only(self):
        """Test counts and the most recent demand zone."""
        zones = ZoneSet(demand=[Zone(100.0, 2, "2024-01-02", "2024-01-10", ZoneKind.DEMAND)])
        assert format_zone_summary(zones) == (
            "Demand: 1 zones | Supply: 0 zones | Strongest Demand: $100.00 (2 touches)"
        )

    def test_both_kinds(self):
        """Test the supply part is appended."""
        zones = ZoneSet(
            demand=[Zone(100.0, 2, "2024-01-02", "2024-01-10", ZoneKind.DEMAND)],
            supply=[Zone(120.5, 3, "2024-01-03", "2024-01-12", ZoneKind.SUPPLY)],
        )
        assert format_zone_summary(zones).endswith("| Strongest Supply: $120.50 (3 touches)")

    def test_empty(self):
        """Test no zones reads N/A."""
        assert format_zone_summary(ZoneSet()) == "N/A"


class TestRanges:
    """Tests for format_value_range and format_date_range."""

    def test_value_range(self):
        """Test min and max of defined values."""
        assert format_value_range([2.0, None, 1.0, 1.5]) == "$1.00 - $2.00"
        assert format_value_range([1.0, 1.001]) == "$1.00"
        assert format_value_range([None]) == "N/A"

    def test_date_range(self):
        """Test first and last key."""
        assert format_date_range(["2024-01-02", "2024-01-03", "2024-01-05"]) == "2024-01-02 - 2024-01-05"
        assert format_date_range(pd.Index(["2024-01-02"])) == "2024-01-02"
        assert format_date_range([]) == "N/A"
