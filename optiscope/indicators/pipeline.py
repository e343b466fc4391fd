"""Indicator pipeline orchestration."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from config.settings import Settings, SummaryConfig, ZoneConfig, get_settings
from .base import BaseIndicatorCalculator, IndicatorSpec, PriceInput, as_series
from .registry import (
    create_calculators_from_config,
    get_default_calculators,
    load_indicator_config,
)
from .summary import (
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
from .zones import ZoneSet, detect_zones

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for indicator pipeline.

    Attributes:
        include_zones: Whether analyze() detects demand/supply zones
        include_summaries: Whether analyze() renders summary strings
        zones: Zone detection parameters (defaults to settings)
        summary: Summary thresholds (defaults to settings)
    """

    include_zones: bool = True
    include_summaries: bool = True
    zones: ZoneConfig | None = None
    summary: SummaryConfig | None = None


@dataclass
class IndicatorReport:
    """Everything computed for one period series.

    Attributes:
        frame: Indicator columns aligned to the input index
        zones: Demand/supply zones (empty when disabled)
        summaries: Display strings keyed by indicator
    """

    frame: pd.DataFrame
    zones: ZoneSet = field(default_factory=ZoneSet)
    summaries: dict[str, str] = field(default_factory=dict)


def _sub_frame(frame: pd.DataFrame, columns: dict[str, str]) -> pd.DataFrame | None:
    """Select and rename columns; None unless all of them are present."""
    if not set(columns).issubset(frame.columns):
        return None
    return frame[list(columns)].rename(columns=columns)


class IndicatorPipeline:
    """Runs a set of indicator calculators over one period series.

    Example:
        >>> pipeline = IndicatorPipeline.default()
        >>> report = pipeline.analyze(aggregate_samples(samples))
        >>> print(report.summaries["rsi"])
    """

    def __init__(
        self,
        calculators: list[BaseIndicatorCalculator],
        config: PipelineConfig | None = None,
    ):
        """Initialize IndicatorPipeline.

        Args:
            calculators: List of indicator calculators to run
            config: Pipeline configuration (defaults to PipelineConfig())

        Raises:
            ValueError: If two calculators produce the same column
        """
        self.calculators = calculators
        self.config = config or PipelineConfig()

        seen: set[str] = set()
        duplicates = []
        for name in self.indicator_names:
            if name in seen:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise ValueError(f"Duplicate indicator columns across calculators: {sorted(set(duplicates))}")

    @classmethod
    def default(cls, settings: Settings | None = None) -> "IndicatorPipeline":
        """Create a pipeline with default calculators.

        Args:
            settings: Settings providing indicator parameters (defaults to get_settings())

        Returns:
            IndicatorPipeline with default calculators
        """
        settings = settings or get_settings()
        config = PipelineConfig(zones=settings.zones, summary=settings.summary)
        return cls(calculators=get_default_calculators(settings), config=config)

    @classmethod
    def from_config(cls, config_path: str | Path) -> "IndicatorPipeline":
        """Create a pipeline from YAML configuration file.

        Args:
            config_path: Path to YAML config file

        Returns:
            IndicatorPipeline configured from file
        """
        config_dict = load_indicator_config(config_path)
        calculators = create_calculators_from_config(config_dict)

        pipeline_config = config_dict.get("pipeline", {}) or {}
        zone_params = config_dict.get("zones")
        summary_params = config_dict.get("summary")
        config = PipelineConfig(
            include_zones=pipeline_config.get("include_zones", True),
            include_summaries=pipeline_config.get("include_summaries", True),
            zones=ZoneConfig(**zone_params) if zone_params else None,
            summary=SummaryConfig(**summary_params) if summary_params else None,
        )

        return cls(calculators=calculators, config=config)

    @property
    def indicator_specs(self) -> list[IndicatorSpec]:
        """Combined list of indicator specs from all calculators."""
        specs = []
        for calc in self.calculators:
            specs.extend(calc.indicator_specs)
        return specs

    @property
    def indicator_names(self) -> list[str]:
        """All indicator column names."""
        return [spec.name for spec in self.indicator_specs]

    @property
    def max_lookback(self) -> int:
        """Maximum lookback period across all calculators."""
        if not self.calculators:
            return 0
        return max(calc.max_lookback for calc in self.calculators)

    def compute(self, series: PriceInput, **kwargs: Any) -> pd.DataFrame:
        """Compute all indicator columns.

        Args:
            series: Per-period values, typically from aggregate_samples()
            **kwargs: Additional inputs passed to calculators (e.g., high, low)

        Returns:
            DataFrame with all indicator columns, same index as the input

        Raises:
            ValueError: If a calculator emits a column already produced
        """
        values = as_series(series)
        logger.info(
            "Computing indicators for %d periods using %d calculators",
            len(values), len(self.calculators),
        )
        result = pd.DataFrame(index=values.index)

        for calc in self.calculators:
            calc_name = calc.__class__.__name__
            indicators = calc.compute(values, **kwargs)
            logger.debug("%s computed %d columns", calc_name, len(indicators.columns))

            overlap = result.columns.intersection(indicators.columns)
            if len(overlap) > 0:
                raise ValueError(f"{calc_name} produced duplicate columns: {list(overlap)}")
            for col in indicators.columns:
                result[col] = indicators[col]

        logger.info("Indicator computation complete: %d rows, %d columns", len(result), len(result.columns))
        return result

    def compute_subset(
        self,
        series: PriceInput,
        indicator_names: list[str],
        **kwargs: Any,
    ) -> pd.DataFrame:
        """Compute only the requested indicator columns.

        Args:
            series: Per-period values
            indicator_names: Columns to keep
            **kwargs: Additional arguments passed to calculators

        Returns:
            DataFrame with the requested columns that are available
        """
        all_indicators = self.compute(series, **kwargs)

        available = [col for col in indicator_names if col in all_indicators.columns]
        missing = set(indicator_names) - set(available)
        if missing:
            logger.warning("Requested indicators not available: %s", sorted(missing))
        return all_indicators[available]

    def detect_zones(self, series: PriceInput) -> ZoneSet:
        """Detect demand/supply zones using the configured zone parameters."""
        values = as_series(series)
        zone_config = self.config.zones or get_settings().zones
        return detect_zones(
            values,
            [str(key) for key in values.index],
            lookback=zone_config.lookback,
            min_touches=zone_config.min_touches,
            tolerance=zone_config.tolerance,
            max_zones=zone_config.max_zones,
        )

    def summarize(
        self,
        series: pd.Series,
        frame: pd.DataFrame,
        zones: ZoneSet | None = None,
    ) -> dict[str, str]:
        """Render summary strings for whatever indicator columns are present.

        Args:
            series: The input period series
            frame: Output of compute()
            zones: Zones to summarize, if detected

        Returns:
            Dict of display strings keyed by indicator
        """
        summary_config = self.config.summary
        summaries = {
            "value_range": format_value_range(series),
            "date_range": format_date_range(series.index),
        }

        if "rsi" in frame.columns:
            summaries["rsi"] = format_rsi_summary(frame["rsi"], config=summary_config)

        macd_frame = _sub_frame(frame, {"macd": "macd", "macd_signal": "signal", "macd_hist": "histogram"})
        if macd_frame is not None:
            summaries["macd"] = format_macd_summary(macd_frame)

        bb_frame = _sub_frame(frame, {"bb_upper": "upper", "bb_middle": "middle", "bb_lower": "lower"})
        if bb_frame is not None:
            summaries["bollinger"] = format_bollinger_summary(bb_frame)

        kc_frame = _sub_frame(frame, {"kc_upper": "upper", "kc_lower": "lower"})
        if kc_frame is not None:
            summaries["keltner"] = format_keltner_summary(kc_frame)

        dmi_frame = _sub_frame(frame, {"plus_di": "plus_di", "minus_di": "minus_di", "adx": "adx"})
        if dmi_frame is not None:
            summaries["dmi"] = format_dmi_summary(dmi_frame, config=summary_config)

        ttm_frame = _sub_frame(
            frame,
            {"ttm_upper": "upper", "ttm_lower": "lower", "ttm_momentum": "momentum", "ttm_squeeze": "squeeze"},
        )
        if ttm_frame is not None:
            summaries["ttm_squeeze"] = format_ttm_squeeze_summary(ttm_frame)

        if zones is not None:
            summaries["zones"] = format_zone_summary(zones)

        return summaries

    def analyze(self, series: PriceInput, **kwargs: Any) -> IndicatorReport:
        """Compute indicators, zones and summaries in one call.

        Args:
            series: Per-period values indexed by period key
            **kwargs: Additional arguments passed to calculators

        Returns:
            IndicatorReport for the series
        """
        values = as_series(series)
        frame = self.compute(values, **kwargs)

        zones = self.detect_zones(values) if self.config.include_zones else ZoneSet()
        summaries: dict[str, str] = {}
        if self.config.include_summaries:
            summaries = self.summarize(
                values, frame, zones if self.config.include_zones else None
            )

        return IndicatorReport(frame=frame, zones=zones, summaries=summaries)
