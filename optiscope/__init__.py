"""optiscope - technical indicators for historical options-chain data.

Turns option-chain observations (open interest, premium, volume,
underlying price) into one value per period and computes moving averages,
bands, momentum, trend strength, demand/supply zones and display summaries.

Modules:
- data: Sample aggregation and period schema validation
- indicators: Indicator functions, calculators, registry and pipeline
- utils: Logging setup
"""

from optiscope.data import aggregate_frame, aggregate_samples, group_by_strike, strike_count
from optiscope.indicators import (
    IndicatorPipeline,
    IndicatorReport,
    PipelineConfig,
    to_optional_list,
)

__version__ = "0.1.0"

__all__ = [
    "aggregate_frame",
    "aggregate_samples",
    "group_by_strike",
    "strike_count",
    "IndicatorPipeline",
    "IndicatorReport",
    "PipelineConfig",
    "to_optional_list",
]
