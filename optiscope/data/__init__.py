"""Raw sample handling: per-period aggregation and validation."""

from .aggregation import (
    aggregate_frame,
    aggregate_samples,
    group_by_strike,
    strike_count,
)
from .schemas import PeriodFrameSchema, validate_period_frame

__all__ = [
    "aggregate_frame",
    "aggregate_samples",
    "group_by_strike",
    "strike_count",
    "PeriodFrameSchema",
    "validate_period_frame",
]
