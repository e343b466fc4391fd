"""Base classes and utilities for indicator computation."""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# Price series accepted by the indicator functions
PriceInput = Union[pd.Series, np.ndarray, Sequence[Optional[float]]]


@dataclass
class IndicatorSpec:
    """Specification for a computed indicator column.

    Attributes:
        name: Output column name
        description: Human-readable description
        lookback: Number of periods before the first defined value
        group: Indicator group (e.g., 'bands', 'momentum')
    """

    name: str
    description: str
    lookback: int
    group: str


class BaseIndicatorCalculator(ABC):
    """Abstract base class for indicator calculators.

    Each calculator wraps one group of indicator functions and emits their
    outputs as columns aligned to the input series. Subclasses must implement
    compute() and the indicator_specs property.
    """

    @property
    @abstractmethod
    def indicator_specs(self) -> list[IndicatorSpec]:
        """Return list of indicator specifications this calculator produces."""
        pass

    @abstractmethod
    def compute(self, series: pd.Series, **kwargs: Any) -> pd.DataFrame:
        """Compute indicators from a per-period value series.

        Args:
            series: Aggregated values indexed by period key
            **kwargs: Additional inputs (e.g., high/low series for DMI)

        Returns:
            DataFrame with computed indicator columns (same index as input)
        """
        pass

    @property
    def max_lookback(self) -> int:
        """Maximum lookback period required by this calculator."""
        return max(spec.lookback for spec in self.indicator_specs) if self.indicator_specs else 0


def as_series(values: PriceInput, name: str | None = None) -> pd.Series:
    """Coerce price input to a float series; None becomes NaN.

    An existing series keeps its index so outputs stay aligned to the
    period keys it carries.
    """
    if isinstance(values, pd.Series):
        return values.astype(float)
    array = np.array(
        [np.nan if v is None else v for v in values], dtype=float
    )
    return pd.Series(array, name=name)


def validate_period(period: int, name: str = "period") -> None:
    """Raise ValueError unless ``period`` is a positive integer."""
    if isinstance(period, bool) or not isinstance(period, (int, np.integer)) or period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period!r}")


def check_same_length(**series: Any) -> None:
    """Raise ValueError if the named inputs differ in length.

    Args:
        **series: Inputs keyed by the name used in the error message

    Raises:
        ValueError: If any two inputs have different lengths
    """
    lengths = {name: len(values) for name, values in series.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"Inputs must have equal lengths, got {lengths}")


def to_optional_list(series: pd.Series) -> list:
    """Convert an indicator series to plain values with None for absent positions."""
    result = []
    for value in series.tolist():
        if value is None or value is pd.NA:
            result.append(None)
        elif isinstance(value, float) and math.isnan(value):
            result.append(None)
        else:
            result.append(value)
    return result


def last_defined(series: pd.Series) -> float | None:
    """Return the last non-absent value of a series, or None."""
    defined = series.dropna()
    if defined.empty:
        return None
    return defined.iloc[-1]
