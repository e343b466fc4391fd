"""Aggregation of raw option-chain samples into per-period series.

Option-chain endpoints return one record per strike/side per import date.
Indicators need one value per date, so samples sharing a period key are
averaged and the result is ordered by key.

Usage::

    from optiscope.data import aggregate_samples

    prices = aggregate_samples(
        records, key_field="imported_date", value_field="underlying_price"
    )
"""

import logging
import numbers
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd

from .schemas import validate_period_frame

logger = logging.getLogger(__name__)

PERIOD_KEY = "period_key"
VALUE = "value"


def _get_field(sample: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style record."""
    if isinstance(sample, Mapping):
        return sample.get(name)
    return getattr(sample, name, None)


def _empty_period_series(name: str | None) -> pd.Series:
    return pd.Series(
        dtype=float,
        index=pd.Index([], dtype=object, name=PERIOD_KEY),
        name=name,
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _as_numeric(values: pd.Series) -> pd.Series:
    """Float values; booleans, strings and other non-numbers become NaN."""
    if pd.api.types.is_bool_dtype(values):
        return pd.Series(np.nan, index=values.index)
    if pd.api.types.is_numeric_dtype(values):
        return values.astype(float)
    return values.map(lambda v: float(v) if _is_number(v) else np.nan).astype(float)


def _clean(keys: pd.Series, values: pd.Series) -> pd.DataFrame:
    """Drop rows without a usable key or a finite numeric value."""
    numeric = _as_numeric(values)
    frame = pd.DataFrame({PERIOD_KEY: keys.to_numpy(), VALUE: numeric.to_numpy()})

    has_key = frame[PERIOD_KEY].notna() & (frame[PERIOD_KEY].astype(str) != "")
    has_value = np.isfinite(frame[VALUE])
    cleaned = frame[has_key & has_value].copy()
    cleaned[PERIOD_KEY] = cleaned[PERIOD_KEY].astype(str)

    dropped = len(frame) - len(cleaned)
    if dropped:
        logger.debug("Dropped %d of %d samples missing a period key or value", dropped, len(frame))
    return cleaned


def aggregate_frame(
    df: pd.DataFrame,
    key_column: str = PERIOD_KEY,
    value_column: str = VALUE,
    name: str | None = None,
) -> pd.Series:
    """Average a long-form sample frame into one value per period.

    Args:
        df: Frame holding one row per sample
        key_column: Column holding the ISO period key
        value_column: Column holding the numeric value
        name: Name for the resulting series (defaults to ``value_column``)

    Returns:
        Float series indexed by period key (ascending, unique). Empty input
        yields an empty series.
    """
    name = name if name is not None else value_column
    if df.empty or key_column not in df.columns or value_column not in df.columns:
        return _empty_period_series(name)

    cleaned = _clean(df[key_column], df[value_column])
    if cleaned.empty:
        return _empty_period_series(name)

    grouped = cleaned.groupby(PERIOD_KEY, sort=True)[VALUE].mean()
    validated = validate_period_frame(grouped.reset_index())

    result = pd.Series(
        validated[VALUE].to_numpy(dtype=float),
        index=pd.Index(validated[PERIOD_KEY].to_numpy(), dtype=object, name=PERIOD_KEY),
        name=name,
    )
    logger.debug(
        "Aggregated %d samples into %d periods for %s", len(df), len(result), name
    )
    return result


def aggregate_samples(
    samples: Iterable[Any],
    key_field: str = PERIOD_KEY,
    value_field: str = VALUE,
    name: str | None = None,
) -> pd.Series:
    """Average raw samples into one value per period key.

    Samples may be mappings or objects exposing the fields as attributes.
    Samples without a period key or without a numeric value are dropped;
    booleans and numeric-looking strings do not count as numeric.

    Args:
        samples: Raw records (e.g. option-chain rows for one symbol/expiration)
        key_field: Field holding the ISO period key (e.g. ``imported_date``)
        value_field: Field holding the value (e.g. ``underlying_price``)
        name: Name for the resulting series (defaults to ``value_field``)

    Returns:
        Float series indexed by period key in ascending order
    """
    rows = [(_get_field(s, key_field), _get_field(s, value_field)) for s in samples]
    frame = pd.DataFrame(rows, columns=[key_field, value_field], dtype=object)
    return aggregate_frame(
        frame, key_column=key_field, value_column=value_field,
        name=name if name is not None else value_field,
    )


def group_by_strike(
    samples: Iterable[Any],
    key_field: str = PERIOD_KEY,
    value_field: str = VALUE,
    strike_field: str = "strike",
) -> pd.DataFrame:
    """Pivot samples into a period-by-strike table.

    Rows are period keys (ascending), columns are strikes (ascending). A
    missing (period, strike) combination is NaN; when a combination repeats,
    the last sample wins.

    Args:
        samples: Raw records
        key_field: Field holding the period key
        value_field: Field holding the value (e.g. ``mid`` for premium)
        strike_field: Field holding the strike price

    Returns:
        DataFrame indexed by period key with one column per strike
    """
    rows = [
        (_get_field(s, key_field), _get_field(s, strike_field), _get_field(s, value_field))
        for s in samples
    ]
    frame = pd.DataFrame(rows, columns=[PERIOD_KEY, "strike", VALUE], dtype=object)
    if frame.empty:
        return pd.DataFrame(index=pd.Index([], dtype=object, name=PERIOD_KEY))

    cleaned = _clean(frame[PERIOD_KEY], frame[VALUE])
    cleaned["strike"] = pd.to_numeric(frame.loc[cleaned.index, "strike"], errors="coerce")
    cleaned = cleaned.dropna(subset=["strike"])
    if cleaned.empty:
        return pd.DataFrame(index=pd.Index([], dtype=object, name=PERIOD_KEY))

    table = cleaned.pivot_table(
        index=PERIOD_KEY, columns="strike", values=VALUE, aggfunc="last"
    )
    table = table.sort_index().sort_index(axis=1)
    table.columns.name = "strike"
    logger.debug("Grouped %d samples into %d periods x %d strikes", len(frame), *table.shape)
    return table


def strike_count(samples: Iterable[Any], strike_field: str = "strike") -> int:
    """Count distinct strikes present in the samples."""
    strikes = {
        _get_field(s, strike_field)
        for s in samples
    }
    strikes.discard(None)
    return len(strikes)
