"""Data validation schemas for aggregated period series using pandera."""

import pandera.pandas as pa
from pandera.typing.pandas import DataFrame, Series


class PeriodFrameSchema(pa.DataFrameModel):
    """Schema for a per-period aggregated series in long form.

    Validates:
    - One row per period key (unique, non-null)
    - Finite numeric value per period
    - Keys in ascending order
    """

    period_key: Series[str] = pa.Field(unique=True, nullable=False, coerce=True)
    value: Series[float] = pa.Field(nullable=False, coerce=True)

    @pa.dataframe_check
    def keys_ascending(cls, df: DataFrame) -> bool:
        """Period keys must be sorted ascending."""
        return bool(df["period_key"].is_monotonic_increasing)

    class Config:
        strict = True
        coerce = True
        ordered = False


def validate_period_frame(df: DataFrame) -> DataFrame:
    """Validate a DataFrame against the period schema.

    Args:
        df: DataFrame with ``period_key`` and ``value`` columns

    Returns:
        Validated DataFrame

    Raises:
        pandera.errors.SchemaError: If validation fails
    """
    return PeriodFrameSchema.validate(df)
