"""Pydantic settings for configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml


class SmoothingConfig(BaseSettings):
    """Moving average configuration."""

    model_config = SettingsConfigDict(env_prefix="SMOOTHING_")

    sma_periods: list[int] = Field(default=[20], description="SMA periods to compute")
    ema_periods: list[int] = Field(default=[20], description="EMA periods to compute")

    @field_validator("sma_periods", "ema_periods")
    @classmethod
    def validate_periods(cls, v: list[int]) -> list[int]:
        """Periods must be positive."""
        if any(p < 1 for p in v):
            raise ValueError(f"periods must be >= 1, got {v}")
        return v


class BandsConfig(BaseSettings):
    """Bollinger Band and Keltner Channel configuration."""

    model_config = SettingsConfigDict(env_prefix="BANDS_")

    bollinger_period: int = Field(default=20, ge=1, description="Bollinger window length")
    bollinger_std: float = Field(default=2.0, ge=0, description="Standard deviation multiplier")
    keltner_period: int = Field(default=20, ge=1, description="Keltner window length")
    keltner_multiplier: float = Field(default=2.0, ge=0, description="ATR proxy multiplier")


class MomentumConfig(BaseSettings):
    """RSI and MACD configuration."""

    model_config = SettingsConfigDict(env_prefix="MOMENTUM_")

    rsi_period: int = Field(default=14, ge=1, description="RSI lookback period")
    macd_fast: int = Field(default=12, ge=1, description="MACD fast EMA period")
    macd_slow: int = Field(default=26, ge=1, description="MACD slow EMA period")
    macd_signal: int = Field(default=9, ge=1, description="MACD signal line period")

    @model_validator(mode="after")
    def validate_macd_periods(self) -> "MomentumConfig":
        """Fast EMA must be shorter than slow EMA."""
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast ({self.macd_fast}) must be less than macd_slow ({self.macd_slow})"
            )
        return self


class SqueezeConfig(BaseSettings):
    """TTM Squeeze configuration."""

    model_config = SettingsConfigDict(env_prefix="SQUEEZE_")

    period: int = Field(default=20, ge=1, description="Shared Bollinger/Keltner window")
    bb_multiplier: float = Field(default=2.0, ge=0, description="Bollinger std multiplier")
    kc_multiplier: float = Field(default=1.5, ge=0, description="Keltner ATR multiplier")


class TrendConfig(BaseSettings):
    """DMI/ADX configuration."""

    model_config = SettingsConfigDict(env_prefix="TREND_")

    dmi_period: int = Field(default=14, ge=1, description="Wilder length for TR, DM and ADX")


class ZoneConfig(BaseSettings):
    """Demand/supply zone detection configuration."""

    model_config = SettingsConfigDict(env_prefix="ZONES_")

    lookback: int = Field(default=5, ge=1, description="Neighbours on each side of a swing point")
    min_touches: int = Field(default=2, ge=1, description="Minimum swing points per zone")
    tolerance: float = Field(default=0.02, ge=0, description="Relative price distance to join a zone")
    max_zones: int = Field(default=5, ge=1, description="Zones kept per kind, most recent first")


class SummaryConfig(BaseSettings):
    """Display thresholds used by the summary formatters."""

    model_config = SettingsConfigDict(env_prefix="SUMMARY_")

    rsi_overbought: float = Field(default=70.0, description="RSI overbought threshold")
    rsi_oversold: float = Field(default=30.0, description="RSI oversold threshold")
    adx_moderate: float = Field(default=20.0, description="ADX level for a moderate trend")
    adx_strong: float = Field(default=25.0, description="ADX level for a strong trend")
    adx_very_strong: float = Field(default=50.0, description="ADX level for a very strong trend")

    @model_validator(mode="after")
    def validate_thresholds(self) -> "SummaryConfig":
        """Thresholds must be ordered."""
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError(
                f"rsi_oversold ({self.rsi_oversold}) must be below "
                f"rsi_overbought ({self.rsi_overbought})"
            )
        if not self.adx_moderate <= self.adx_strong <= self.adx_very_strong:
            raise ValueError("ADX thresholds must be non-decreasing")
        return self


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path (None for stdout only)",
    )
    rotate_size_mb: int = Field(
        default=10,
        description="Log file rotation size in MB",
    )
    retain_count: int = Field(
        default=5,
        description="Number of rotated log files to retain",
    )


class Settings(BaseSettings):
    """Main settings class combining all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    bands: BandsConfig = Field(default_factory=BandsConfig)
    momentum: MomentumConfig = Field(default_factory=MomentumConfig)
    squeeze: SqueezeConfig = Field(default_factory=SqueezeConfig)
    trend: TrendConfig = Field(default_factory=TrendConfig)
    zones: ZoneConfig = Field(default_factory=ZoneConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Settings instance (defaults when the file does not exist)
        """
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**config_dict)

    def to_yaml(self, path: str | Path) -> None:
        """Save settings to YAML file.

        Args:
            path: Path to save configuration
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(mode="json")

        with open(path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance
    """
    config_path = Path("config/indicators.yaml")
    if config_path.exists():
        return Settings.from_yaml(config_path)

    return Settings()
