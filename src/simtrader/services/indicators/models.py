"""Data models for technical indicators."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from ...config.settings import Settings, get_settings


class RSIZone(Enum):
    """Momentum zone an RSI reading falls into."""

    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"
    OVERSOLD = "oversold"


@dataclass(frozen=True)
class IndicatorPoint:
    """Indicator value tagged with the timestamp of the sample it ends on."""

    timestamp: int
    value: float


@dataclass(frozen=True)
class MACDPoint:
    """Aligned MACD triple at one timestamp."""

    timestamp: int
    macd_line: float
    signal_line: float
    histogram: float


@dataclass
class MACDSeries:
    """MACD line, signal line and histogram on a common index base."""

    macd_line: List[float] = field(default_factory=list)
    signal_line: List[float] = field(default_factory=list)
    histogram: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.histogram)


class IndicatorConfig(BaseModel):
    """Periods used when annotating a price series."""

    sma_periods: List[int] = Field(default_factory=lambda: [20, 50, 100, 200])
    ema_period: int = Field(default=20, ge=1)
    rsi_period: int = Field(default=14, ge=1)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    rsi_overbought: float = Field(default=70.0, ge=0, le=100)
    rsi_oversold: float = Field(default=30.0, ge=0, le=100)

    @model_validator(mode="after")
    def validate_periods(self):
        """Validate period relationships."""
        if any(period < 1 for period in self.sma_periods):
            raise ValueError("Moving average periods must be positive integers")
        if self.macd_fast >= self.macd_slow:
            raise ValueError("MACD fast period must be shorter than slow period")
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError("RSI oversold threshold must be below overbought")
        return self

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "IndicatorConfig":
        """Build a config from application settings."""
        settings = settings or get_settings()
        return cls(
            sma_periods=list(settings.sma_periods),
            ema_period=settings.ema_period,
            rsi_period=settings.rsi_period,
            macd_fast=settings.macd_fast,
            macd_slow=settings.macd_slow,
            macd_signal=settings.macd_signal,
            rsi_overbought=settings.rsi_overbought,
            rsi_oversold=settings.rsi_oversold,
        )


@dataclass
class IndicatorSet:
    """Derived indicator series for one price series."""

    sma: Dict[int, List[IndicatorPoint]] = field(default_factory=dict)
    ema: List[IndicatorPoint] = field(default_factory=list)
    rsi: List[IndicatorPoint] = field(default_factory=list)
    macd: List[MACDPoint] = field(default_factory=list)
    volatility: Optional[float] = None  # % std dev of returns
    rsi_zone: Optional[RSIZone] = None  # zone of the latest RSI value

    def is_empty(self) -> bool:
        """True when no series produced any value."""
        return not (
            any(self.sma.values()) or self.ema or self.rsi or self.macd
        )
