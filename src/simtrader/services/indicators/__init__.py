"""Technical indicator engine."""

from .calculator import (
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_volatility,
    classify_rsi,
)
from .models import (
    IndicatorConfig,
    IndicatorPoint,
    IndicatorSet,
    MACDPoint,
    MACDSeries,
    RSIZone,
)
from .service import compute_indicators

__all__ = [
    "calculate_sma",
    "calculate_ema",
    "calculate_rsi",
    "calculate_macd",
    "calculate_volatility",
    "classify_rsi",
    "compute_indicators",
    "IndicatorConfig",
    "IndicatorPoint",
    "IndicatorSet",
    "MACDPoint",
    "MACDSeries",
    "RSIZone",
]
