"""Annotate a timestamped price series with technical indicators."""

from typing import List, Optional, Sequence

from ...config.logging import get_logger
from ...core.price_feed import PriceSample
from .calculator import (
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_volatility,
    classify_rsi,
)
from .models import IndicatorConfig, IndicatorPoint, IndicatorSet, MACDPoint

logger = get_logger(__name__)


def _tag(
    values: Sequence[float], timestamps: List[int], offset: int
) -> List[IndicatorPoint]:
    return [
        IndicatorPoint(timestamp=timestamps[i + offset], value=value)
        for i, value in enumerate(values)
    ]


def compute_indicators(
    samples: Sequence[PriceSample], config: Optional[IndicatorConfig] = None
) -> IndicatorSet:
    """
    Compute SMA, EMA, RSI and MACD series for a price series.

    Every output point carries the timestamp of the sample its window ends
    on. Series without enough history are empty.

    Args:
        samples: Price samples ordered by non-decreasing timestamp
        config: Indicator periods (defaults from settings)

    Returns:
        IndicatorSet with the derived series

    Raises:
        ValueError: If samples are not in time order
    """
    config = config or IndicatorConfig.from_settings()

    timestamps = [sample.timestamp for sample in samples]
    if any(later < earlier for earlier, later in zip(timestamps, timestamps[1:])):
        raise ValueError("Price samples must be ordered by timestamp")

    prices = [sample.price for sample in samples]

    sma = {}
    for period in config.sma_periods:
        sma[period] = [
            IndicatorPoint(timestamp=timestamps[i], value=value)
            for i, value in enumerate(calculate_sma(prices, period))
            if value is not None
        ]

    ema = _tag(
        calculate_ema(prices, config.ema_period), timestamps, config.ema_period - 1
    )
    rsi = _tag(
        calculate_rsi(prices, config.rsi_period), timestamps, config.rsi_period
    )

    macd_series = calculate_macd(
        prices, config.macd_fast, config.macd_slow, config.macd_signal
    )
    macd_offset = config.macd_slow + config.macd_signal - 2
    macd = [
        MACDPoint(
            timestamp=timestamps[i + macd_offset],
            macd_line=line,
            signal_line=signal,
            histogram=hist,
        )
        for i, (line, signal, hist) in enumerate(
            zip(macd_series.macd_line, macd_series.signal_line, macd_series.histogram)
        )
    ]

    rsi_zone = (
        classify_rsi(rsi[-1].value, config.rsi_overbought, config.rsi_oversold)
        if rsi
        else None
    )

    result = IndicatorSet(
        sma=sma,
        ema=ema,
        rsi=rsi,
        macd=macd,
        volatility=calculate_volatility(prices),
        rsi_zone=rsi_zone,
    )

    logger.debug(
        "Computed indicators",
        num_samples=len(prices),
        ema_points=len(ema),
        rsi_points=len(rsi),
        macd_points=len(macd),
    )
    return result
