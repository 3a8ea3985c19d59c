"""
Technical indicator calculations.

All functions are pure and causal: an output at index i only depends on
prices up to i. Indices without enough history are omitted (or None for
SMA, which keeps input alignment) and never filled with a neutral value.
"""

import math
import statistics
from typing import List, Optional, Sequence

from .models import MACDSeries, RSIZone


def _validate_period(period: int, name: str = "period") -> None:
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period!r}")


def _validate_prices(values: List[float], allow_negative: bool = False) -> None:
    for index, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            reason = "must be a number"
        elif not math.isfinite(value):
            reason = "must be finite"
        elif value < 0 and not allow_negative:
            reason = "cannot be negative"
        else:
            continue
        raise ValueError(f"Value at index {index} {reason}, got {value!r}")


def calculate_sma(prices: Sequence[float], period: int) -> List[Optional[float]]:
    """
    Calculate a simple moving average.

    Args:
        prices: Price values in time order
        period: Window length

    Returns:
        List aligned with prices; the first period-1 entries are None.
        Empty when there are fewer prices than the period.
    """
    _validate_period(period)
    values = list(prices)
    _validate_prices(values)
    if len(values) < period:
        return []

    result: List[Optional[float]] = [None] * (period - 1)
    for i in range(period - 1, len(values)):
        result.append(math.fsum(values[i - period + 1 : i + 1]) / period)
    return result


def calculate_ema(prices: Sequence[float], period: int) -> List[float]:
    """
    Calculate an exponential moving average seeded with the SMA.

    Signed values are accepted, since MACD smooths its own line with it.

    Args:
        prices: Values in time order
        period: Smoothing period, k = 2 / (period + 1)

    Returns:
        len(prices) - period + 1 values; index 0 corresponds to
        prices[period - 1]. Empty when there are fewer prices than the period.

    Raises:
        ValueError: If the period is invalid or a value is not finite
    """
    _validate_period(period)
    values = list(prices)
    _validate_prices(values, allow_negative=True)
    if len(values) < period:
        return []

    k = 2 / (period + 1)
    ema = [math.fsum(values[:period]) / period]
    for price in values[period:]:
        ema.append(price * k + ema[-1] * (1 - k))
    return ema


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def calculate_rsi(prices: Sequence[float], period: int = 14) -> List[float]:
    """
    Calculate the Relative Strength Index with Wilder smoothing.

    Args:
        prices: Price values in time order
        period: RSI period (typically 14)

    Returns:
        len(prices) - period values in [0, 100]; index 0 corresponds to
        prices[period]. Empty when there are not period + 1 prices.
    """
    _validate_period(period)
    values = list(prices)
    _validate_prices(values)
    if len(values) < period + 1:
        return []

    changes = [current - previous for previous, current in zip(values, values[1:])]
    gains = [change if change > 0 else 0.0 for change in changes]
    losses = [-change if change < 0 else 0.0 for change in changes]

    avg_gain = math.fsum(gains[:period]) / period
    avg_loss = math.fsum(losses[:period]) / period
    result = [_rsi_value(avg_gain, avg_loss)]

    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result


def calculate_macd(
    prices: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDSeries:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    The three series share one index base: index 0 corresponds to
    prices[slow_period + signal_period - 2].

    Args:
        prices: Price values in time order
        fast_period: Fast EMA period (typically 12)
        slow_period: Slow EMA period (typically 26)
        signal_period: Signal line period (typically 9)

    Returns:
        MACDSeries; empty when len(prices) < slow_period + signal_period
    """
    _validate_period(fast_period, "fast_period")
    _validate_period(slow_period, "slow_period")
    _validate_period(signal_period, "signal_period")
    if fast_period >= slow_period:
        raise ValueError("fast_period must be shorter than slow_period")

    values = list(prices)
    _validate_prices(values)
    if len(values) < slow_period + signal_period:
        return MACDSeries()

    fast_ema = calculate_ema(values, fast_period)
    slow_ema = calculate_ema(values, slow_period)

    # fast_ema starts slow - fast bars earlier than slow_ema
    offset = slow_period - fast_period
    full_macd = [fast - slow for fast, slow in zip(fast_ema[offset:], slow_ema)]

    signal_line = calculate_ema(full_macd, signal_period)
    macd_line = full_macd[signal_period - 1 :]
    histogram = [macd - signal for macd, signal in zip(macd_line, signal_line)]

    return MACDSeries(
        macd_line=macd_line, signal_line=signal_line, histogram=histogram
    )


def calculate_volatility(
    prices: Sequence[float], period: Optional[int] = None
) -> Optional[float]:
    """
    Calculate volatility as the standard deviation of simple returns, in %.

    Args:
        prices: Price values in time order
        period: Number of most recent returns to use (all when None)

    Returns:
        Volatility percentage, or None without at least one return
    """
    if period is not None:
        _validate_period(period)

    values = list(prices)
    _validate_prices(values)
    returns = [
        (current - previous) / previous
        for previous, current in zip(values, values[1:])
        if previous > 0
    ]
    if period is not None:
        returns = returns[-period:]
    if not returns:
        return None

    return statistics.pstdev(returns) * 100


def classify_rsi(
    value: float, overbought: float = 70.0, oversold: float = 30.0
) -> RSIZone:
    """Classify an RSI reading as overbought, oversold or neutral."""
    if value > overbought:
        return RSIZone.OVERBOUGHT
    if value < oversold:
        return RSIZone.OVERSOLD
    return RSIZone.NEUTRAL
