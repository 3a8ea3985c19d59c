"""Price feed contract and yfinance-backed implementation."""

import math
from typing import List, Optional, Protocol, runtime_checkable

import yfinance as yf
from pydantic import BaseModel, ConfigDict, field_validator

from ..config.logging import get_logger
from ..config.settings import get_settings
from .exceptions import PriceUnavailableError

logger = get_logger(__name__)


class PriceSample(BaseModel):
    """A single (timestamp, price) observation."""

    model_config = ConfigDict(frozen=True)

    timestamp: int  # epoch millis
    price: float

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        """Prices are finite and non-negative."""
        if not math.isfinite(v) or v < 0:
            raise ValueError("Price must be a finite, non-negative number")
        return v


@runtime_checkable
class PriceFeed(Protocol):
    """Source of current and historical quotes.

    Implementations raise PriceUnavailableError instead of returning 0.
    """

    def get_current_price(self) -> float: ...

    def get_historical_prices(self, range_days: int) -> List[PriceSample]: ...


def history_interval(range_days: int) -> str:
    """Pick the bar interval for a history range."""
    if range_days <= 1:
        return "30m"
    if range_days <= 30:
        return "1h"
    return "1d"


class YahooPriceFeed:
    """PriceFeed backed by Yahoo Finance quotes."""

    def __init__(self, symbol: Optional[str] = None):
        self.symbol = symbol or get_settings().price_symbol
        self.logger = logger.bind(component="price_feed", symbol=self.symbol)

    def get_current_price(self) -> float:
        """
        Get the latest quote for the configured symbol.

        Returns:
            Most recent positive price

        Raises:
            PriceUnavailableError: If no positive, finite quote is available
        """
        try:
            ticker = yf.Ticker(self.symbol)
            data = ticker.history(period="1d", interval="1m")

            if not data.empty:
                closes = data["Close"].dropna()
                price = float(closes.iloc[-1]) if len(closes) else None
            else:
                price = None

            if price is None:
                last_price = ticker.fast_info.last_price  # fallback
                price = float(last_price) if last_price is not None else None
        except Exception as e:
            self.logger.warning("Price lookup failed", error=str(e))
            raise PriceUnavailableError(self.symbol, f"lookup failed: {e}") from e

        if price is None or not math.isfinite(price) or price <= 0:
            raise PriceUnavailableError(self.symbol, "no valid quote")

        return price

    def get_historical_prices(self, range_days: int) -> List[PriceSample]:
        """
        Get historical prices in ascending time order.

        Args:
            range_days: Number of days of history

        Returns:
            List of PriceSample ordered by timestamp

        Raises:
            PriceUnavailableError: If the history is empty or cannot be fetched
        """
        if range_days < 1:
            raise ValueError("range_days must be at least 1")

        interval = history_interval(range_days)
        try:
            data = yf.Ticker(self.symbol).history(
                period=f"{range_days}d", interval=interval
            )
        except Exception as e:
            self.logger.warning("History lookup failed", error=str(e))
            raise PriceUnavailableError(self.symbol, f"history failed: {e}") from e

        if data.empty:
            raise PriceUnavailableError(self.symbol, "no price history")

        samples = [
            PriceSample(timestamp=int(index.timestamp() * 1000), price=float(close))
            for index, close in data["Close"].dropna().items()
            if close >= 0
        ]
        samples.sort(key=lambda s: s.timestamp)

        if not samples:
            raise PriceUnavailableError(self.symbol, "no price history")

        self.logger.debug(
            "Fetched price history",
            range_days=range_days,
            interval=interval,
            num_samples=len(samples),
        )
        return samples
