"""Exception classes for the valuation and risk engine."""

from typing import Any, Dict, Optional


class SimTraderError(Exception):
    """Base exception for Simtrader."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidPositionError(SimTraderError, ValueError):
    """Raised when a position is constructed with invalid values."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Invalid position {field}={value!r}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": value, "reason": reason},
        )


class PriceUnavailableError(SimTraderError):
    """Raised when no usable price quote is available."""

    def __init__(self, symbol: str = "", reason: str = "price unavailable"):
        message = f"Price unavailable for {symbol}: {reason}" if symbol else reason
        super().__init__(message=message, details={"symbol": symbol, "reason": reason})
