"""Unrealized P&L and liquidation price for leveraged positions."""

import math
from typing import Optional, Protocol

from ...core.exceptions import InvalidPositionError, PriceUnavailableError
from .models import Position, PositionPnL, PositionType


class LiquidationAdjustment(Protocol):
    """Hook that shifts a base liquidation price, e.g. for fees or funding."""

    def __call__(self, position: Position, base_price: float) -> float: ...


def _require_price(current_price: Optional[float]) -> float:
    if current_price is None:
        raise PriceUnavailableError(reason="no current price")
    if not math.isfinite(current_price) or current_price <= 0:
        raise PriceUnavailableError(reason=f"invalid current price {current_price!r}")
    return current_price


def calculate_unrealized_pnl(position: Position, current_price: float) -> float:
    """
    Calculate the mark-to-market P&L of a position.

    Args:
        position: The leveraged position
        current_price: Current market price of the underlying

    Returns:
        Price deviation from entry scaled by notional and leverage

    Raises:
        PriceUnavailableError: If current_price is missing, zero or negative
    """
    price = _require_price(current_price)

    if position.position_type is PositionType.LONG:
        difference = price - position.entry_price
    elif position.position_type is PositionType.SHORT:
        difference = position.entry_price - price
    else:
        raise InvalidPositionError(
            "position_type", position.position_type, "unknown direction"
        )

    return difference * position.notional_amount * position.leverage


def calculate_liquidation_price(
    position: Position, adjustment: Optional[LiquidationAdjustment] = None
) -> float:
    """
    Calculate the price at which posted margin is fully lost.

    Long: entry * (1 - 1/leverage). Short: entry * (1 + 1/leverage).
    Unleveraged (1x) positions liquidate at the entry price. This is a
    deliberate boundary: a long just above 1x liquidates near zero instead.

    Args:
        position: The leveraged position
        adjustment: Optional hook applied to the base price

    Returns:
        Non-negative liquidation price

    Raises:
        InvalidPositionError: If the adjusted price is negative or not finite
    """
    if position.leverage == 1:
        base_price = position.entry_price
    elif position.position_type is PositionType.LONG:
        base_price = position.entry_price * (1 - 1 / position.leverage)
    elif position.position_type is PositionType.SHORT:
        base_price = position.entry_price * (1 + 1 / position.leverage)
    else:
        raise InvalidPositionError(
            "position_type", position.position_type, "unknown direction"
        )

    if adjustment is None:
        return base_price

    adjusted = adjustment(position, base_price)
    if not math.isfinite(adjusted) or adjusted < 0:
        raise InvalidPositionError(
            "liquidation_price", adjusted, "adjustment produced an invalid price"
        )
    return adjusted


def is_liquidated(
    position: Position, current_price: float, liquidation_price: float
) -> bool:
    """True when the price has moved past the liquidation price."""
    if position.position_type is PositionType.LONG:
        return current_price < liquidation_price
    if position.position_type is PositionType.SHORT:
        return current_price > liquidation_price
    raise InvalidPositionError(
        "position_type", position.position_type, "unknown direction"
    )


def compute_position_pnl(
    position: Position,
    current_price: float,
    adjustment: Optional[LiquidationAdjustment] = None,
) -> PositionPnL:
    """
    Compute unrealized P&L and liquidation metrics for one position.

    Args:
        position: The leveraged position
        current_price: Current market price of the underlying
        adjustment: Optional liquidation price hook

    Returns:
        PositionPnL for the position at current_price
    """
    unrealized_pnl = calculate_unrealized_pnl(position, current_price)
    liquidation_price = calculate_liquidation_price(position, adjustment)

    return PositionPnL(
        position=position,
        current_price=current_price,
        unrealized_pnl=unrealized_pnl,
        unrealized_pnl_pct=unrealized_pnl / position.margin * 100,
        liquidation_price=liquidation_price,
        is_liquidated=is_liquidated(position, current_price, liquidation_price),
    )
