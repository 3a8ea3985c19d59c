"""Portfolio-level rollup of balances and open leveraged positions."""

import math
from typing import Iterable, Optional, Union

from .models import Account, GameMode, Portfolio, PortfolioUnavailable, Position
from .risk_calculator import calculate_unrealized_pnl


def is_valid_price(current_price: Optional[float]) -> bool:
    """True when a quote can be used for valuation."""
    return (
        current_price is not None
        and math.isfinite(current_price)
        and current_price > 0
    )


def compute_portfolio(
    account: Account,
    positions: Iterable[Position],
    current_price: Optional[float],
    game_mode: GameMode = GameMode.DAILY,
) -> Union[Portfolio, PortfolioUnavailable]:
    """
    Value an account and its open positions at the current price.

    Closed positions contribute nothing. A missing, zero or negative price
    yields PortfolioUnavailable instead of an understated total.

    Args:
        account: Balance snapshot
        positions: Positions for the same game mode
        current_price: Current quote of the traded asset
        game_mode: Partition the snapshot belongs to

    Returns:
        Portfolio, or PortfolioUnavailable when the price cannot be used
    """
    if not is_valid_price(current_price):
        return PortfolioUnavailable(
            game_mode=game_mode,
            reason=f"current price unavailable ({current_price!r})",
        )

    open_positions = [position for position in positions if position.is_open]

    asset_value = account.asset_balance * current_price
    total_margin_locked = math.fsum(position.margin for position in open_positions)
    total_unrealized_pnl = math.fsum(
        calculate_unrealized_pnl(position, current_price)
        for position in open_positions
    )
    total_value = (
        account.cash_balance + asset_value + total_margin_locked + total_unrealized_pnl
    )
    profit_loss = total_value - account.starting_balance

    return Portfolio(
        game_mode=game_mode,
        current_price=current_price,
        cash_balance=account.cash_balance,
        asset_value=asset_value,
        total_margin_locked=total_margin_locked,
        total_unrealized_pnl=total_unrealized_pnl,
        total_value=total_value,
        profit_loss=profit_loss,
        profit_loss_pct=(
            profit_loss / account.starting_balance * 100
            if account.starting_balance > 0
            else 0.0
        ),
        num_open_positions=len(open_positions),
    )
