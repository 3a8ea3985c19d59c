"""Leaderboard and player ranking functionality."""

from typing import List, Mapping, Optional

from ...config.logging import get_logger
from .models import Account, LeaderboardEntry
from .portfolio_aggregator import is_valid_price

logger = get_logger(__name__)


def build_leaderboard(
    accounts: Mapping[str, Account],
    current_price: Optional[float],
    limit: Optional[int] = None,
) -> List[LeaderboardEntry]:
    """
    Rank players by profit/loss against their starting balance.

    Args:
        accounts: Account snapshot per player id
        current_price: Current quote of the traded asset
        limit: Maximum number of entries to return

    Returns:
        Entries ordered best first with 1-based ranks; empty when the price
        is unavailable
    """
    if not is_valid_price(current_price):
        logger.warning("Leaderboard skipped, price unavailable", price=current_price)
        return []

    entries = []
    for player, account in accounts.items():
        total_value = account.cash_balance + account.asset_balance * current_price
        profit_loss = total_value - account.starting_balance
        entries.append(
            LeaderboardEntry(
                rank=0,  # Will set after sorting
                player=player,
                cash_balance=account.cash_balance,
                asset_balance=account.asset_balance,
                total_value=total_value,
                profit_loss=profit_loss,
                profit_loss_pct=(
                    profit_loss / account.starting_balance * 100
                    if account.starting_balance > 0
                    else 0.0
                ),
            )
        )

    # Ties keep a stable order by player id
    entries.sort(key=lambda entry: entry.player)
    entries.sort(key=lambda entry: entry.profit_loss, reverse=True)

    for i, entry in enumerate(entries):
        entry.rank = i + 1

    if limit is not None:
        entries = entries[:limit]

    logger.info("Generated leaderboard", entries=len(entries))
    return entries
