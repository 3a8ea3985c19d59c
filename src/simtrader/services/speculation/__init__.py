"""Leveraged-position risk and portfolio valuation."""

from .game_clock import next_reset_time, time_remaining
from .leaderboard import build_leaderboard
from .models import (
    Account,
    GameMode,
    LeaderboardEntry,
    Portfolio,
    PortfolioUnavailable,
    Position,
    PositionPnL,
    PositionType,
    TimeRemaining,
)
from .portfolio_aggregator import compute_portfolio
from .risk_calculator import (
    LiquidationAdjustment,
    calculate_liquidation_price,
    calculate_unrealized_pnl,
    compute_position_pnl,
)
from .service import LedgerSnapshot, SpeculationService

__all__ = [
    "SpeculationService",
    "LedgerSnapshot",
    "Account",
    "GameMode",
    "LeaderboardEntry",
    "Portfolio",
    "PortfolioUnavailable",
    "Position",
    "PositionPnL",
    "PositionType",
    "TimeRemaining",
    "LiquidationAdjustment",
    "calculate_unrealized_pnl",
    "calculate_liquidation_price",
    "compute_position_pnl",
    "compute_portfolio",
    "build_leaderboard",
    "next_reset_time",
    "time_remaining",
]
