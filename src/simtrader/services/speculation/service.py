"""Main speculation service orchestration."""

import asyncio
import time
from typing import List, Mapping, Optional, Protocol, Sequence, Union

from ...config.logging import get_logger, log_error, log_performance
from ...core.exceptions import PriceUnavailableError
from ...core.price_feed import PriceFeed
from ..indicators import IndicatorConfig, IndicatorSet, compute_indicators
from .leaderboard import build_leaderboard
from .models import (
    Account,
    GameMode,
    LeaderboardEntry,
    Portfolio,
    PortfolioUnavailable,
    Position,
    PositionPnL,
)
from .portfolio_aggregator import compute_portfolio
from .risk_calculator import LiquidationAdjustment, compute_position_pnl

logger = get_logger(__name__)


class LedgerSnapshot(Protocol):
    """Read-only view of the backend ledger, partitioned by game mode."""

    def get_account(self, game_mode: GameMode) -> Account: ...

    def get_open_positions(self, game_mode: GameMode) -> Sequence[Position]: ...

    def get_accounts(self, game_mode: GameMode) -> Mapping[str, Account]: ...


class SpeculationService:
    """Service for valuing a virtual trading account and its leveraged positions."""

    def __init__(
        self,
        price_feed: PriceFeed,
        ledger: LedgerSnapshot,
        liquidation_adjustment: Optional[LiquidationAdjustment] = None,
    ):
        self.logger = logger.bind(component="speculation_service")
        self.price_feed = price_feed
        self.ledger = ledger
        self.liquidation_adjustment = liquidation_adjustment

    async def get_current_price(self) -> Optional[float]:
        """
        Fetch the current quote.

        Returns:
            The price, or None when the feed reports it unavailable
        """
        try:
            return await asyncio.to_thread(self.price_feed.get_current_price)
        except PriceUnavailableError as e:
            self.logger.warning("Current price unavailable", reason=e.message)
            return None

    async def get_position_pnls(self, game_mode: GameMode) -> List[PositionPnL]:
        """
        Get risk metrics for every open position in a game mode.

        Args:
            game_mode: Partition to query

        Returns:
            One PositionPnL per open position; empty when no price is available
        """
        current_price = await self.get_current_price()
        if current_price is None:
            return []

        positions = await asyncio.to_thread(self.ledger.get_open_positions, game_mode)
        return [
            compute_position_pnl(position, current_price, self.liquidation_adjustment)
            for position in positions
            if position.is_open
        ]

    async def get_portfolio(
        self, game_mode: GameMode
    ) -> Union[Portfolio, PortfolioUnavailable]:
        """
        Value the account and open positions of a game mode.

        Args:
            game_mode: Partition to query

        Returns:
            Portfolio, or PortfolioUnavailable when the price is unavailable
        """
        current_price = await self.get_current_price()
        if current_price is None:
            return PortfolioUnavailable(
                game_mode=game_mode, reason="current price unavailable"
            )

        account = await asyncio.to_thread(self.ledger.get_account, game_mode)
        positions = await asyncio.to_thread(self.ledger.get_open_positions, game_mode)

        portfolio = compute_portfolio(account, positions, current_price, game_mode)

        if isinstance(portfolio, Portfolio):
            self.logger.info(
                "Valued portfolio",
                game_mode=game_mode.value,
                total_value=portfolio.total_value,
                profit_loss=portfolio.profit_loss,
                open_positions=portfolio.num_open_positions,
            )
        return portfolio

    async def get_indicators(
        self, range_days: int, config: Optional[IndicatorConfig] = None
    ) -> IndicatorSet:
        """
        Compute indicators over the price history.

        Args:
            range_days: Days of history to fetch
            config: Indicator periods (defaults from settings)

        Returns:
            IndicatorSet; empty when the history is unavailable
        """
        try:
            samples = await asyncio.to_thread(
                self.price_feed.get_historical_prices, range_days
            )
        except PriceUnavailableError as e:
            log_error(e, operation="get_indicators", range_days=range_days)
            return IndicatorSet()

        start = time.perf_counter()
        indicators = compute_indicators(samples, config)
        log_performance(
            "compute_indicators",
            (time.perf_counter() - start) * 1000,
            num_samples=len(samples),
        )
        return indicators

    async def get_leaderboard(
        self, game_mode: GameMode, limit: int = 10
    ) -> List[LeaderboardEntry]:
        """
        Get the ranked leaderboard of a game mode.

        Args:
            game_mode: Partition to rank
            limit: Maximum number of entries to return

        Returns:
            Leaderboard entries; empty when the price is unavailable
        """
        current_price = await self.get_current_price()
        if current_price is None:
            return []

        accounts = await asyncio.to_thread(self.ledger.get_accounts, game_mode)
        return build_leaderboard(accounts, current_price, limit)
