"""Shared test configuration and fixtures."""

from typing import Dict, List, Mapping, Sequence
from unittest.mock import Mock

import pytest

from simtrader.config.settings import get_settings
from simtrader.core.price_feed import PriceSample
from simtrader.services.speculation.models import (
    Account,
    GameMode,
    Position,
    PositionType,
)


class FakeLedger:
    """In-memory ledger snapshot keyed by game mode."""

    def __init__(
        self,
        accounts: Dict[GameMode, Account],
        positions: Dict[GameMode, List[Position]] = None,
        players: Dict[GameMode, Dict[str, Account]] = None,
    ):
        self.accounts = accounts
        self.positions = positions or {}
        self.players = players or {}
        self.calls = []

    def get_account(self, game_mode: GameMode) -> Account:
        self.calls.append(("get_account", game_mode))
        return self.accounts[game_mode]

    def get_open_positions(self, game_mode: GameMode) -> Sequence[Position]:
        self.calls.append(("get_open_positions", game_mode))
        return list(self.positions.get(game_mode, []))

    def get_accounts(self, game_mode: GameMode) -> Mapping[str, Account]:
        self.calls.append(("get_accounts", game_mode))
        return dict(self.players.get(game_mode, {}))


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Clear cached settings between tests to avoid state pollution."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def long_position():
    """5x long on 10 units opened at 100."""
    return Position(
        position_type=PositionType.LONG,
        leverage=5,
        entry_price=100.0,
        notional_amount=10.0,
        margin=200.0,
        opened_at=1_700_000_000_000,
    )


@pytest.fixture
def short_position():
    """2x short on 5 units opened at 100."""
    return Position(
        position_type=PositionType.SHORT,
        leverage=2,
        entry_price=100.0,
        notional_amount=5.0,
        margin=250.0,
        opened_at=1_700_000_000_000,
    )


@pytest.fixture
def fresh_account():
    """Untouched account holding only the starting cash."""
    return Account(cash_balance=10000.0, asset_balance=0.0)


@pytest.fixture
def price_samples():
    """Forty minute-spaced samples with a gentle up/down wiggle."""
    prices = [8.0 + 0.05 * i + (0.3 if i % 3 == 0 else -0.2) for i in range(40)]
    return [
        PriceSample(timestamp=1_700_000_000_000 + i * 60_000, price=price)
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def mock_price_feed():
    """Price feed stub quoting 110."""
    feed = Mock()
    feed.get_current_price = Mock(return_value=110.0)
    feed.get_historical_prices = Mock(return_value=[])
    return feed


@pytest.fixture
def fake_ledger_factory():
    """Build FakeLedger instances."""
    return FakeLedger
