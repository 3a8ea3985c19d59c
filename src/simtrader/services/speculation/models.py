"""Data models for leveraged positions, accounts and portfolio valuation."""

import math
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from ...core.exceptions import InvalidPositionError

DEFAULT_STARTING_BALANCE = 10000.0


class GameMode(Enum):
    """Competition partition an account and its positions belong to."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class PositionType(Enum):
    """Direction of a leveraged position."""

    LONG = "long"
    SHORT = "short"


def _now_millis() -> int:
    return int(time.time() * 1000)


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPositionError(name, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidPositionError(name, value, "must be finite")


@dataclass(frozen=True)
class Position:
    """One open (or closed) leveraged exposure."""

    position_type: PositionType
    leverage: float
    entry_price: float
    notional_amount: float  # units of the underlying asset
    margin: float  # collateral owned by this position
    opened_at: int = field(default_factory=_now_millis)  # epoch millis
    is_open: bool = True

    def __post_init__(self):
        if not isinstance(self.position_type, PositionType):
            raise InvalidPositionError(
                "position_type", self.position_type, "must be LONG or SHORT"
            )
        for name in ("leverage", "entry_price", "notional_amount", "margin"):
            _require_finite(name, getattr(self, name))

        if self.leverage <= 0:
            raise InvalidPositionError("leverage", self.leverage, "must be positive")
        if self.leverage < 1:
            raise InvalidPositionError("leverage", self.leverage, "must be at least 1")
        if self.entry_price <= 0:
            raise InvalidPositionError(
                "entry_price", self.entry_price, "must be positive"
            )
        if self.notional_amount <= 0:
            raise InvalidPositionError(
                "notional_amount", self.notional_amount, "must be positive"
            )
        if self.margin <= 0:
            raise InvalidPositionError("margin", self.margin, "must be positive")

    @classmethod
    def open(
        cls,
        position_type: PositionType,
        notional_amount: float,
        entry_price: float,
        leverage: float,
        opened_at: Optional[int] = None,
    ) -> "Position":
        """Open a position, deriving margin as notional * entry / leverage."""
        _require_finite("leverage", leverage)
        if leverage <= 0:
            raise InvalidPositionError("leverage", leverage, "must be positive")

        return cls(
            position_type=position_type,
            leverage=leverage,
            entry_price=entry_price,
            notional_amount=notional_amount,
            margin=notional_amount * entry_price / leverage,
            opened_at=opened_at if opened_at is not None else _now_millis(),
        )

    def close(self) -> "Position":
        """Return the closed (terminal) copy of this position."""
        if not self.is_open:
            return self
        return replace(self, is_open=False)


@dataclass(frozen=True)
class Account:
    """Read-only snapshot of a player's balances in one game mode."""

    cash_balance: float
    asset_balance: float
    starting_balance: float = DEFAULT_STARTING_BALANCE

    def __post_init__(self):
        for name in ("cash_balance", "asset_balance", "starting_balance"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")

        if self.cash_balance < 0:
            raise ValueError("Cash balance cannot be negative")
        if self.asset_balance < 0:
            raise ValueError("Asset balance cannot be negative")
        if self.starting_balance < 0:
            raise ValueError("Starting balance cannot be negative")


@dataclass(frozen=True)
class PositionPnL:
    """Mark-to-market risk metrics for one position."""

    position: Position
    current_price: float
    unrealized_pnl: float
    unrealized_pnl_pct: float  # relative to posted margin
    liquidation_price: float
    is_liquidated: bool


@dataclass(frozen=True)
class Portfolio:
    """Portfolio valuation at one price."""

    game_mode: GameMode
    current_price: float
    cash_balance: float
    asset_value: float
    total_margin_locked: float
    total_unrealized_pnl: float
    total_value: float
    profit_loss: float
    profit_loss_pct: float
    num_open_positions: int


@dataclass(frozen=True)
class PortfolioUnavailable:
    """Valuation could not be produced, typically for lack of a price."""

    game_mode: GameMode
    reason: str


@dataclass
class LeaderboardEntry:
    """Ranked valuation of one player's account."""

    rank: int
    player: str
    cash_balance: float
    asset_balance: float
    total_value: float
    profit_loss: float
    profit_loss_pct: float


@dataclass(frozen=True)
class TimeRemaining:
    """Countdown to the next game-mode reset."""

    days: int
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
