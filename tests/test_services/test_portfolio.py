"""Tests for portfolio aggregation."""

import math

import pytest

from simtrader.services.speculation import (
    Account,
    GameMode,
    Portfolio,
    PortfolioUnavailable,
    Position,
    PositionType,
    compute_portfolio,
)


class TestComputePortfolio:
    """Test portfolio valuation."""

    def test_fresh_account_scenario(self, fresh_account):
        portfolio = compute_portfolio(fresh_account, [], 8.5)

        assert isinstance(portfolio, Portfolio)
        assert portfolio.total_value == 10000
        assert portfolio.profit_loss == 0
        assert portfolio.total_margin_locked == 0
        assert portfolio.total_unrealized_pnl == 0
        assert portfolio.num_open_positions == 0

    @pytest.mark.parametrize(
        "cash,asset,price",
        [(2500.5, 12.25, 8.5), (0.0, 3.0, 11.37), (10000.0, 0.0, 7.91)],
    )
    def test_no_positions_is_cash_plus_assets(self, cash, asset, price):
        account = Account(cash_balance=cash, asset_balance=asset)

        portfolio = compute_portfolio(account, [], price)

        assert portfolio.total_value == cash + asset * price
        assert portfolio.asset_value == asset * price

    def test_includes_margin_and_unrealized_pnl(self, long_position):
        account = Account(cash_balance=9800.0, asset_balance=0.0)

        portfolio = compute_portfolio(account, [long_position], 110.0)

        assert portfolio.total_margin_locked == 200.0
        assert portfolio.total_unrealized_pnl == 500.0
        assert portfolio.total_value == 10500.0
        assert portfolio.profit_loss == 500.0
        assert portfolio.profit_loss_pct == pytest.approx(5.0)

    def test_mixed_positions(self, long_position, short_position):
        account = Account(cash_balance=9550.0, asset_balance=2.0)

        portfolio = compute_portfolio(account, [long_position, short_position], 120.0)

        # long: +1000, short: -200
        assert portfolio.total_unrealized_pnl == pytest.approx(800.0)
        assert portfolio.total_margin_locked == pytest.approx(450.0)
        assert portfolio.total_value == pytest.approx(9550 + 240 + 450 + 800)
        assert portfolio.num_open_positions == 2

    def test_closed_positions_excluded(self, long_position, short_position):
        account = Account(cash_balance=10000.0, asset_balance=0.0)

        portfolio = compute_portfolio(
            account, [long_position.close(), short_position], 100.0
        )

        assert portfolio.total_margin_locked == 250.0
        assert portfolio.total_unrealized_pnl == 0.0
        assert portfolio.num_open_positions == 1

    @pytest.mark.parametrize("price", [0, 0.0, -1.0, None, math.nan])
    def test_unavailable_price(self, fresh_account, long_position, price):
        result = compute_portfolio(
            fresh_account, [long_position], price, GameMode.MONTHLY
        )

        assert isinstance(result, PortfolioUnavailable)
        assert result.game_mode is GameMode.MONTHLY
        assert result.reason

    def test_idempotent(self, long_position, short_position):
        account = Account(cash_balance=5000.0, asset_balance=100.0)
        positions = [long_position, short_position]

        first = compute_portfolio(account, positions, 104.2)
        second = compute_portfolio(account, positions, 104.2)

        assert first == second

    def test_does_not_mutate_inputs(self, long_position):
        account = Account(cash_balance=9800.0, asset_balance=1.0)
        positions = [long_position]

        compute_portfolio(account, positions, 90.0)
        compute_portfolio(account, positions, 130.0)

        assert positions == [long_position]
        assert account == Account(cash_balance=9800.0, asset_balance=1.0)

    def test_accepts_generator(self, fresh_account):
        positions = (
            Position.open(PositionType.LONG, 1.0, 10.0, 2) for _ in range(3)
        )

        portfolio = compute_portfolio(fresh_account, positions, 10.0)

        assert portfolio.total_margin_locked == pytest.approx(15.0)

    def test_game_mode_carried(self, fresh_account):
        portfolio = compute_portfolio(fresh_account, [], 8.5, GameMode.WEEKLY)

        assert portfolio.game_mode is GameMode.WEEKLY


class TestAccount:
    """Test account snapshot validation."""

    def test_default_starting_balance(self):
        assert Account(cash_balance=1.0, asset_balance=0.0).starting_balance == 10000.0

    def test_rejects_negative_balances(self):
        with pytest.raises(ValueError):
            Account(cash_balance=-1.0, asset_balance=0.0)
        with pytest.raises(ValueError):
            Account(cash_balance=1.0, asset_balance=-0.5)

    @pytest.mark.parametrize(
        "field", ["cash_balance", "asset_balance", "starting_balance"]
    )
    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, None, "10"])
    def test_rejects_non_finite_balances(self, field, bad):
        """NaN or infinite balances never reach a portfolio valuation."""
        balances = {"cash_balance": 1000.0, "asset_balance": 2.0}
        balances[field] = bad

        with pytest.raises(ValueError, match=field):
            Account(**balances)

