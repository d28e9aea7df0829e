"""Tests for performance calculations."""

from dataclasses import asdict
from datetime import datetime
from types import SimpleNamespace

import pytest

from wheeltracker.wheel.performance import (
    PerformanceTracker,
    average_days_in_trade,
    average_days_to_expiration,
    calculate_annualized_return,
    calculate_win_rate,
    cash_secured_put_collateral,
    is_winning_trade,
    net_premium,
    position_unrealized_pnl,
    premium_collected,
    premium_paid,
    trade_unrealized_pnl,
)

NOW = datetime(2026, 1, 1, 12, 0)


def make_trade(
    ticker="AAPL",
    option_type="PUT",
    action="SELL_TO_OPEN",
    strike=50.0,
    expiration="2026-02-20",
    premium=1.50,
    quantity=2,
    status="OPEN",
    close_premium=None,
    open_date=datetime(2026, 1, 1),
    close_date=None,
):
    return SimpleNamespace(
        ticker=ticker,
        option_type=option_type,
        action=action,
        strike=strike,
        expiration=expiration,
        premium=premium,
        quantity=quantity,
        status=status,
        close_premium=close_premium,
        open_date=open_date,
        close_date=close_date,
    )


def make_position(ticker="AAPL", shares=100, cost_basis=15000.0, status="OPEN"):
    return SimpleNamespace(
        ticker=ticker, shares=shares, cost_basis=cost_basis, status=status
    )


def snapshot(stock_price=None, option_price=None):
    return SimpleNamespace(stock_price=stock_price, option_price=option_price)


class TestPremium:
    """Tests for premium arithmetic."""

    def test_closed_put_example(self) -> None:
        """PUT 50 x2 at 1.50 bought back at 0.50 nets $200 and wins."""
        trade = make_trade(status="CLOSED", close_premium=0.50)

        assert premium_collected(trade) == pytest.approx(300.0)
        assert premium_paid(trade) == pytest.approx(100.0)
        assert net_premium(trade) == pytest.approx(200.0)
        assert is_winning_trade(trade)

    def test_unclosed_trade_paid_is_zero(self) -> None:
        trade = make_trade()

        assert premium_paid(trade) == 0.0
        assert net_premium(trade) == premium_collected(trade)

    def test_break_even_is_not_a_win(self) -> None:
        """A win needs collected strictly greater than paid."""
        trade = make_trade(status="CLOSED", premium=1.0, close_premium=1.0)

        assert not is_winning_trade(trade)


class TestWinRate:
    """Tests for calculate_win_rate."""

    def test_no_closed_trades(self) -> None:
        assert calculate_win_rate([]) == 0.0

    def test_half_winners(self) -> None:
        trades = [
            make_trade(status="CLOSED", close_premium=0.25),
            make_trade(status="CLOSED", close_premium=3.00),
        ]
        assert calculate_win_rate(trades) == pytest.approx(50.0)


class TestDays:
    """Tests for holding period and days-to-expiration."""

    def test_average_days_in_trade_rounds_up(self) -> None:
        trades = [
            make_trade(open_date=datetime(2026, 1, 1), close_date=datetime(2026, 1, 10, 1)),
            make_trade(open_date=datetime(2026, 1, 1), close_date=datetime(2026, 1, 21)),
            make_trade(close_date=None),
        ]
        # 9 days 1 hour rounds up to 10; open trade skipped
        assert average_days_in_trade(trades) == pytest.approx(15.0)

    def test_average_days_in_trade_empty(self) -> None:
        assert average_days_in_trade([make_trade()]) == 0.0

    def test_days_to_expiration_floors_at_zero(self) -> None:
        trades = [
            make_trade(expiration="2026-01-11"),
            make_trade(expiration="2025-12-01"),
        ]
        # 9.5 days rounds up to 10; past expiration counts 0
        assert average_days_to_expiration(trades, NOW) == pytest.approx(5.0)

    def test_days_to_expiration_empty(self) -> None:
        assert average_days_to_expiration([], NOW) == 0.0


class TestAnnualizedReturn:
    """Tests for calculate_annualized_return."""

    def test_formula(self) -> None:
        result = calculate_annualized_return(150.0, 150.0, 10000.0, 30.0)
        assert result == pytest.approx(300 / 10000 * 365 / 30 * 100)

    @pytest.mark.parametrize("capital,days", [(0.0, 30.0), (10000.0, 0.0), (-5.0, 10.0)])
    def test_zero_when_not_computable(self, capital: float, days: float) -> None:
        assert calculate_annualized_return(100.0, 100.0, capital, days) == 0.0


class TestUnrealized:
    """Tests for mark-to-market calculations."""

    def test_short_option_gains_as_price_falls(self) -> None:
        trade = make_trade(premium=2.0, quantity=1)
        assert trade_unrealized_pnl(trade, snapshot(option_price=0.5)) == pytest.approx(150.0)

    def test_long_option_gains_as_price_rises(self) -> None:
        trade = make_trade(action="BUY_TO_OPEN", premium=2.0, quantity=1)
        assert trade_unrealized_pnl(trade, snapshot(option_price=3.0)) == pytest.approx(100.0)

    def test_missing_option_price_counts_as_zero(self) -> None:
        trade = make_trade(premium=2.0, quantity=1)
        assert trade_unrealized_pnl(trade, snapshot()) == pytest.approx(200.0)

    def test_closed_or_unpriced_trade_is_zero(self) -> None:
        assert trade_unrealized_pnl(make_trade(status="CLOSED"), snapshot(option_price=1)) == 0.0
        assert trade_unrealized_pnl(make_trade(), None) == 0.0

    def test_position(self) -> None:
        position = make_position(shares=100, cost_basis=15000.0)

        assert position_unrealized_pnl(position, snapshot(stock_price=160.0)) == pytest.approx(1000.0)
        assert position_unrealized_pnl(position, snapshot(option_price=1.0)) == 0.0
        assert position_unrealized_pnl(position, None) == 0.0


class TestCollateral:
    """Tests for cash_secured_put_collateral."""

    def test_only_open_short_puts(self) -> None:
        trades = [
            make_trade(strike=50.0, quantity=2),
            make_trade(strike=40.0, quantity=1, status="CLOSED"),
            make_trade(option_type="CALL", strike=60.0, quantity=1),
            make_trade(action="BUY_TO_OPEN", strike=45.0, quantity=1),
        ]
        assert cash_secured_put_collateral(trades) == pytest.approx(10000.0)


class TestPerformanceTracker:
    """Tests for PerformanceTracker."""

    @pytest.fixture
    def tracker(self) -> PerformanceTracker:
        return PerformanceTracker(now=NOW)

    @pytest.fixture
    def trades(self) -> list:
        return [
            make_trade(
                premium=2.0,
                quantity=1,
                status="CLOSED",
                close_premium=0.5,
                open_date=datetime(2026, 1, 1),
                close_date=datetime(2026, 1, 31),
            ),
            make_trade(option_type="CALL", premium=1.0, quantity=1, expiration="2026-01-11"),
            make_trade(premium=1.0, quantity=1, status="ASSIGNED"),
        ]

    def test_empty_portfolio(self, tracker: PerformanceTracker) -> None:
        metrics = tracker.portfolio_metrics([], [])

        assert metrics.total_trades == 0
        assert metrics.win_rate == 0.0
        assert metrics.annualized_return == 0.0
        assert metrics.avg_premium_per_trade == 0.0
        assert metrics.avg_days_to_expiration == 0.0

    def test_ticker_metrics(self, tracker: PerformanceTracker, trades: list) -> None:
        positions = [make_position(cost_basis=10000.0)]

        metrics = tracker.ticker_metrics("aapl", trades, positions)

        assert metrics.ticker == "AAPL"
        assert metrics.total_trades == 3
        assert metrics.open_trades == 1
        # ASSIGNED is neither open nor closed for win rate purposes
        assert metrics.closed_trades == 1
        assert metrics.winning_trades == 1
        assert metrics.win_rate == pytest.approx(100.0)
        assert metrics.total_premium == pytest.approx(150.0 + 100.0 + 100.0)
        assert metrics.realized_pnl == pytest.approx(150.0)
        assert metrics.unrealized_pnl == 0.0
        assert metrics.open_positions == 1
        assert metrics.avg_days_to_expiration == pytest.approx(10.0)
        assert metrics.annualized_return == pytest.approx(
            (350.0 + 150.0) / 10000.0 * 365 / 30 * 100
        )

    def test_portfolio_metrics_use_gross_premium(
        self, tracker: PerformanceTracker, trades: list
    ) -> None:
        positions = [
            make_position(cost_basis=10000.0),
            make_position(ticker="MSFT", cost_basis=5000.0, status="SOLD"),
        ]

        metrics = tracker.portfolio_metrics(trades, positions)

        assert metrics.total_premium_collected == pytest.approx(400.0)
        assert metrics.total_premium == pytest.approx(350.0)
        assert metrics.total_realized_pnl == pytest.approx(150.0)
        assert metrics.total_unrealized_pnl == 0.0
        assert metrics.total_capital_deployed == pytest.approx(15000.0)
        assert metrics.active_trades == 1
        assert metrics.active_positions == 1
        assert metrics.avg_premium_per_trade == pytest.approx(400.0 / 3)
        assert metrics.annualized_return == pytest.approx(
            (400.0 + 150.0) / 15000.0 * 365 / 30 * 100
        )

    def test_enhanced_metrics(self, tracker: PerformanceTracker) -> None:
        trades = [
            make_trade(strike=50.0, premium=2.0, quantity=1),
            make_trade(ticker="MSFT", option_type="CALL", premium=1.0, quantity=1),
        ]
        positions = [
            make_position(shares=100, cost_basis=15000.0),
            make_position(ticker="MSFT", shares=100, cost_basis=30000.0, status="SOLD"),
        ]
        account = SimpleNamespace(total_capital=100000.0, cash_available=40000.0)
        prices = {
            "AAPL": snapshot(stock_price=160.0, option_price=0.5),
            "MSFT": snapshot(stock_price=400.0, option_price=2.0),
        }

        metrics = tracker.enhanced_portfolio_metrics(trades, positions, account, prices)

        assert metrics.capital_utilization == pytest.approx(60.0)
        assert metrics.percent_cash_available == pytest.approx(40.0)
        assert metrics.cash_used_for_csps == pytest.approx(5000.0)
        assert metrics.unrealized_pnl_trades == pytest.approx(150.0 - 100.0)
        # Sold MSFT lot is not marked to market
        assert metrics.unrealized_pnl_positions == pytest.approx(1000.0)
        # Portfolio-level total stays a placeholder beside the itemized figures
        assert metrics.total_unrealized_pnl == 0.0
        assert metrics.total_trades == 2

    def test_enhanced_metrics_without_capital(self, tracker: PerformanceTracker) -> None:
        account = SimpleNamespace(total_capital=0.0, cash_available=0.0)

        metrics = tracker.enhanced_portfolio_metrics([], [], account, {})

        assert metrics.capital_utilization == 0.0
        assert metrics.percent_cash_available == 0.0

    def test_metrics_are_repeatable(self, tracker: PerformanceTracker, trades: list) -> None:
        """Same inputs give identical results."""
        positions = [make_position()]

        first = tracker.portfolio_metrics(trades, positions)
        second = tracker.portfolio_metrics(trades, positions)

        assert asdict(first) == asdict(second)
