"""
Performance calculations for option trades and share positions.

This module derives premium, realized and unrealized P&L, win rate,
annualized return and capital usage from raw trade and position
records. It holds no state of its own: every figure is a pure function
of the records passed in and the clock used for days-to-expiration.

Premium convention, applied to every trade regardless of type or
action:

    collected = premium * quantity * 100
    paid      = close_premium * quantity * 100  (0 when unset)
    net       = collected - paid
"""

import logging
import math
from dataclasses import asdict
from datetime import date, datetime, time
from typing import Iterable, Mapping, Optional

from .models import EnhancedPortfolioMetrics, PortfolioMetrics, TickerMetrics
from .state import OptionType, PositionStatus, TradeAction, TradeStatus

logger = logging.getLogger(__name__)

CONTRACT_SIZE = 100
SECONDS_PER_DAY = 60 * 60 * 24

# ASSIGNED and ROLLED trades are neither wins nor losses on their own
CLOSED_STATUSES = (TradeStatus.CLOSED.value, TradeStatus.EXPIRED.value)


def premium_collected(trade) -> float:
    """Gross premium for the opening leg of a trade."""
    return trade.premium * trade.quantity * CONTRACT_SIZE


def premium_paid(trade) -> float:
    """Premium paid to close the trade, 0 when never closed."""
    return (trade.close_premium or 0.0) * trade.quantity * CONTRACT_SIZE


def net_premium(trade) -> float:
    """Premium collected net of any close premium."""
    return premium_collected(trade) - premium_paid(trade)


def is_winning_trade(trade) -> bool:
    """A trade wins when it collected strictly more than it paid."""
    return premium_collected(trade) > premium_paid(trade)


def calculate_win_rate(closed_trades: list) -> float:
    """Percentage of closed trades that won, 0 when none are closed."""
    if not closed_trades:
        return 0.0
    winners = sum(1 for t in closed_trades if is_winning_trade(t))
    return winners / len(closed_trades) * 100


def _days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def _expiration_datetime(expiration) -> datetime:
    """Midnight at the start of the expiration date."""
    if isinstance(expiration, datetime):
        return expiration
    if isinstance(expiration, date):
        return datetime.combine(expiration, time.min)
    return datetime.combine(date.fromisoformat(expiration), time.min)


def average_days_in_trade(trades: Iterable) -> float:
    """
    Mean holding period over trades that have a close date.

    Args:
        trades: Trades of any status; those without close_date are skipped

    Returns:
        Average days held, 0 when no trade has been closed
    """
    completed = [t for t in trades if t.close_date is not None]
    if not completed:
        return 0.0
    total_days = sum(_days_between(t.open_date, t.close_date) for t in completed)
    return total_days / len(completed)


def average_days_to_expiration(
    open_trades: Iterable, now: Optional[datetime] = None
) -> float:
    """
    Mean calendar days until expiration for open trades.

    Expired contracts count as 0 days rather than negative.
    """
    open_trades = list(open_trades)
    if not open_trades:
        return 0.0
    now = now or datetime.utcnow()
    total_days = sum(
        max(0, _days_between(now, _expiration_datetime(t.expiration)))
        for t in open_trades
    )
    return total_days / len(open_trades)


def calculate_annualized_return(
    premium: float,
    realized_pnl: float,
    capital: float,
    avg_days_in_trade: float,
) -> float:
    """
    Annualized return on capital.

    premium and realized_pnl overlap for closed trades, so their sum
    counts closed-trade premium twice. Kept as-is for compatibility
    with existing figures.

    Returns:
        Percentage, or 0 when capital or holding period is not positive
    """
    if capital <= 0 or avg_days_in_trade <= 0:
        return 0.0
    return (premium + realized_pnl) / capital * (365 / avg_days_in_trade) * 100


def trade_unrealized_pnl(trade, snapshot) -> float:
    """
    Mark-to-market P&L for an OPEN trade.

    Sellers profit as the option value falls; buyers profit as it rises.

    Args:
        trade: Trade record
        snapshot: CurrentPrice snapshot for the trade's ticker, or None

    Returns:
        Unrealized P&L in dollars, 0 for closed trades or missing prices
    """
    if trade.status != TradeStatus.OPEN.value or snapshot is None:
        return 0.0

    current_value = (snapshot.option_price or 0.0) * trade.quantity * CONTRACT_SIZE
    if TradeAction(trade.action).is_sell:
        return premium_collected(trade) - current_value
    return current_value - premium_collected(trade)


def position_unrealized_pnl(position, snapshot) -> float:
    """Market value of a share lot less its cost basis, 0 without a price."""
    if snapshot is None or snapshot.stock_price is None:
        return 0.0
    return snapshot.stock_price * position.shares - position.cost_basis


def cash_secured_put_collateral(trades: Iterable) -> float:
    """Cash reserved by OPEN short puts (strike * shares)."""
    return sum(
        t.strike * t.quantity * CONTRACT_SIZE
        for t in trades
        if t.status == TradeStatus.OPEN.value
        and t.option_type == OptionType.PUT.value
        and t.action == TradeAction.SELL_TO_OPEN.value
    )


class PerformanceTracker:
    """
    Calculate wheel performance metrics from trade and position records.

    Provides:
    - Per-ticker metrics (net premium, realized P&L, win rate)
    - Portfolio metrics (gross premium, capital deployed)
    - Enhanced portfolio metrics (cash usage and utilization)

    Records may be ORM rows or any object exposing the same attributes.
    """

    def __init__(self, now: Optional[datetime] = None):
        """
        Initialize the performance tracker.

        Args:
            now: Fixed clock for days-to-expiration (defaults to utcnow per call)
        """
        self._now = now

    @property
    def now(self) -> datetime:
        return self._now or datetime.utcnow()

    def ticker_metrics(
        self, ticker: str, trades: list, positions: list
    ) -> TickerMetrics:
        """
        Calculate performance metrics for a single ticker.

        Args:
            ticker: Stock ticker symbol
            trades: All trades for the ticker
            positions: All positions for the ticker

        Returns:
            TickerMetrics with calculated values
        """
        open_trades = [t for t in trades if t.status == TradeStatus.OPEN.value]
        closed_trades = [t for t in trades if t.status in CLOSED_STATUSES]

        total_premium = sum(net_premium(t) for t in trades)
        realized_pnl = sum(net_premium(t) for t in closed_trades)
        total_capital = sum(p.cost_basis for p in positions)

        annualized = calculate_annualized_return(
            total_premium,
            realized_pnl,
            total_capital,
            average_days_in_trade(trades),
        )

        return TickerMetrics(
            ticker=ticker.upper(),
            total_premium=total_premium,
            total_trades=len(trades),
            open_trades=len(open_trades),
            closed_trades=len(closed_trades),
            winning_trades=sum(1 for t in closed_trades if is_winning_trade(t)),
            open_positions=sum(
                1 for p in positions if p.status == PositionStatus.OPEN.value
            ),
            realized_pnl=realized_pnl,
            unrealized_pnl=0.0,
            annualized_return=annualized,
            avg_days_to_expiration=average_days_to_expiration(open_trades, self.now),
            win_rate=calculate_win_rate(closed_trades),
        )

    def portfolio_metrics(self, trades: list, positions: list) -> PortfolioMetrics:
        """
        Calculate aggregate metrics across all tickers.

        Args:
            trades: Every stored trade
            positions: Every stored position

        Returns:
            PortfolioMetrics with portfolio-wide values
        """
        open_trades = [t for t in trades if t.status == TradeStatus.OPEN.value]
        closed_trades = [t for t in trades if t.status in CLOSED_STATUSES]

        total_collected = sum(premium_collected(t) for t in trades)
        realized_pnl = sum(net_premium(t) for t in closed_trades)
        capital_deployed = sum(p.cost_basis for p in positions)

        annualized = calculate_annualized_return(
            total_collected,
            realized_pnl,
            capital_deployed,
            average_days_in_trade(trades),
        )

        return PortfolioMetrics(
            total_premium_collected=total_collected,
            total_premium=sum(net_premium(t) for t in trades),
            total_realized_pnl=realized_pnl,
            total_unrealized_pnl=0.0,
            total_capital_deployed=capital_deployed,
            annualized_return=annualized,
            total_trades=len(trades),
            active_trades=len(open_trades),
            closed_trades=len(closed_trades),
            winning_trades=sum(1 for t in closed_trades if is_winning_trade(t)),
            active_positions=sum(
                1 for p in positions if p.status == PositionStatus.OPEN.value
            ),
            win_rate=calculate_win_rate(closed_trades),
            avg_premium_per_trade=total_collected / len(trades) if trades else 0.0,
            avg_days_to_expiration=average_days_to_expiration(open_trades, self.now),
        )

    def enhanced_portfolio_metrics(
        self,
        trades: list,
        positions: list,
        account,
        prices: Mapping[str, object],
    ) -> EnhancedPortfolioMetrics:
        """
        Portfolio metrics combined with account cash and price snapshots.

        Args:
            trades: Every stored trade
            positions: Every stored position
            account: AccountSettings record (total_capital, cash_available)
            prices: Current price snapshots keyed by ticker

        Returns:
            EnhancedPortfolioMetrics
        """
        base = self.portfolio_metrics(trades, positions)

        total_capital = account.total_capital or 0.0
        cash_available = account.cash_available or 0.0

        if total_capital > 0:
            percent_cash = cash_available / total_capital * 100
            utilization = (total_capital - cash_available) / total_capital * 100
        else:
            percent_cash = 0.0
            utilization = 0.0

        unrealized_trades = sum(
            trade_unrealized_pnl(t, prices.get(t.ticker)) for t in trades
        )
        unrealized_positions = sum(
            position_unrealized_pnl(p, prices.get(p.ticker))
            for p in positions
            if p.status == PositionStatus.OPEN.value
        )

        logger.debug(
            f"Enhanced metrics: capital ${total_capital:,.2f}, "
            f"cash ${cash_available:,.2f}, utilization {utilization:.1f}%"
        )

        return EnhancedPortfolioMetrics(
            **asdict(base),
            total_capital=total_capital,
            cash_available=cash_available,
            cash_used_for_csps=cash_secured_put_collateral(trades),
            percent_cash_available=percent_cash,
            capital_utilization=utilization,
            unrealized_pnl_trades=unrealized_trades,
            unrealized_pnl_positions=unrealized_positions,
        )
