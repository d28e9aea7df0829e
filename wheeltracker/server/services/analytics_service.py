"""Service layer for portfolio analytics.

This module loads trades, positions, account settings and price
snapshots from the database and feeds them to the pure calculators in
wheeltracker.wheel.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from wheeltracker.server.repositories.account import AccountRepository
from wheeltracker.server.repositories.position import PositionRepository
from wheeltracker.server.repositories.price import PriceRepository
from wheeltracker.server.repositories.trade import TradeRepository
from wheeltracker.wheel.allocation import calculate_allocation
from wheeltracker.wheel.exceptions import NotFoundError
from wheeltracker.wheel.models import (
    CoveredCallAllocation,
    EnhancedPortfolioMetrics,
    PortfolioMetrics,
    TickerMetrics,
)
from wheeltracker.wheel.performance import (
    PerformanceTracker,
    position_unrealized_pnl,
    trade_unrealized_pnl,
)
from wheeltracker.wheel.state import PositionStatus

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service for computing wheel metrics from stored data.

    Every method reads current state and writes nothing, so repeated
    calls without intervening writes return the same figures.

    Attributes:
        db: SQLAlchemy database session
        tracker: PerformanceTracker used for all metric calculations
    """

    def __init__(self, db: Session, now: Optional[datetime] = None):
        """Initialize analytics service.

        Args:
            db: SQLAlchemy database session
            now: Fixed clock for days-to-expiration (defaults to current time)
        """
        self.db = db
        self.trade_repo = TradeRepository(db)
        self.position_repo = PositionRepository(db)
        self.account_repo = AccountRepository(db)
        self.price_repo = PriceRepository(db)
        self.tracker = PerformanceTracker(now=now)

    def get_ticker_metrics(self, ticker: str) -> TickerMetrics:
        """Metrics for one ticker; an unknown ticker yields all zeros."""
        ticker = ticker.upper()
        return self.tracker.ticker_metrics(
            ticker,
            self.trade_repo.list_trades(ticker=ticker),
            self.position_repo.list_positions(ticker=ticker),
        )

    def get_portfolio_metrics(self) -> PortfolioMetrics:
        """Metrics across every trade and position."""
        return self.tracker.portfolio_metrics(
            self.trade_repo.list_trades(),
            self.position_repo.list_positions(),
        )

    def get_enhanced_portfolio_metrics(self) -> EnhancedPortfolioMetrics:
        """Portfolio metrics with account cash and mark-to-market P&L."""
        return self.tracker.enhanced_portfolio_metrics(
            self.trade_repo.list_trades(),
            self.position_repo.list_positions(),
            self.account_repo.get_settings(),
            self.price_repo.prices_by_ticker(),
        )

    def get_covered_call_allocation(self, ticker: str) -> CoveredCallAllocation:
        """How many of a ticker's open shares are covered by open calls."""
        ticker = ticker.upper()
        return calculate_allocation(
            ticker,
            self.position_repo.list_positions(
                ticker=ticker, status=PositionStatus.OPEN
            ),
            self.trade_repo.list_trades(ticker=ticker),
        )

    def get_all_allocations(self) -> list[CoveredCallAllocation]:
        """Allocation for every known ticker, in ticker order."""
        positions = self.position_repo.list_positions()
        trades = self.trade_repo.list_trades()
        return [
            calculate_allocation(ticker, positions, trades)
            for ticker in self.get_all_tickers()
        ]

    def get_all_tickers(self) -> list[str]:
        """Sorted distinct tickers across trades and positions."""
        tickers = set(self.trade_repo.list_tickers())
        tickers.update(self.position_repo.list_tickers())
        return sorted(tickers)

    def get_trade_unrealized_pnl(self, trade_id: str) -> float:
        """Mark-to-market P&L for one trade.

        Raises:
            NotFoundError: If trade not found
        """
        trade = self.trade_repo.get_trade(trade_id)
        if not trade:
            logger.warning(f"Trade not found: {trade_id}")
            raise NotFoundError(f"Trade not found: {trade_id}")
        return trade_unrealized_pnl(trade, self.price_repo.get_price(trade.ticker))

    def get_position_unrealized_pnl(self, position_id: str) -> float:
        """Mark-to-market P&L for one share lot.

        Raises:
            NotFoundError: If position not found
        """
        position = self.position_repo.get_position(position_id)
        if not position:
            logger.warning(f"Position not found: {position_id}")
            raise NotFoundError(f"Position not found: {position_id}")
        return position_unrealized_pnl(
            position, self.price_repo.get_price(position.ticker)
        )
