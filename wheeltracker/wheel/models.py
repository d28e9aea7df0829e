"""Data models for computed wheel analytics.

Nothing in this module is persisted. Every value is recomputed from
the stored trades and positions on each query.
"""

from dataclasses import dataclass


@dataclass
class TickerMetrics:
    """Performance metrics for a single underlying."""

    ticker: str
    total_premium: float = 0.0  # Net of close premium, all statuses
    total_trades: int = 0
    open_trades: int = 0
    closed_trades: int = 0  # CLOSED or EXPIRED only
    winning_trades: int = 0
    open_positions: int = 0
    realized_pnl: float = 0.0
    unrealized_pnl: float = 0.0
    annualized_return: float = 0.0
    avg_days_to_expiration: float = 0.0
    win_rate: float = 0.0  # Percent, 0-100


@dataclass
class PortfolioMetrics:
    """Performance metrics across every ticker."""

    total_premium_collected: float = 0.0  # Gross, ignores close premium
    total_premium: float = 0.0  # Net of close premium
    total_realized_pnl: float = 0.0
    total_unrealized_pnl: float = 0.0
    total_capital_deployed: float = 0.0
    annualized_return: float = 0.0
    total_trades: int = 0
    active_trades: int = 0
    closed_trades: int = 0
    winning_trades: int = 0
    active_positions: int = 0
    win_rate: float = 0.0
    avg_premium_per_trade: float = 0.0
    avg_days_to_expiration: float = 0.0


@dataclass
class EnhancedPortfolioMetrics(PortfolioMetrics):
    """Portfolio metrics combined with account cash figures.

    total_unrealized_pnl is inherited from PortfolioMetrics and is always
    0.0 here. Mark-to-market figures are reported separately in
    unrealized_pnl_trades and unrealized_pnl_positions.
    """

    total_capital: float = 0.0
    cash_available: float = 0.0
    cash_used_for_csps: float = 0.0
    percent_cash_available: float = 0.0
    capital_utilization: float = 0.0
    unrealized_pnl_trades: float = 0.0
    unrealized_pnl_positions: float = 0.0


@dataclass
class CoveredCallAllocation:
    """
    Share allocation for covered calls on one ticker.

    Shares held in OPEN positions are either pledged against an
    outstanding short call or free to cover a new one.
    """

    ticker: str
    total_shares: int = 0
    allocated_shares: int = 0
    unallocated_shares: int = 0

    @property
    def total_lots(self) -> float:
        """Held shares expressed as 100-share lots."""
        return self.total_shares / 100

    @property
    def allocated_lots(self) -> float:
        """Pledged shares expressed as 100-share lots."""
        return self.allocated_shares / 100

    @property
    def unallocated_lots(self) -> float:
        """Free shares expressed as 100-share lots."""
        return self.unallocated_shares / 100
