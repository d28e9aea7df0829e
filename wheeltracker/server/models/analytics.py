"""Pydantic models for portfolio analytics responses.

These mirror the metric dataclasses in wheeltracker.wheel.models and are
built from them with model_validate.
"""

from pydantic import BaseModel, Field


class TickerMetricsResponse(BaseModel):
    """Aggregated metrics for one ticker."""

    ticker: str = Field(..., description="Ticker symbol")
    total_premium: float = Field(..., description="Net premium over all trades")
    total_trades: int = Field(..., description="Number of trades")
    open_trades: int = Field(..., description="Trades still OPEN")
    closed_trades: int = Field(..., description="Trades CLOSED or EXPIRED")
    winning_trades: int = Field(..., description="Closed trades with positive net")
    open_positions: int = Field(..., description="Share lots still OPEN")
    realized_pnl: float = Field(..., description="Net premium of closed trades")
    unrealized_pnl: float = Field(..., description="Mark-to-market P&L")
    annualized_return: float = Field(..., description="Annualized return (%)")
    avg_days_to_expiration: float = Field(..., description="Mean DTE of open trades")
    win_rate: float = Field(..., description="Winning / closed trades (%)")

    model_config = {"from_attributes": True}


class PortfolioMetricsResponse(BaseModel):
    """Portfolio-wide metrics."""

    total_premium_collected: float = Field(..., description="Gross premium collected")
    total_premium: float = Field(..., description="Net premium over all trades")
    total_realized_pnl: float = Field(..., description="Net premium of closed trades")
    total_unrealized_pnl: float = Field(..., description="Unrealized P&L (portfolio placeholder, always 0)")
    total_capital_deployed: float = Field(..., description="Cost basis of open lots")
    annualized_return: float = Field(..., description="Annualized return (%)")
    total_trades: int = Field(..., description="Number of trades")
    active_trades: int = Field(..., description="Trades still OPEN")
    closed_trades: int = Field(..., description="Trades CLOSED or EXPIRED")
    winning_trades: int = Field(..., description="Closed trades with positive net")
    active_positions: int = Field(..., description="Share lots still OPEN")
    win_rate: float = Field(..., description="Winning / closed trades (%)")
    avg_premium_per_trade: float = Field(..., description="Net premium per trade")
    avg_days_to_expiration: float = Field(..., description="Mean DTE of open trades")

    model_config = {"from_attributes": True}


class EnhancedPortfolioMetricsResponse(PortfolioMetricsResponse):
    """Portfolio metrics with account capital and mark-to-market figures."""

    total_capital: float = Field(..., description="Total account capital")
    cash_available: float = Field(..., description="Cash not yet deployed")
    cash_used_for_csps: float = Field(..., description="Collateral for open puts")
    percent_cash_available: float = Field(..., description="Cash / capital (%)")
    capital_utilization: float = Field(..., description="Deployed / capital (%)")
    unrealized_pnl_trades: float = Field(..., description="Unrealized P&L of open trades")
    unrealized_pnl_positions: float = Field(
        ..., description="Unrealized P&L of open positions"
    )


class AllocationResponse(BaseModel):
    """Covered-call coverage of a ticker's open shares."""

    ticker: str = Field(..., description="Ticker symbol")
    total_shares: int = Field(..., description="Shares in open positions")
    allocated_shares: int = Field(..., description="Shares covered by open calls")
    unallocated_shares: int = Field(..., description="Shares free to cover")
    total_lots: float = Field(..., description="Total shares / 100")
    allocated_lots: float = Field(..., description="Allocated shares / 100")
    unallocated_lots: float = Field(..., description="Unallocated shares / 100")

    model_config = {"from_attributes": True}


class TickerListResponse(BaseModel):
    """Distinct tickers across trades and positions."""

    tickers: list[str] = Field(..., description="Sorted ticker symbols")
    count: int = Field(..., description="Number of tickers")
