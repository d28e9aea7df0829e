"""Covered call share allocation.

Determines how many shares held in open positions are already pledged
as collateral for outstanding short calls, so the same shares are not
sold against twice.
"""

from typing import Iterable

from .models import CoveredCallAllocation
from .state import OptionType, PositionStatus, TradeAction, TradeStatus

CONTRACT_SIZE = 100


def is_covered_call(trade) -> bool:
    """True for an OPEN short call that consumes shares as collateral."""
    return (
        trade.status == TradeStatus.OPEN.value
        and trade.option_type == OptionType.CALL.value
        and trade.action == TradeAction.SELL_TO_OPEN.value
    )


def calculate_allocation(
    ticker: str,
    positions: Iterable,
    trades: Iterable,
) -> CoveredCallAllocation:
    """
    Calculate covered call allocation for a ticker.

    Args:
        ticker: Stock ticker symbol
        positions: Positions for the ticker (any status)
        trades: Trades for the ticker (any status)

    Returns:
        CoveredCallAllocation; unallocated shares never go below zero
    """
    ticker = ticker.upper()

    total_shares = sum(
        p.shares
        for p in positions
        if p.ticker == ticker and p.status == PositionStatus.OPEN.value
    )
    allocated_shares = sum(
        t.quantity * CONTRACT_SIZE
        for t in trades
        if t.ticker == ticker and is_covered_call(t)
    )

    return CoveredCallAllocation(
        ticker=ticker,
        total_shares=total_shares,
        allocated_shares=allocated_shares,
        unallocated_shares=max(0, total_shares - allocated_shares),
    )
