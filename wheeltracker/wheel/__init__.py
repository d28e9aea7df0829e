"""
Wheel Tracker engine - trade lifecycle rules and performance analytics.

This package holds the storage-independent core: the trade and position
state machines, covered call allocation, and performance metrics.

Public API:
    PerformanceTracker: Metrics calculator for tickers and the portfolio
    calculate_allocation: Covered call allocation for a ticker
    TradeStatus: Trade state machine states
    PositionStatus: Position state machine states
"""

from .allocation import calculate_allocation
from .exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    WheelError,
)
from .models import (
    CoveredCallAllocation,
    EnhancedPortfolioMetrics,
    PortfolioMetrics,
    TickerMetrics,
)
from .performance import PerformanceTracker
from .state import (
    TRADE_TRANSITIONS,
    AcquisitionType,
    CloseMethod,
    OptionType,
    PositionStatus,
    TradeAction,
    TradeStatus,
    can_transition,
    get_next_position_status,
    get_next_status,
    get_valid_actions,
)

__all__ = [
    # Calculators
    "PerformanceTracker",
    "calculate_allocation",
    # Result models
    "TickerMetrics",
    "PortfolioMetrics",
    "EnhancedPortfolioMetrics",
    "CoveredCallAllocation",
    # State machine
    "OptionType",
    "TradeAction",
    "TradeStatus",
    "CloseMethod",
    "PositionStatus",
    "AcquisitionType",
    "TRADE_TRANSITIONS",
    "can_transition",
    "get_next_status",
    "get_next_position_status",
    "get_valid_actions",
    # Exceptions
    "WheelError",
    "NotFoundError",
    "InvalidArgumentError",
    "InvalidStateError",
]
