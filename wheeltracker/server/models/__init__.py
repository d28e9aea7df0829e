"""Pydantic models for API requests and responses."""

from wheeltracker.server.models.account import (
    AccountSettingsResponse,
    AccountSettingsUpdate,
    CashMovementRequest,
)
from wheeltracker.server.models.analytics import (
    AllocationResponse,
    EnhancedPortfolioMetricsResponse,
    PortfolioMetricsResponse,
    TickerListResponse,
    TickerMetricsResponse,
)
from wheeltracker.server.models.common import ErrorResponse, HealthResponse, InfoResponse
from wheeltracker.server.models.position import (
    PositionCreate,
    PositionResponse,
    PositionSellRequest,
    PositionUpdate,
)
from wheeltracker.server.models.price import (
    PriceBulkUpsert,
    PriceBulkUpsertResponse,
    PriceResponse,
    PriceUpsert,
)
from wheeltracker.server.models.trade import (
    TradeAssignRequest,
    TradeCloseRequest,
    TradeCloseWithMethodRequest,
    TradeCreate,
    TradeResponse,
    TradeRollRequest,
    TradeRollResponse,
    TradeUpdate,
    UnrealizedPnLResponse,
)

__all__ = [
    "AccountSettingsResponse",
    "AccountSettingsUpdate",
    "AllocationResponse",
    "CashMovementRequest",
    "EnhancedPortfolioMetricsResponse",
    "ErrorResponse",
    "HealthResponse",
    "InfoResponse",
    "PortfolioMetricsResponse",
    "PositionCreate",
    "PositionResponse",
    "PositionSellRequest",
    "PositionUpdate",
    "PriceBulkUpsert",
    "PriceBulkUpsertResponse",
    "PriceResponse",
    "PriceUpsert",
    "TickerListResponse",
    "TickerMetricsResponse",
    "TradeAssignRequest",
    "TradeCloseRequest",
    "TradeCloseWithMethodRequest",
    "TradeCreate",
    "TradeResponse",
    "TradeRollRequest",
    "TradeRollResponse",
    "TradeUpdate",
    "UnrealizedPnLResponse",
]
