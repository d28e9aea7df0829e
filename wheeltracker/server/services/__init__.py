"""Business logic services."""

from wheeltracker.server.services.account_service import AccountService
from wheeltracker.server.services.analytics_service import AnalyticsService
from wheeltracker.server.services.position_service import PositionService
from wheeltracker.server.services.price_service import PriceService
from wheeltracker.server.services.trade_service import TradeService

__all__ = [
    "AccountService",
    "AnalyticsService",
    "PositionService",
    "PriceService",
    "TradeService",
]
