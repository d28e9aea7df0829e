"""Data access layer repositories."""

from wheeltracker.server.repositories.account import AccountRepository
from wheeltracker.server.repositories.position import POSITION_UPDATE_FIELDS, PositionRepository
from wheeltracker.server.repositories.price import PRICE_FIELDS, PriceRepository
from wheeltracker.server.repositories.trade import TRADE_UPDATE_FIELDS, TradeRepository

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "PriceRepository",
    "TradeRepository",
    "POSITION_UPDATE_FIELDS",
    "PRICE_FIELDS",
    "TRADE_UPDATE_FIELDS",
]
