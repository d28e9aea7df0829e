"""Database models for the backend server.

This module exports all SQLAlchemy ORM models used by the backend server.
Models define the database schema for the four stored record types.

Models:
    Trade: One option contract position (single strike/expiration/type)
    Position: A lot of underlying shares held or sold
    AccountSettings: Singleton row with total capital and cash available
    CurrentPrice: Manually refreshed per-ticker price snapshot
"""

from .account import DEFAULT_ACCOUNT_ID, AccountSettings
from .position import Position
from .price import CurrentPrice
from .trade import Trade

__all__ = [
    "Trade",
    "Position",
    "AccountSettings",
    "CurrentPrice",
    "DEFAULT_ACCOUNT_ID",
]
