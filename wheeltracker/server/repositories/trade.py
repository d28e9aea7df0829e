"""Repository for trade data access operations.

This module provides data access methods for trade CRUD operations,
including filtered listing, partial updates and the two-row roll write.
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.trade import Trade
from wheeltracker.server.repositories.base import apply_fields, column_value

logger = logging.getLogger(__name__)

# Columns a partial update may write
TRADE_UPDATE_FIELDS = (
    "ticker",
    "option_type",
    "action",
    "strike",
    "expiration",
    "premium",
    "quantity",
    "open_date",
    "close_date",
    "close_premium",
    "close_method",
    "status",
    "notes",
    "position_id",
    "rolled_to_trade_id",
    "rolled_from_trade_id",
)


class TradeRepository:
    """Repository for trade data access.

    Attributes:
        db: SQLAlchemy database session
    """

    def __init__(self, db: Session):
        """Initialize trade repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def _build_trade(self, data: Mapping[str, Any]) -> Trade:
        trade = Trade(
            ticker=data["ticker"].upper(),
            option_type=column_value(data["option_type"]),
            action=column_value(data.get("action") or "SELL_TO_OPEN"),
            strike=data["strike"],
            expiration=data["expiration"],
            premium=data["premium"],
            quantity=data["quantity"],
            open_date=data.get("open_date") or datetime.utcnow(),
            status="OPEN",
            notes=data.get("notes"),
            rolled_from_trade_id=data.get("rolled_from_trade_id"),
        )
        return trade

    def create_trade(self, data: Mapping[str, Any]) -> Trade:
        """Create a new OPEN trade.

        Args:
            data: Trade fields (ticker, option_type, action, strike,
                expiration, premium, quantity, open_date, notes)

        Returns:
            Created trade instance

        Example:
            >>> repo = TradeRepository(db)
            >>> trade = repo.create_trade({"ticker": "AAPL", "option_type": "PUT", ...})
        """
        trade = self._build_trade(data)

        self.db.add(trade)
        self.db.commit()
        self.db.refresh(trade)

        logger.info(
            f"Created trade: {trade.id} - {trade.ticker} {trade.option_type} "
            f"${trade.strike} x {trade.quantity} contracts"
        )
        return trade

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        """Get trade by ID.

        Returns:
            Trade instance if found, None otherwise
        """
        return self.db.query(Trade).filter(Trade.id == trade_id).first()

    def list_trades(
        self,
        ticker: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Trade]:
        """List trades with optional filtering.

        Args:
            ticker: Filter by ticker if provided (case-insensitive)
            status: Filter by status if provided

        Returns:
            List of trade instances, most recently opened first

        Example:
            >>> repo = TradeRepository(db)
            >>> trades = repo.list_trades(ticker="aapl", status="OPEN")
        """
        query = self.db.query(Trade)

        if ticker is not None:
            query = query.filter(Trade.ticker == ticker.upper())

        if status is not None:
            query = query.filter(Trade.status == column_value(status))

        return query.order_by(Trade.open_date.desc()).all()

    def list_tickers(self) -> list[str]:
        """Distinct tickers that have at least one trade."""
        rows = self.db.query(Trade.ticker).distinct().all()
        return [row[0] for row in rows]

    def update_trade(self, trade_id: str, data: Mapping[str, Any]) -> Optional[Trade]:
        """Update trade fields.

        Only whitelisted fields present in data are written. No
        state-machine rules apply here.

        Args:
            trade_id: Trade identifier
            data: Field values to write

        Returns:
            Updated trade instance if found, None otherwise
        """
        trade = self.get_trade(trade_id)
        if not trade:
            return None

        applied = apply_fields(trade, data, TRADE_UPDATE_FIELDS)
        if "ticker" in applied:
            trade.ticker = trade.ticker.upper()
        trade.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(trade)

        logger.info(f"Updated trade: {trade.id} - fields {applied}")
        return trade

    def delete_trade(self, trade_id: str) -> bool:
        """Delete trade.

        Returns:
            True if trade was deleted, False if not found
        """
        trade = self.get_trade(trade_id)
        if not trade:
            return False

        self.db.delete(trade)
        self.db.commit()

        logger.info(f"Deleted trade: {trade_id}")
        return True

    def roll_trade(self, old_trade: Trade, data: Mapping[str, Any]) -> tuple[Trade, Trade]:
        """Replace an open trade with a successor in one transaction.

        The successor is inserted OPEN and linked back to the old trade,
        which becomes ROLLED. Nothing is committed if either write fails.

        Args:
            old_trade: Trade being rolled
            data: Fields for the successor trade

        Returns:
            Tuple of (old trade, new trade)
        """
        new_trade = self._build_trade(
            {**data, "rolled_from_trade_id": old_trade.id}
        )
        try:
            self.db.add(new_trade)
            self.db.flush()

            now = datetime.utcnow()
            old_trade.status = "ROLLED"
            old_trade.close_method = "ROLL"
            old_trade.close_date = now
            old_trade.rolled_to_trade_id = new_trade.id
            old_trade.updated_at = now

            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(f"Roll of trade {old_trade.id} failed", exc_info=True)
            raise

        self.db.refresh(old_trade)
        self.db.refresh(new_trade)

        logger.info(
            f"Rolled trade: {old_trade.id} -> {new_trade.id} "
            f"({new_trade.ticker} ${new_trade.strike} {new_trade.expiration})"
        )
        return old_trade, new_trade
