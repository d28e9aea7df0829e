"""Repository for manually entered price snapshots."""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.price import CurrentPrice
from wheeltracker.server.repositories.base import column_value

logger = logging.getLogger(__name__)

# Snapshot columns written by an upsert
PRICE_FIELDS = (
    "stock_price",
    "option_price",
    "strike",
    "expiration",
    "option_type",
)


class PriceRepository:
    """Repository for current price snapshots, one row per ticker.

    Attributes:
        db: SQLAlchemy database session
    """

    def __init__(self, db: Session):
        self.db = db

    def get_price(self, ticker: str) -> Optional[CurrentPrice]:
        """Get the snapshot for a ticker, None if never entered."""
        return (
            self.db.query(CurrentPrice)
            .filter(CurrentPrice.ticker == ticker.upper())
            .first()
        )

    def list_prices(self) -> list[CurrentPrice]:
        """List all snapshots ordered by ticker."""
        return self.db.query(CurrentPrice).order_by(CurrentPrice.ticker).all()

    def prices_by_ticker(self) -> dict[str, CurrentPrice]:
        """All snapshots keyed by ticker."""
        return {price.ticker: price for price in self.list_prices()}

    def _merge(self, ticker: str, data: Mapping[str, Any]) -> CurrentPrice:
        price = self.get_price(ticker)
        if price is None:
            price = CurrentPrice(ticker=ticker.upper())
            self.db.add(price)

        # None keeps whatever was stored before
        for field in PRICE_FIELDS:
            value = data.get(field)
            if value is not None:
                setattr(price, field, column_value(value))
        price.updated_at = datetime.utcnow()
        return price

    def upsert_price(self, ticker: str, data: Mapping[str, Any]) -> CurrentPrice:
        """Create or update the snapshot for a ticker.

        Args:
            ticker: Ticker symbol
            data: Snapshot fields; missing or None values are preserved

        Returns:
            Stored CurrentPrice instance
        """
        price = self._merge(ticker, data)
        self.db.commit()
        self.db.refresh(price)

        logger.info(f"Upserted price snapshot: {price.ticker}")
        return price

    def bulk_upsert(self, items: list[Mapping[str, Any]]) -> int:
        """Upsert several snapshots in one transaction.

        Args:
            items: Snapshot dicts, each with a ticker key

        Returns:
            Number of snapshots written
        """
        try:
            for item in items:
                self._merge(item["ticker"], item)
                # Make the row visible to the next lookup of the same ticker
                self.db.flush()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Bulk upserted {len(items)} price snapshots")
        return len(items)
