"""Service layer for manually entered price snapshots."""

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.price import CurrentPrice
from wheeltracker.server.repositories.price import PriceRepository
from wheeltracker.wheel.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class PriceService:
    """Service for current price snapshots used by unrealized P&L.

    Attributes:
        db: SQLAlchemy database session
        price_repo: Repository for price snapshots
    """

    def __init__(self, db: Session):
        self.db = db
        self.price_repo = PriceRepository(db)

    def get_price(self, ticker: str) -> CurrentPrice:
        """Snapshot for a ticker.

        Raises:
            NotFoundError: If no snapshot was entered for the ticker
        """
        price = self.price_repo.get_price(ticker)
        if not price:
            logger.warning(f"No price snapshot for {ticker.upper()}")
            raise NotFoundError(f"No price snapshot for {ticker.upper()}")
        return price

    def list_prices(self) -> list[CurrentPrice]:
        """All snapshots ordered by ticker."""
        return self.price_repo.list_prices()

    def upsert_price(self, ticker: str, fields: Mapping[str, Any]) -> CurrentPrice:
        """Create or update a snapshot; omitted fields keep their old value."""
        return self.price_repo.upsert_price(ticker, fields)

    def bulk_upsert(self, items: list[Mapping[str, Any]]) -> int:
        """Upsert several snapshots and return how many were written."""
        return self.price_repo.bulk_upsert(items)
