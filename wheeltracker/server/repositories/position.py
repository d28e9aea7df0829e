"""Repository for share position data access operations."""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.position import Position
from wheeltracker.server.repositories.base import apply_fields, column_value

logger = logging.getLogger(__name__)

# Columns a partial update may write
POSITION_UPDATE_FIELDS = (
    "ticker",
    "shares",
    "cost_basis",
    "acquired_date",
    "acquisition_type",
    "status",
    "sold_date",
    "sold_price",
    "notes",
)


class PositionRepository:
    """Repository for position data access.

    Attributes:
        db: SQLAlchemy database session
    """

    def __init__(self, db: Session):
        self.db = db

    def create_position(self, data: Mapping[str, Any]) -> Position:
        """Create a new OPEN position.

        Args:
            data: Position fields (ticker, shares, cost_basis,
                acquired_date, acquisition_type, notes)

        Returns:
            Created position instance
        """
        position = Position(
            ticker=data["ticker"].upper(),
            shares=data["shares"],
            cost_basis=data["cost_basis"],
            acquired_date=data["acquired_date"],
            acquisition_type=column_value(data["acquisition_type"]),
            status="OPEN",
            notes=data.get("notes"),
        )

        self.db.add(position)
        self.db.commit()
        self.db.refresh(position)

        logger.info(
            f"Created position: {position.id} - {position.ticker} "
            f"{position.shares} shares (${position.cost_basis:,.2f})"
        )
        return position

    def get_position(self, position_id: str) -> Optional[Position]:
        """Get position by ID, None if missing."""
        return self.db.query(Position).filter(Position.id == position_id).first()

    def list_positions(
        self,
        ticker: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Position]:
        """List positions with optional filtering.

        Args:
            ticker: Filter by ticker if provided (case-insensitive)
            status: Filter by status if provided

        Returns:
            List of position instances, most recently acquired first
        """
        query = self.db.query(Position)

        if ticker is not None:
            query = query.filter(Position.ticker == ticker.upper())

        if status is not None:
            query = query.filter(Position.status == column_value(status))

        return query.order_by(Position.acquired_date.desc()).all()

    def list_tickers(self) -> list[str]:
        """Distinct tickers that have at least one position."""
        rows = self.db.query(Position.ticker).distinct().all()
        return [row[0] for row in rows]

    def update_position(
        self, position_id: str, data: Mapping[str, Any]
    ) -> Optional[Position]:
        """Update whitelisted position fields.

        Returns:
            Updated position instance if found, None otherwise
        """
        position = self.get_position(position_id)
        if not position:
            return None

        applied = apply_fields(position, data, POSITION_UPDATE_FIELDS)
        if "ticker" in applied:
            position.ticker = position.ticker.upper()
        position.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(position)

        logger.info(f"Updated position: {position.id} - fields {applied}")
        return position

    def delete_position(self, position_id: str) -> bool:
        """Delete position.

        Returns:
            True if position was deleted, False if not found
        """
        position = self.get_position(position_id)
        if not position:
            return False

        self.db.delete(position)
        self.db.commit()

        logger.info(f"Deleted position: {position_id}")
        return True
