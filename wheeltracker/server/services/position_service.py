"""Service layer for share position lifecycle operations."""

import logging
from datetime import date
from typing import Optional, Union

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.position import Position
from wheeltracker.server.models.position import PositionCreate, PositionUpdate
from wheeltracker.server.repositories.position import PositionRepository
from wheeltracker.wheel.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from wheeltracker.wheel.state import PositionStatus, get_next_position_status

logger = logging.getLogger(__name__)

SHARES_PER_LOT = 100

# Nullable columns a correction may clear by sending null
CLEARABLE_POSITION_FIELDS = ("sold_date", "sold_price", "notes")


class PositionService:
    """Service layer for position operations.

    Attributes:
        db: SQLAlchemy database session
        position_repo: Repository for position operations
    """

    def __init__(self, db: Session):
        """Initialize position service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.position_repo = PositionRepository(db)

    @staticmethod
    def _validate_shares(shares: int) -> None:
        if shares <= 0 or shares % SHARES_PER_LOT != 0:
            logger.warning(f"Rejected share count: {shares}")
            raise InvalidArgumentError(
                f"Shares must be a positive multiple of {SHARES_PER_LOT}, got {shares}"
            )

    def create_position(self, position_data: PositionCreate) -> Position:
        """Record a share lot.

        Args:
            position_data: Validated position data

        Returns:
            Created position instance

        Raises:
            InvalidArgumentError: If shares is not a positive multiple of 100

        Example:
            >>> service = PositionService(db)
            >>> position = service.create_position(
            >>>     PositionCreate(ticker="AAPL", shares=100, cost_basis=15000.0, ...)
            >>> )
        """
        self._validate_shares(position_data.shares)
        return self.position_repo.create_position(position_data.model_dump())

    def get_position(self, position_id: str) -> Position:
        """Get a position.

        Raises:
            NotFoundError: If no position has this id
        """
        position = self.position_repo.get_position(position_id)
        if not position:
            logger.warning(f"Position not found: {position_id}")
            raise NotFoundError(f"Position not found: {position_id}")
        return position

    def list_positions(
        self,
        ticker: Optional[str] = None,
        status: Optional[Union[PositionStatus, str]] = None,
    ) -> list[Position]:
        """List positions, newest acquisition first."""
        return self.position_repo.list_positions(ticker=ticker, status=status)

    def sell_position(
        self,
        position_id: str,
        sold_price: float,
        sold_date: Optional[str] = None,
    ) -> Position:
        """Mark an open share lot as sold.

        Args:
            position_id: Position identifier
            sold_price: Sale price
            sold_date: Sale date (YYYY-MM-DD), defaults to today

        Returns:
            Position now SOLD

        Raises:
            NotFoundError: If position not found
            InvalidStateError: If position is already SOLD
        """
        position = self.get_position(position_id)
        try:
            new_status = get_next_position_status(
                PositionStatus(position.status), "sell"
            )
        except InvalidStateError:
            logger.warning(f"Rejected sale of position {position_id}: already sold")
            raise

        position = self.position_repo.update_position(
            position_id,
            {
                "status": new_status,
                "sold_price": sold_price,
                "sold_date": sold_date or date.today().isoformat(),
            },
        )
        logger.info(
            f"Sold position: {position.id} - {position.ticker} "
            f"{position.shares} shares at ${sold_price:,.2f}"
        )
        return position

    def update_position(self, position_id: str, position_data: PositionUpdate) -> Position:
        """Correct position fields.

        Raises:
            NotFoundError: If position not found
            InvalidArgumentError: If new shares is not a multiple of 100
        """
        self.get_position(position_id)
        changes = {
            field: value
            for field, value in position_data.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_POSITION_FIELDS
        }
        if "shares" in changes:
            self._validate_shares(changes["shares"])
        return self.position_repo.update_position(position_id, changes)

    def delete_position(self, position_id: str) -> None:
        """Delete a position; trades referencing it keep their link.

        Raises:
            NotFoundError: If position not found
        """
        if not self.position_repo.delete_position(position_id):
            logger.warning(f"Position not found for delete: {position_id}")
            raise NotFoundError(f"Position not found: {position_id}")
