"""Position database model.

Represents a lot of underlying shares acquired by assignment or direct
purchase. Share counts are always whole multiples of 100.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from wheeltracker.server.database.session import Base


class Position(Base):
    """Share lot model.

    Attributes:
        id: Unique identifier (UUID as string)
        ticker: Stock ticker symbol (upper-case)
        shares: Number of shares (positive multiple of 100)
        cost_basis: Aggregate cost of the whole lot
        acquired_date: Acquisition date (ISO format YYYY-MM-DD)
        acquisition_type: "ASSIGNED_PUT", "ASSIGNED_CALL" or "DIRECT_PURCHASE"
        status: "OPEN" or "SOLD"
        sold_date: Date the lot was sold (if applicable)
        sold_price: Sale price (if applicable)
        notes: Free-text notes
        created_at: Row creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "positions"

    # Columns
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    ticker = Column(String, nullable=False, index=True)
    shares = Column(Integer, nullable=False)
    cost_basis = Column(Float, nullable=False)
    acquired_date = Column(String, nullable=False)
    acquisition_type = Column(String, nullable=False)
    status = Column(String, nullable=False, default="OPEN", index=True)
    sold_date = Column(String, nullable=True)
    sold_price = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Position(id={self.id}, ticker={self.ticker}, "
            f"shares={self.shares}, status={self.status})>"
        )
