"""Trade record database model.

Records one option contract position: a single strike, expiration and
type opened by one action. Tracks opening details, how and when the
trade left the OPEN state, and links to positions and roll partners.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from wheeltracker.server.database.session import Base


class Trade(Base):
    """Trade record model for option trades.

    Link columns (position_id, rolled_to_trade_id, rolled_from_trade_id)
    are informational back-references without foreign key constraints;
    deleting either side leaves the other untouched.

    Attributes:
        id: Unique identifier (UUID as string)
        ticker: Stock ticker symbol (upper-case)
        option_type: "PUT" or "CALL"
        action: Opening action ("SELL_TO_OPEN", "BUY_TO_OPEN", ...)
        strike: Strike price of the option
        expiration: Expiration date (ISO format YYYY-MM-DD)
        premium: Premium per share on the opening leg
        quantity: Number of contracts (100 shares each)
        open_date: Timestamp when trade was opened
        close_date: Timestamp when trade left OPEN (if applicable)
        close_premium: Premium per share paid to close (if applicable)
        close_method: "BUYBACK", "ROLL", "EXPIRED" or "ASSIGNED"
        status: "OPEN", "CLOSED", "ASSIGNED", "EXPIRED" or "ROLLED"
        notes: Free-text notes
        position_id: Position created by assignment (if applicable)
        rolled_to_trade_id: Successor trade when rolled
        rolled_from_trade_id: Predecessor trade when opened by a roll
        created_at: Row creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "trades"

    # Columns
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    ticker = Column(String, nullable=False, index=True)
    option_type = Column(String, nullable=False)
    action = Column(String, nullable=False, default="SELL_TO_OPEN")
    strike = Column(Float, nullable=False)
    expiration = Column(String, nullable=False, index=True)
    premium = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    open_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    close_date = Column(DateTime, nullable=True)
    close_premium = Column(Float, nullable=True)
    close_method = Column(String, nullable=True)
    status = Column(String, nullable=False, default="OPEN", index=True)
    notes = Column(Text, nullable=True)
    position_id = Column(String, nullable=True)
    rolled_to_trade_id = Column(String, nullable=True)
    rolled_from_trade_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            Formatted string with trade details
        """
        return (
            f"<Trade(id={self.id}, ticker={self.ticker}, "
            f"type={self.option_type}, strike={self.strike}, "
            f"expiration={self.expiration}, status={self.status})>"
        )
