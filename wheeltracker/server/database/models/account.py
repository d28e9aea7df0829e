"""Account settings database model.

A single row holds the trading capital figures for the one account
the tracker manages. The row is created by the initial migration.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String

from wheeltracker.server.database.session import Base

DEFAULT_ACCOUNT_ID = "default"


class AccountSettings(Base):
    """Singleton account settings model.

    Attributes:
        id: Always "default"
        total_capital: Total trading capital
        cash_available: Uncommitted cash
        updated_at: Last modification timestamp
    """

    __tablename__ = "account_settings"

    id = Column(String, primary_key=True, default=DEFAULT_ACCOUNT_ID)
    total_capital = Column(Float, nullable=False, default=0.0)
    cash_available = Column(Float, nullable=False, default=0.0)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<AccountSettings(total_capital={self.total_capital}, "
            f"cash_available={self.cash_available})>"
        )
