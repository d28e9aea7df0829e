"""Repository for the singleton account settings row."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.account import DEFAULT_ACCOUNT_ID, AccountSettings

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for account capital settings.

    Attributes:
        db: SQLAlchemy database session
    """

    def __init__(self, db: Session):
        self.db = db

    def get_settings(self) -> AccountSettings:
        """Get the account settings row, creating it with zeros if absent.

        Returns:
            AccountSettings instance
        """
        settings = (
            self.db.query(AccountSettings)
            .filter(AccountSettings.id == DEFAULT_ACCOUNT_ID)
            .first()
        )
        if settings is None:
            settings = AccountSettings(
                id=DEFAULT_ACCOUNT_ID, total_capital=0.0, cash_available=0.0
            )
            self.db.add(settings)
            self.db.commit()
            self.db.refresh(settings)
            logger.info("Created default account settings")
        return settings

    def save_settings(self, total_capital: float, cash_available: float) -> AccountSettings:
        """Overwrite capital and cash figures.

        Args:
            total_capital: New total capital
            cash_available: New available cash

        Returns:
            Updated AccountSettings instance
        """
        settings = self.get_settings()
        settings.total_capital = total_capital
        settings.cash_available = cash_available
        settings.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(settings)

        logger.info(
            f"Updated account settings: capital ${total_capital:,.2f}, "
            f"cash ${cash_available:,.2f}"
        )
        return settings
