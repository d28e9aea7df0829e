"""Service layer for account capital settings."""

import logging

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.account import AccountSettings
from wheeltracker.server.repositories.account import AccountRepository
from wheeltracker.wheel.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class AccountService:
    """Service for reading and adjusting account capital.

    Attributes:
        db: SQLAlchemy database session
        account_repo: Repository for the account settings row
    """

    def __init__(self, db: Session):
        self.db = db
        self.account_repo = AccountRepository(db)

    def get_settings(self) -> AccountSettings:
        """Current total capital and available cash."""
        return self.account_repo.get_settings()

    def update_settings(self, total_capital: float, cash_available: float) -> AccountSettings:
        """Set capital and cash directly.

        Raises:
            InvalidArgumentError: If either figure is negative
        """
        if total_capital < 0 or cash_available < 0:
            logger.warning(
                f"Rejected account update: capital {total_capital}, cash {cash_available}"
            )
            raise InvalidArgumentError("Capital and cash must not be negative")
        return self.account_repo.save_settings(total_capital, cash_available)

    def deposit(self, amount: float) -> AccountSettings:
        """Add funds to both total capital and available cash.

        Raises:
            InvalidArgumentError: If amount is not positive
        """
        self._validate_amount(amount)
        settings = self.account_repo.get_settings()
        logger.info(f"Deposit: ${amount:,.2f}")
        return self.account_repo.save_settings(
            settings.total_capital + amount,
            settings.cash_available + amount,
        )

    def withdraw(self, amount: float) -> AccountSettings:
        """Remove funds from both total capital and available cash.

        Raises:
            InvalidArgumentError: If amount is not positive or exceeds cash
        """
        self._validate_amount(amount)
        settings = self.account_repo.get_settings()
        if amount > settings.cash_available:
            logger.warning(
                f"Rejected withdrawal of ${amount:,.2f}: only "
                f"${settings.cash_available:,.2f} available"
            )
            raise InvalidArgumentError(
                f"Insufficient cash: requested ${amount:,.2f} but only "
                f"${settings.cash_available:,.2f} available"
            )
        logger.info(f"Withdrawal: ${amount:,.2f}")
        return self.account_repo.save_settings(
            settings.total_capital - amount,
            settings.cash_available - amount,
        )

    @staticmethod
    def _validate_amount(amount: float) -> None:
        if amount <= 0:
            logger.warning(f"Rejected cash movement of {amount}")
            raise InvalidArgumentError("Amount must be positive")
