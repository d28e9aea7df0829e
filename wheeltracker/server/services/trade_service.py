"""Service layer for trade lifecycle operations.

This module applies the trade state machine from wheeltracker.wheel.state
to stored trades: buying back, expiring, assigning and rolling open
contracts, plus unrestricted corrections and deletes.
"""

import logging
from datetime import datetime
from typing import Optional, Union

from sqlalchemy.orm import Session

from wheeltracker.server.database.models.trade import Trade
from wheeltracker.server.models.trade import TradeCreate, TradeRollRequest, TradeUpdate
from wheeltracker.server.repositories.position import PositionRepository
from wheeltracker.server.repositories.trade import TradeRepository
from wheeltracker.wheel.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from wheeltracker.wheel.performance import net_premium
from wheeltracker.wheel.state import (
    CLOSE_METHOD_ACTIONS,
    CloseMethod,
    TradeStatus,
    get_next_status,
)

logger = logging.getLogger(__name__)

# Nullable columns a correction may clear by sending null
CLEARABLE_TRADE_FIELDS = (
    "close_date",
    "close_premium",
    "close_method",
    "notes",
    "position_id",
    "rolled_to_trade_id",
    "rolled_from_trade_id",
)


class TradeService:
    """Service layer for trade operations with state machine validation.

    Attributes:
        db: SQLAlchemy database session
        trade_repo: Repository for trade operations
        position_repo: Repository for position lookups on assignment
    """

    def __init__(self, db: Session):
        """Initialize trade service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.trade_repo = TradeRepository(db)
        self.position_repo = PositionRepository(db)

    def _next_status(self, trade: Trade, action: str) -> TradeStatus:
        try:
            return get_next_status(TradeStatus(trade.status), action)
        except InvalidStateError:
            logger.warning(
                f"Rejected {action} for trade {trade.id}: status is {trade.status}"
            )
            raise

    def create_trade(self, trade_data: TradeCreate) -> Trade:
        """Record a new OPEN trade.

        Args:
            trade_data: Validated trade creation data

        Returns:
            Created trade instance

        Example:
            >>> service = TradeService(db)
            >>> trade = service.create_trade(
            >>>     TradeCreate(ticker="aapl", option_type="PUT", strike=150.0, ...)
            >>> )
        """
        return self.trade_repo.create_trade(trade_data.model_dump())

    def get_trade(self, trade_id: str) -> Trade:
        """Get a trade.

        Raises:
            NotFoundError: If no trade has this id
        """
        trade = self.trade_repo.get_trade(trade_id)
        if not trade:
            logger.warning(f"Trade not found: {trade_id}")
            raise NotFoundError(f"Trade not found: {trade_id}")
        return trade

    def list_trades(
        self,
        ticker: Optional[str] = None,
        status: Optional[Union[TradeStatus, str]] = None,
    ) -> list[Trade]:
        """List trades, newest first, optionally filtered by ticker and status."""
        return self.trade_repo.list_trades(ticker=ticker, status=status)

    def close_trade(self, trade_id: str, close_premium: float) -> Trade:
        """Buy back an open trade.

        Args:
            trade_id: Trade identifier
            close_premium: Premium per share paid to close

        Returns:
            Trade now CLOSED with method BUYBACK

        Raises:
            NotFoundError: If trade not found
            InvalidStateError: If trade is not OPEN
        """
        return self.close_trade_with_method(
            trade_id, CloseMethod.BUYBACK, close_premium=close_premium
        )

    def close_trade_with_method(
        self,
        trade_id: str,
        method: Union[CloseMethod, str],
        close_premium: Optional[float] = None,
        position_id: Optional[str] = None,
    ) -> Trade:
        """Close an open trade by buyback, expiration or assignment.

        BUYBACK records close_premium, EXPIRED always records 0 and
        ASSIGNED links the trade to an existing position. Rolls go
        through roll_trade.

        Args:
            trade_id: Trade identifier
            method: How the trade left the OPEN state
            close_premium: Premium per share paid (BUYBACK)
            position_id: Position that received the shares (ASSIGNED)

        Returns:
            Updated trade instance

        Raises:
            NotFoundError: If trade or position not found
            InvalidArgumentError: If method is ROLL or its companion field is missing
            InvalidStateError: If trade is not OPEN

        Example:
            >>> service = TradeService(db)
            >>> trade = service.close_trade_with_method(trade_id, "EXPIRED")
        """
        trade = self.get_trade(trade_id)
        try:
            method = CloseMethod(method)
        except ValueError:
            logger.warning(f"Rejected close of {trade_id}: unknown method {method}")
            raise InvalidArgumentError(f"Unknown close method: {method}")

        if method == CloseMethod.ROLL:
            logger.warning(f"Rejected ROLL close for trade {trade_id}: use roll")
            raise InvalidArgumentError("Use the roll operation to roll a trade")

        new_status = self._next_status(trade, CLOSE_METHOD_ACTIONS[method])

        changes = {
            "status": new_status,
            "close_method": method,
            "close_date": datetime.utcnow(),
        }

        if method == CloseMethod.BUYBACK:
            if close_premium is None:
                logger.warning(f"Rejected buyback of {trade_id}: no close premium")
                raise InvalidArgumentError("close_premium is required for BUYBACK")
            changes["close_premium"] = close_premium
        elif method == CloseMethod.EXPIRED:
            changes["close_premium"] = 0.0
        elif method == CloseMethod.ASSIGNED:
            if not position_id:
                logger.warning(f"Rejected assignment of {trade_id}: no position")
                raise InvalidArgumentError("position_id is required for ASSIGNED")
            if not self.position_repo.get_position(position_id):
                logger.warning(f"Position not found for assignment: {position_id}")
                raise NotFoundError(f"Position not found: {position_id}")
            changes["position_id"] = position_id

        trade = self.trade_repo.update_trade(trade_id, changes)

        logger.info(
            f"Closed trade: {trade.id} - {trade.ticker} {method.value} -> "
            f"{trade.status} (net: ${net_premium(trade):,.2f})"
        )
        return trade

    def assign_trade(self, trade_id: str, position_id: str) -> Trade:
        """Mark a trade ASSIGNED and link it to a position.

        The position must already exist; assignment never creates one.
        """
        return self.close_trade_with_method(
            trade_id, CloseMethod.ASSIGNED, position_id=position_id
        )

    def roll_trade(
        self, trade_id: str, roll_data: TradeRollRequest
    ) -> tuple[Trade, Trade]:
        """Roll an open trade into a successor.

        The successor inherits ticker, and unless given, option type,
        action and quantity from the trade being rolled.

        Args:
            trade_id: Trade being rolled
            roll_data: Strike, expiration and premium of the successor

        Returns:
            Tuple of (rolled trade, new OPEN trade)

        Raises:
            NotFoundError: If trade not found
            InvalidStateError: If trade is not OPEN
        """
        old_trade = self.get_trade(trade_id)
        self._next_status(old_trade, "roll")

        new_data = {
            "ticker": old_trade.ticker,
            "option_type": roll_data.option_type or old_trade.option_type,
            "action": roll_data.action or old_trade.action,
            "strike": roll_data.strike,
            "expiration": roll_data.expiration,
            "premium": roll_data.premium,
            "quantity": roll_data.quantity or old_trade.quantity,
            "notes": roll_data.notes
            or f"Rolled from ${old_trade.strike} {old_trade.expiration}",
        }
        return self.trade_repo.roll_trade(old_trade, new_data)

    def update_trade(self, trade_id: str, trade_data: TradeUpdate) -> Trade:
        """Correct trade fields without state machine checks.

        Raises:
            NotFoundError: If trade not found
        """
        self.get_trade(trade_id)
        changes = {
            field: value
            for field, value in trade_data.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_TRADE_FIELDS
        }
        return self.trade_repo.update_trade(trade_id, changes)

    def delete_trade(self, trade_id: str) -> None:
        """Hard delete a trade in any status.

        Raises:
            NotFoundError: If trade not found
        """
        if not self.trade_repo.delete_trade(trade_id):
            logger.warning(f"Trade not found for delete: {trade_id}")
            raise NotFoundError(f"Trade not found: {trade_id}")
