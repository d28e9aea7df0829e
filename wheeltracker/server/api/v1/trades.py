"""Trade API endpoints.

This module provides REST API endpoints for option trades: recording,
correcting and deleting trades, and moving open trades through their
lifecycle by buyback, expiration, assignment or roll.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from wheeltracker.server.database.session import get_db
from wheeltracker.server.models.trade import (
    TradeAssignRequest,
    TradeCloseRequest,
    TradeCloseWithMethodRequest,
    TradeCreate,
    TradeResponse,
    TradeRollRequest,
    TradeRollResponse,
    TradeUpdate,
    UnrealizedPnLResponse,
)
from wheeltracker.server.services.analytics_service import AnalyticsService
from wheeltracker.server.services.trade_service import TradeService
from wheeltracker.wheel.state import TradeStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trades"])


@router.post(
    "/trades",
    response_model=TradeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a new trade",
    description="Records a new OPEN option trade",
)
def create_trade(
    trade: TradeCreate,
    db: Session = Depends(get_db),
) -> TradeResponse:
    """Record a new option trade.

    Args:
        trade: Trade creation data
        db: Database session

    Returns:
        Created trade data

    Example:
        >>> POST /api/v1/trades
        >>> {
        >>>     "ticker": "AAPL",
        >>>     "option_type": "PUT",
        >>>     "strike": 150.0,
        >>>     "expiration": "2026-03-20",
        >>>     "premium": 2.50,
        >>>     "quantity": 1
        >>> }
    """
    created = TradeService(db).create_trade(trade)
    return TradeResponse.model_validate(created)


@router.get(
    "/trades",
    response_model=list[TradeResponse],
    summary="List trades",
    description="Retrieves trades with optional ticker and status filtering",
)
def list_trades(
    ticker: Optional[str] = Query(None, description="Filter by ticker symbol"),
    status_filter: Optional[TradeStatus] = Query(
        None, alias="status", description="Filter by status (OPEN, CLOSED, ...)"
    ),
    db: Session = Depends(get_db),
) -> list[TradeResponse]:
    """List trades ordered by open date, most recent first.

    Example:
        >>> GET /api/v1/trades?ticker=AAPL&status=OPEN
    """
    trades = TradeService(db).list_trades(ticker=ticker, status=status_filter)
    return [TradeResponse.model_validate(t) for t in trades]


@router.get(
    "/trades/{trade_id}",
    response_model=TradeResponse,
    summary="Get trade details",
)
def get_trade(
    trade_id: str,
    db: Session = Depends(get_db),
) -> TradeResponse:
    """Get a trade by ID.

    Raises:
        NotFoundError: If trade not found (404)
    """
    return TradeResponse.model_validate(TradeService(db).get_trade(trade_id))


@router.patch(
    "/trades/{trade_id}",
    response_model=TradeResponse,
    summary="Correct trade details",
    description="Updates provided fields without lifecycle checks",
)
def update_trade(
    trade_id: str,
    trade_update: TradeUpdate,
    db: Session = Depends(get_db),
) -> TradeResponse:
    """Correct trade fields.

    Only fields present in the request body are written.

    Example:
        >>> PATCH /api/v1/trades/3f2a...
        >>> {"premium": 2.75}
    """
    updated = TradeService(db).update_trade(trade_id, trade_update)
    return TradeResponse.model_validate(updated)


@router.delete(
    "/trades/{trade_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete trade",
    description="Deletes a trade record in any status",
)
def delete_trade(
    trade_id: str,
    db: Session = Depends(get_db),
) -> None:
    """Delete a trade.

    Linked positions and roll partners keep their references.
    """
    TradeService(db).delete_trade(trade_id)


@router.post(
    "/trades/{trade_id}/close",
    response_model=TradeResponse,
    summary="Buy back a trade",
    description="Closes an OPEN trade by buying it back",
)
def close_trade(
    trade_id: str,
    close_request: TradeCloseRequest,
    db: Session = Depends(get_db),
) -> TradeResponse:
    """Buy back an open trade.

    Raises:
        NotFoundError: If trade not found (404)
        InvalidStateError: If trade is not OPEN (409)

    Example:
        >>> POST /api/v1/trades/3f2a.../close
        >>> {"close_premium": 0.50}
    """
    trade = TradeService(db).close_trade(trade_id, close_request.close_premium)
    return TradeResponse.model_validate(trade)


@router.post(
    "/trades/{trade_id}/close-with-method",
    response_model=TradeResponse,
    summary="Close a trade by method",
    description="Closes an OPEN trade by BUYBACK, EXPIRED or ASSIGNED",
)
def close_trade_with_method(
    trade_id: str,
    close_request: TradeCloseWithMethodRequest,
    db: Session = Depends(get_db),
) -> TradeResponse:
    """Close an open trade by the given method.

    BUYBACK needs close_premium and ASSIGNED needs position_id.

    Raises:
        NotFoundError: If trade or position not found (404)
        InvalidArgumentError: If a required field is missing or method is ROLL (400)
        InvalidStateError: If trade is not OPEN (409)

    Example:
        >>> POST /api/v1/trades/3f2a.../close-with-method
        >>> {"method": "EXPIRED"}
    """
    trade = TradeService(db).close_trade_with_method(
        trade_id,
        close_request.method,
        close_premium=close_request.close_premium,
        position_id=close_request.position_id,
    )
    return TradeResponse.model_validate(trade)


@router.post(
    "/trades/{trade_id}/assign",
    response_model=TradeResponse,
    summary="Mark trade assigned",
    description="Marks an OPEN trade ASSIGNED and links an existing position",
)
def assign_trade(
    trade_id: str,
    assign_request: TradeAssignRequest,
    db: Session = Depends(get_db),
) -> TradeResponse:
    """Mark a trade assigned.

    Example:
        >>> POST /api/v1/trades/3f2a.../assign
        >>> {"position_id": "9c1e..."}
    """
    trade = TradeService(db).assign_trade(trade_id, assign_request.position_id)
    return TradeResponse.model_validate(trade)


@router.post(
    "/trades/{trade_id}/roll",
    response_model=TradeRollResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Roll a trade",
    description="Closes an OPEN trade as ROLLED and opens its successor",
)
def roll_trade(
    trade_id: str,
    roll_request: TradeRollRequest,
    db: Session = Depends(get_db),
) -> TradeRollResponse:
    """Roll an open trade to a new strike and expiration.

    Returns:
        The rolled trade and the new OPEN trade, linked to each other

    Example:
        >>> POST /api/v1/trades/3f2a.../roll
        >>> {"strike": 145.0, "expiration": "2026-04-17", "premium": 1.80}
    """
    old_trade, new_trade = TradeService(db).roll_trade(trade_id, roll_request)
    return TradeRollResponse(
        rolled_trade=TradeResponse.model_validate(old_trade),
        new_trade=TradeResponse.model_validate(new_trade),
    )


@router.get(
    "/trades/{trade_id}/unrealized-pnl",
    response_model=UnrealizedPnLResponse,
    summary="Unrealized P&L for a trade",
    description="Marks an OPEN trade to the stored option price",
)
def get_trade_unrealized_pnl(
    trade_id: str,
    db: Session = Depends(get_db),
) -> UnrealizedPnLResponse:
    """Mark-to-market P&L of a trade; 0 when closed or unpriced."""
    trade = TradeService(db).get_trade(trade_id)
    pnl = AnalyticsService(db).get_trade_unrealized_pnl(trade_id)
    return UnrealizedPnLResponse(id=trade.id, ticker=trade.ticker, unrealized_pnl=pnl)
