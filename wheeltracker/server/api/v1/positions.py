"""Position API endpoints.

This module provides REST API endpoints for share lots and the covered
call allocation of their shares.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from wheeltracker.server.database.session import get_db
from wheeltracker.server.models.analytics import AllocationResponse
from wheeltracker.server.models.position import (
    PositionCreate,
    PositionResponse,
    PositionSellRequest,
    PositionUpdate,
)
from wheeltracker.server.models.trade import UnrealizedPnLResponse
from wheeltracker.server.services.analytics_service import AnalyticsService
from wheeltracker.server.services.position_service import PositionService
from wheeltracker.wheel.state import PositionStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["positions"])


@router.post(
    "/positions",
    response_model=PositionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a share lot",
)
def create_position(
    position: PositionCreate,
    db: Session = Depends(get_db),
) -> PositionResponse:
    """Record a new OPEN share lot.

    Raises:
        InvalidArgumentError: If shares is not a multiple of 100 (400)

    Example:
        >>> POST /api/v1/positions
        >>> {
        >>>     "ticker": "AAPL",
        >>>     "shares": 100,
        >>>     "cost_basis": 15000.0,
        >>>     "acquired_date": "2026-01-16",
        >>>     "acquisition_type": "ASSIGNED_PUT"
        >>> }
    """
    created = PositionService(db).create_position(position)
    return PositionResponse.model_validate(created)


@router.get(
    "/positions",
    response_model=list[PositionResponse],
    summary="List positions",
)
def list_positions(
    ticker: Optional[str] = Query(None, description="Filter by ticker symbol"),
    status_filter: Optional[PositionStatus] = Query(
        None, alias="status", description="Filter by status (OPEN, SOLD)"
    ),
    db: Session = Depends(get_db),
) -> list[PositionResponse]:
    """List positions ordered by acquisition date, most recent first."""
    positions = PositionService(db).list_positions(ticker=ticker, status=status_filter)
    return [PositionResponse.model_validate(p) for p in positions]


@router.get(
    "/positions/allocation",
    response_model=list[AllocationResponse],
    summary="Covered call allocation",
    description="Shares covered by open calls, for one ticker or every ticker",
)
def get_allocation(
    ticker: Optional[str] = Query(None, description="Limit to one ticker"),
    db: Session = Depends(get_db),
) -> list[AllocationResponse]:
    """Covered call allocation.

    Example:
        >>> GET /api/v1/positions/allocation?ticker=AAPL
        >>> [{"ticker": "AAPL", "total_shares": 300, "allocated_shares": 200, ...}]
    """
    service = AnalyticsService(db)
    if ticker:
        allocations = [service.get_covered_call_allocation(ticker)]
    else:
        allocations = service.get_all_allocations()
    return [AllocationResponse.model_validate(a) for a in allocations]


@router.get(
    "/positions/{position_id}",
    response_model=PositionResponse,
    summary="Get position details",
)
def get_position(
    position_id: str,
    db: Session = Depends(get_db),
) -> PositionResponse:
    """Get a position by ID."""
    return PositionResponse.model_validate(PositionService(db).get_position(position_id))


@router.patch(
    "/positions/{position_id}",
    response_model=PositionResponse,
    summary="Correct position details",
)
def update_position(
    position_id: str,
    position_update: PositionUpdate,
    db: Session = Depends(get_db),
) -> PositionResponse:
    """Correct position fields; only provided fields are written."""
    updated = PositionService(db).update_position(position_id, position_update)
    return PositionResponse.model_validate(updated)


@router.delete(
    "/positions/{position_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete position",
)
def delete_position(
    position_id: str,
    db: Session = Depends(get_db),
) -> None:
    """Delete a position."""
    PositionService(db).delete_position(position_id)


@router.post(
    "/positions/{position_id}/sell",
    response_model=PositionResponse,
    summary="Sell a share lot",
)
def sell_position(
    position_id: str,
    sell_request: PositionSellRequest,
    db: Session = Depends(get_db),
) -> PositionResponse:
    """Mark an OPEN position SOLD.

    Raises:
        InvalidStateError: If position is already SOLD (409)

    Example:
        >>> POST /api/v1/positions/9c1e.../sell
        >>> {"sold_price": 160.0, "sold_date": "2026-02-20"}
    """
    position = PositionService(db).sell_position(
        position_id, sell_request.sold_price, sell_request.sold_date
    )
    return PositionResponse.model_validate(position)


@router.get(
    "/positions/{position_id}/unrealized-pnl",
    response_model=UnrealizedPnLResponse,
    summary="Unrealized P&L for a position",
)
def get_position_unrealized_pnl(
    position_id: str,
    db: Session = Depends(get_db),
) -> UnrealizedPnLResponse:
    """Market value of a share lot less its cost basis; 0 when unpriced."""
    position = PositionService(db).get_position(position_id)
    pnl = AnalyticsService(db).get_position_unrealized_pnl(position_id)
    return UnrealizedPnLResponse(
        id=position.id, ticker=position.ticker, unrealized_pnl=pnl
    )
