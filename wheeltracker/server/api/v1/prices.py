"""Price snapshot API endpoints.

Snapshots are entered by hand and only feed unrealized P&L; nothing
here fetches market data.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from wheeltracker.server.database.session import get_db
from wheeltracker.server.models.price import (
    PriceBulkUpsert,
    PriceBulkUpsertResponse,
    PriceResponse,
    PriceUpsert,
)
from wheeltracker.server.services.price_service import PriceService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prices"])


@router.get(
    "/prices",
    response_model=Union[PriceResponse, list[PriceResponse]],
    summary="Get price snapshots",
    description="One snapshot when ticker is given, otherwise all of them",
)
def get_prices(
    ticker: Optional[str] = Query(None, description="Ticker symbol"),
    db: Session = Depends(get_db),
) -> Union[PriceResponse, list[PriceResponse]]:
    """Get one or all price snapshots.

    Raises:
        NotFoundError: If ticker is given and has no snapshot (404)

    Example:
        >>> GET /api/v1/prices?ticker=AAPL
    """
    service = PriceService(db)
    if ticker:
        return PriceResponse.model_validate(service.get_price(ticker))
    return [PriceResponse.model_validate(p) for p in service.list_prices()]


@router.post(
    "/prices",
    response_model=PriceResponse,
    summary="Upsert a price snapshot",
)
def upsert_price(
    price: PriceUpsert,
    db: Session = Depends(get_db),
) -> PriceResponse:
    """Create or update a ticker's snapshot; omitted fields keep old values.

    Example:
        >>> POST /api/v1/prices
        >>> {"ticker": "AAPL", "stock_price": 152.30, "option_price": 1.10}
    """
    stored = PriceService(db).upsert_price(price.ticker, price.model_dump())
    return PriceResponse.model_validate(stored)


@router.put(
    "/prices",
    response_model=PriceBulkUpsertResponse,
    summary="Bulk upsert price snapshots",
)
def bulk_upsert_prices(
    bulk: PriceBulkUpsert,
    db: Session = Depends(get_db),
) -> PriceBulkUpsertResponse:
    """Upsert several snapshots in one request."""
    updated = PriceService(db).bulk_upsert([p.model_dump() for p in bulk.prices])
    return PriceBulkUpsertResponse(updated=updated)
