"""API v1 router with core endpoints.

This module provides version 1 of the API: the resource routers plus
system information.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Request, status

from wheeltracker.server.api.v1 import account, analytics, positions, prices, trades
from wheeltracker.server.database.migrate import current_revision
from wheeltracker.server.models.common import InfoResponse

logger = logging.getLogger(__name__)

# Create v1 router
router = APIRouter(
    prefix="/api/v1",
    tags=["v1"],
)

# Include sub-routers
router.include_router(trades.router)
router.include_router(positions.router)
router.include_router(analytics.router)
router.include_router(account.router)
router.include_router(prices.router)


@router.get(
    "/info",
    response_model=InfoResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system information",
    description="Returns system information including version and database status",
)
def get_info(request: Request) -> InfoResponse:
    """Get system information endpoint.

    Returns application name, version, status, database connectivity
    and the applied schema revision.

    Example:
        >>> GET /api/v1/info
        >>> {
        >>>     "app_name": "Wheel Tracker API",
        >>>     "version": "1.0.0",
        >>>     "status": "running",
        >>>     "database_connected": true,
        >>>     "schema_revision": "0002",
        >>>     "timestamp": "2026-02-10T10:00:00"
        >>> }
    """
    settings = request.app.state.settings
    database = request.app.state.database

    db_connected = database.check_connection()
    revision = current_revision(database.engine) if db_connected else None

    return InfoResponse(
        app_name=settings.app_name,
        version=settings.version,
        status="running",
        database_connected=db_connected,
        schema_revision=revision,
        timestamp=datetime.utcnow(),
    )
