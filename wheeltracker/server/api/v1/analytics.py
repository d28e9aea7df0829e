"""Analytics API endpoints.

This module exposes per-ticker and portfolio metrics and the list of
known tickers. All endpoints are read-only.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wheeltracker.server.database.session import get_db
from wheeltracker.server.models.analytics import (
    EnhancedPortfolioMetricsResponse,
    PortfolioMetricsResponse,
    TickerListResponse,
    TickerMetricsResponse,
)
from wheeltracker.server.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


@router.get(
    "/analytics/portfolio",
    response_model=PortfolioMetricsResponse,
    summary="Portfolio metrics",
    description="Premium, realized P&L, win rate and return across all tickers",
)
def get_portfolio_metrics(db: Session = Depends(get_db)) -> PortfolioMetricsResponse:
    """Portfolio-wide metrics.

    Example:
        >>> GET /api/v1/analytics/portfolio
        >>> {"total_premium_collected": 300.0, "total_realized_pnl": 200.0, ...}
    """
    metrics = AnalyticsService(db).get_portfolio_metrics()
    return PortfolioMetricsResponse.model_validate(metrics)


@router.get(
    "/analytics/portfolio/enhanced",
    response_model=EnhancedPortfolioMetricsResponse,
    summary="Enhanced portfolio metrics",
    description="Portfolio metrics plus account cash usage and unrealized P&L",
)
def get_enhanced_portfolio_metrics(
    db: Session = Depends(get_db),
) -> EnhancedPortfolioMetricsResponse:
    """Portfolio metrics combined with account capital and price snapshots."""
    metrics = AnalyticsService(db).get_enhanced_portfolio_metrics()
    return EnhancedPortfolioMetricsResponse.model_validate(metrics)


@router.get(
    "/analytics/tickers/{ticker}",
    response_model=TickerMetricsResponse,
    summary="Ticker metrics",
)
def get_ticker_metrics(
    ticker: str,
    db: Session = Depends(get_db),
) -> TickerMetricsResponse:
    """Metrics for one ticker (case-insensitive)."""
    metrics = AnalyticsService(db).get_ticker_metrics(ticker)
    return TickerMetricsResponse.model_validate(metrics)


@router.get(
    "/tickers",
    response_model=TickerListResponse,
    tags=["tickers"],
    summary="List tickers",
    description="Sorted distinct tickers across trades and positions",
)
def list_tickers(db: Session = Depends(get_db)) -> TickerListResponse:
    """Every ticker that has a trade or a position."""
    tickers = AnalyticsService(db).get_all_tickers()
    return TickerListResponse(tickers=tickers, count=len(tickers))
