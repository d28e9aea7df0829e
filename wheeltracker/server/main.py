"""FastAPI application entry point.

This module builds the FastAPI application with middleware, routers,
domain error handlers and core endpoints. The database is opened and
migrated in the application lifespan. No app object is built at import
time; serve it with ``wheeltracker serve`` or
``uvicorn --factory wheeltracker.server.main:create_app``.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wheeltracker.server import __version__
from wheeltracker.server.api.v1.router import router as v1_router
from wheeltracker.server.config import Settings, configure_logging
from wheeltracker.server.database.session import Database
from wheeltracker.server.models.common import ErrorResponse, HealthResponse
from wheeltracker.wheel.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    WheelError,
)

logger = logging.getLogger(__name__)

# HTTP status for each domain error
ERROR_STATUS_CODES: dict[type[WheelError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_409_CONFLICT,
}


def _error_response(status_code: int, error: str, message: str, detail=None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration to use (defaults to Settings() from environment)

    Returns:
        Configured FastAPI application

    Example:
        >>> app = create_app(Settings(database_path=":memory:"))
    """
    settings = settings or Settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{__version__}")
        logger.info(f"Debug mode: {settings.debug}")
        logger.info(f"Database path: {settings.database_path}")

        database = Database(settings.database_url, echo=settings.debug).init()
        app.state.database = database
        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.app_name}")
            database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Backend API for tracking wheel strategy option trades and share lots",
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS middleware for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],  # Allow all HTTP methods
        allow_headers=["*"],  # Allow all headers
    )

    # Include API routers
    app.include_router(v1_router)

    @app.get(
        "/health",
        response_model=HealthResponse,
        status_code=status.HTTP_200_OK,
        tags=["health"],
        summary="Health check endpoint",
        description="Returns service health status",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Example:
            >>> GET /health
            >>> {"status": "healthy", "timestamp": "2026-02-10T10:00:00"}
        """
        return HealthResponse(status="healthy", timestamp=datetime.utcnow())

    @app.get(
        "/",
        status_code=status.HTTP_200_OK,
        tags=["root"],
        summary="Root endpoint",
        description="Returns welcome message with API information",
    )
    async def root():
        """Root endpoint.

        Provides basic API information and links to documentation.
        """
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "api": "/api/v1/info",
        }

    # Error handlers
    @app.exception_handler(WheelError)
    async def wheel_error_handler(request: Request, exc: WheelError):
        """Map domain errors to their HTTP status codes."""
        status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return _error_response(status_code, type(exc).__name__, str(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            "An unexpected error occurred",
            str(exc) if settings.debug else None,
        )

    return app


def run(settings: Optional[Settings] = None) -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = settings or Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
