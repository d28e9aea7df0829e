"""Common Pydantic models for API requests and responses.

This module contains shared response models used across the API.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service health status
        timestamp: Current server timestamp
    """

    status: str = Field(default="healthy", description="Service health status")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Current server timestamp"
    )


class InfoResponse(BaseModel):
    """System information response model.

    Attributes:
        app_name: Application name
        version: Application version
        status: Service status
        database_connected: Whether database connection is working
        schema_revision: Applied migration revision
        timestamp: Current server timestamp
    """

    app_name: str = Field(..., description="Application name")
    version: str = Field(..., description="Application version")
    status: str = Field(default="running", description="Service status")
    database_connected: bool = Field(
        ..., description="Database connection status"
    )
    schema_revision: Optional[str] = Field(
        default=None, description="Applied migration revision"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Current server timestamp"
    )


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Error type or code
        message: Human-readable error message
        detail: Additional error details
        timestamp: When the error occurred
    """

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[Any] = Field(
        default=None, description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Error timestamp"
    )


def normalize_ticker(v: str) -> str:
    """Strip and upper-case a ticker symbol.

    Raises:
        ValueError: If the ticker is empty
    """
    v = v.strip().upper()
    if not v:
        raise ValueError("Ticker must not be empty")
    return v


def validate_iso_date(v: str) -> str:
    """Validate a YYYY-MM-DD date string.

    Raises:
        ValueError: If the format is invalid
    """
    v = v.strip()
    try:
        date.fromisoformat(v)
    except ValueError as e:
        raise ValueError("Date must be in YYYY-MM-DD format") from e
    return v


def upper_enum_value(v: Any) -> Any:
    """Upper-case string enum input so 'put' and 'PUT' both validate."""
    if isinstance(v, str):
        return v.strip().upper()
    return v


def to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Convert an offset-aware timestamp to naive UTC, matching stored timestamps."""
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v
