"""Pydantic models for Position API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from wheeltracker.server.models.common import (
    normalize_ticker,
    upper_enum_value,
    validate_iso_date,
)
from wheeltracker.wheel.state import AcquisitionType, PositionStatus


class PositionCreate(BaseModel):
    """Request schema for recording a share lot.

    Attributes:
        ticker: Stock ticker symbol
        shares: Number of shares (positive multiple of 100)
        cost_basis: Aggregate cost of the lot
        acquired_date: Acquisition date (YYYY-MM-DD)
        acquisition_type: ASSIGNED_PUT, ASSIGNED_CALL or DIRECT_PURCHASE
        notes: Free-text notes
    """

    ticker: str = Field(..., description="Stock ticker symbol")
    shares: int = Field(..., gt=0, description="Number of shares")
    cost_basis: float = Field(..., ge=0, description="Aggregate cost of the lot")
    acquired_date: str = Field(..., description="Acquisition date (YYYY-MM-DD)")
    acquisition_type: AcquisitionType = Field(
        default=AcquisitionType.DIRECT_PURCHASE, description="How shares were acquired"
    )
    notes: Optional[str] = Field(None, description="Free-text notes")

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: str) -> str:
        """Normalize ticker to upper-case."""
        return normalize_ticker(v)

    @field_validator("acquired_date")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate acquisition date format (YYYY-MM-DD)."""
        return validate_iso_date(v)

    @field_validator("acquisition_type", mode="before")
    @classmethod
    def upper_acquisition_type(cls, v):
        return upper_enum_value(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "ticker": "AAPL",
                "shares": 100,
                "cost_basis": 15000.0,
                "acquired_date": "2026-01-16",
                "acquisition_type": "ASSIGNED_PUT",
            }
        }
    }


class PositionUpdate(BaseModel):
    """Request schema for correcting position details.

    All fields are optional. Only provided fields will be updated.
    """

    ticker: Optional[str] = Field(None, description="Stock ticker symbol")
    shares: Optional[int] = Field(None, gt=0, description="Number of shares")
    cost_basis: Optional[float] = Field(None, ge=0, description="Aggregate cost")
    acquired_date: Optional[str] = Field(None, description="Acquisition date")
    acquisition_type: Optional[AcquisitionType] = Field(
        None, description="How shares were acquired"
    )
    status: Optional[PositionStatus] = Field(None, description="OPEN or SOLD")
    sold_date: Optional[str] = Field(None, description="Sale date")
    sold_price: Optional[float] = Field(None, ge=0, description="Sale price")
    notes: Optional[str] = Field(None, description="Free-text notes")

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: Optional[str]) -> Optional[str]:
        """Normalize ticker if provided."""
        if v is None:
            return v
        return normalize_ticker(v)

    @field_validator("acquired_date", "sold_date")
    @classmethod
    def validate_date_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate date format if provided."""
        if v is None:
            return v
        return validate_iso_date(v)

    @field_validator("acquisition_type", "status", mode="before")
    @classmethod
    def upper_enums(cls, v):
        return upper_enum_value(v)


class PositionSellRequest(BaseModel):
    """Request schema for selling a share lot.

    Attributes:
        sold_price: Sale price
        sold_date: Sale date (defaults to today)
    """

    sold_price: float = Field(..., ge=0, description="Sale price")
    sold_date: Optional[str] = Field(None, description="Sale date (YYYY-MM-DD)")

    @field_validator("sold_date")
    @classmethod
    def validate_date_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate sale date format if provided."""
        if v is None:
            return v
        return validate_iso_date(v)

    model_config = {"json_schema_extra": {"example": {"sold_price": 160.0}}}


class PositionResponse(BaseModel):
    """Response schema for position data."""

    id: str = Field(..., description="Unique position identifier")
    ticker: str = Field(..., description="Stock ticker symbol")
    shares: int = Field(..., description="Number of shares")
    cost_basis: float = Field(..., description="Aggregate cost of the lot")
    acquired_date: str = Field(..., description="Acquisition date")
    acquisition_type: str = Field(..., description="How shares were acquired")
    status: str = Field(..., description="OPEN or SOLD")
    sold_date: Optional[str] = Field(None, description="Sale date")
    sold_price: Optional[float] = Field(None, description="Sale price")
    notes: Optional[str] = Field(None, description="Free-text notes")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}
