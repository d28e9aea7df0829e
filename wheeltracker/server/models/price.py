"""Pydantic models for manually entered price snapshots."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from wheeltracker.server.models.common import (
    normalize_ticker,
    upper_enum_value,
    validate_iso_date,
)
from wheeltracker.wheel.state import OptionType


class PriceUpsert(BaseModel):
    """Request schema for creating or updating a ticker's snapshot.

    Fields left out keep their previously stored values.
    """

    ticker: str = Field(..., description="Ticker symbol")
    stock_price: Optional[float] = Field(None, ge=0, description="Stock price")
    option_price: Optional[float] = Field(None, ge=0, description="Option mark price")
    strike: Optional[float] = Field(None, gt=0, description="Strike of the quoted option")
    expiration: Optional[str] = Field(None, description="Expiration of the quoted option")
    option_type: Optional[OptionType] = Field(None, description="Type of the quoted option")

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: str) -> str:
        """Normalize ticker to upper-case."""
        return normalize_ticker(v)

    @field_validator("expiration")
    @classmethod
    def validate_date_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_iso_date(v)

    @field_validator("option_type", mode="before")
    @classmethod
    def upper_option_type(cls, v):
        return upper_enum_value(v)

    model_config = {
        "json_schema_extra": {
            "example": {"ticker": "AAPL", "stock_price": 152.30, "option_price": 1.10}
        }
    }


class PriceBulkUpsert(BaseModel):
    """Request schema for upserting several snapshots at once."""

    prices: list[PriceUpsert] = Field(..., description="Snapshots to upsert")


class PriceBulkUpsertResponse(BaseModel):
    """Response schema for a bulk upsert."""

    updated: int = Field(..., description="Number of snapshots written")


class PriceResponse(BaseModel):
    """Response schema for a price snapshot."""

    ticker: str = Field(..., description="Ticker symbol")
    stock_price: Optional[float] = Field(None, description="Stock price")
    option_price: Optional[float] = Field(None, description="Option mark price")
    strike: Optional[float] = Field(None, description="Strike of the quoted option")
    expiration: Optional[str] = Field(None, description="Expiration of the quoted option")
    option_type: Optional[str] = Field(None, description="Type of the quoted option")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}
