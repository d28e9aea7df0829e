"""Pydantic models for Trade API requests and responses.

This module contains request and response schemas for trade endpoints,
including validation rules and examples for option trade operations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from wheeltracker.server.models.common import (
    normalize_ticker,
    to_naive_utc,
    upper_enum_value,
    validate_iso_date,
)
from wheeltracker.wheel.state import CloseMethod, OptionType, TradeAction, TradeStatus


class TradeCreate(BaseModel):
    """Request schema for recording a new trade.

    Attributes:
        ticker: Underlying ticker symbol (normalized to upper-case)
        option_type: 'PUT' or 'CALL'
        action: Opening action (defaults to SELL_TO_OPEN)
        strike: Strike price
        expiration: Expiration date (YYYY-MM-DD)
        premium: Premium per share
        quantity: Number of contracts (100 shares each)
        open_date: When the trade was opened (defaults to now)
        notes: Free-text notes

    Example:
        >>> TradeCreate(
        >>>     ticker="AAPL",
        >>>     option_type="PUT",
        >>>     strike=150.0,
        >>>     expiration="2026-03-20",
        >>>     premium=2.50,
        >>>     quantity=1
        >>> )
    """

    ticker: str = Field(..., description="Underlying ticker symbol")
    option_type: OptionType = Field(..., description="Option type: PUT or CALL")
    action: TradeAction = Field(
        default=TradeAction.SELL_TO_OPEN, description="Opening action"
    )
    strike: float = Field(..., gt=0, description="Strike price")
    expiration: str = Field(..., description="Expiration date (YYYY-MM-DD)")
    premium: float = Field(..., ge=0, description="Premium per share")
    quantity: int = Field(..., ge=1, description="Number of contracts")
    open_date: Optional[datetime] = Field(None, description="Open timestamp")
    notes: Optional[str] = Field(None, description="Free-text notes")

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: str) -> str:
        """Normalize ticker to upper-case."""
        return normalize_ticker(v)

    @field_validator("expiration")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate expiration date format (YYYY-MM-DD)."""
        return validate_iso_date(v)

    @field_validator("option_type", "action", mode="before")
    @classmethod
    def upper_enums(cls, v):
        return upper_enum_value(v)

    @field_validator("open_date")
    @classmethod
    def normalize_open_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "ticker": "AAPL",
                "option_type": "PUT",
                "action": "SELL_TO_OPEN",
                "strike": 150.0,
                "expiration": "2026-03-20",
                "premium": 2.50,
                "quantity": 1,
            }
        }
    }


class TradeUpdate(BaseModel):
    """Request schema for correcting trade details.

    All fields are optional. Only provided fields will be updated. The
    trade state machine is not enforced here so data-entry mistakes can
    be fixed.

    Example:
        >>> TradeUpdate(premium=2.75, notes="fill corrected")
    """

    ticker: Optional[str] = Field(None, description="Underlying ticker symbol")
    option_type: Optional[OptionType] = Field(None, description="PUT or CALL")
    action: Optional[TradeAction] = Field(None, description="Opening action")
    strike: Optional[float] = Field(None, gt=0, description="Strike price")
    expiration: Optional[str] = Field(None, description="Expiration (YYYY-MM-DD)")
    premium: Optional[float] = Field(None, ge=0, description="Premium per share")
    quantity: Optional[int] = Field(None, ge=1, description="Number of contracts")
    open_date: Optional[datetime] = Field(None, description="Open timestamp")
    close_date: Optional[datetime] = Field(None, description="Close timestamp")
    close_premium: Optional[float] = Field(None, ge=0, description="Close premium")
    close_method: Optional[CloseMethod] = Field(None, description="Close method")
    status: Optional[TradeStatus] = Field(None, description="Trade status")
    notes: Optional[str] = Field(None, description="Free-text notes")
    position_id: Optional[str] = Field(None, description="Linked position")
    rolled_to_trade_id: Optional[str] = Field(None, description="Successor trade")
    rolled_from_trade_id: Optional[str] = Field(None, description="Predecessor trade")

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: Optional[str]) -> Optional[str]:
        """Normalize ticker if provided."""
        if v is None:
            return v
        return normalize_ticker(v)

    @field_validator("expiration")
    @classmethod
    def validate_date_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate expiration date format if provided."""
        if v is None:
            return v
        return validate_iso_date(v)

    @field_validator(
        "option_type", "action", "close_method", "status", mode="before"
    )
    @classmethod
    def upper_enums(cls, v):
        return upper_enum_value(v)

    @field_validator("open_date", "close_date")
    @classmethod
    def normalize_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Store offset timestamps as naive UTC."""
        return to_naive_utc(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "premium": 2.75,
                "quantity": 2,
            }
        }
    }


class TradeCloseRequest(BaseModel):
    """Request schema for buying back a trade.

    Attributes:
        close_premium: Premium per share paid to close
    """

    close_premium: float = Field(..., ge=0, description="Premium per share paid to close")

    model_config = {"json_schema_extra": {"example": {"close_premium": 0.50}}}


class TradeCloseWithMethodRequest(BaseModel):
    """Request schema for closing a trade by a chosen method.

    BUYBACK requires close_premium; ASSIGNED requires position_id;
    EXPIRED ignores close_premium and records 0.

    Attributes:
        method: BUYBACK, EXPIRED or ASSIGNED
        close_premium: Premium per share paid (BUYBACK only)
        position_id: Position receiving the shares (ASSIGNED only)
    """

    method: CloseMethod = Field(..., description="Close method")
    close_premium: Optional[float] = Field(None, ge=0, description="Close premium")
    position_id: Optional[str] = Field(None, description="Assigned position id")

    @field_validator("method", mode="before")
    @classmethod
    def upper_method(cls, v):
        return upper_enum_value(v)

    model_config = {
        "json_schema_extra": {"example": {"method": "BUYBACK", "close_premium": 0.25}}
    }


class TradeAssignRequest(BaseModel):
    """Request schema for marking a trade assigned.

    Attributes:
        position_id: Existing position the assignment produced
    """

    position_id: str = Field(..., min_length=1, description="Assigned position id")


class TradeRollRequest(BaseModel):
    """Request schema for rolling a trade into a successor.

    Fields left out are copied from the trade being rolled.

    Attributes:
        strike: New strike price
        expiration: New expiration date (YYYY-MM-DD)
        premium: Premium per share for the new trade
        quantity: Contracts for the new trade
        option_type: Option type for the new trade
        action: Opening action for the new trade
        notes: Notes for the new trade
    """

    strike: float = Field(..., gt=0, description="New strike price")
    expiration: str = Field(..., description="New expiration (YYYY-MM-DD)")
    premium: float = Field(..., ge=0, description="New premium per share")
    quantity: Optional[int] = Field(None, ge=1, description="New contracts")
    option_type: Optional[OptionType] = Field(None, description="New option type")
    action: Optional[TradeAction] = Field(None, description="New opening action")
    notes: Optional[str] = Field(None, description="Notes for the new trade")

    @field_validator("expiration")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate expiration date format (YYYY-MM-DD)."""
        return validate_iso_date(v)

    @field_validator("option_type", "action", mode="before")
    @classmethod
    def upper_enums(cls, v):
        return upper_enum_value(v)

    model_config = {
        "json_schema_extra": {
            "example": {"strike": 145.0, "expiration": "2026-04-17", "premium": 1.80}
        }
    }


class TradeResponse(BaseModel):
    """Response schema for trade data."""

    id: str = Field(..., description="Unique trade identifier")
    ticker: str = Field(..., description="Underlying ticker symbol")
    option_type: str = Field(..., description="PUT or CALL")
    action: str = Field(..., description="Opening action")
    strike: float = Field(..., description="Strike price")
    expiration: str = Field(..., description="Expiration date (YYYY-MM-DD)")
    premium: float = Field(..., description="Premium per share")
    quantity: int = Field(..., description="Number of contracts")
    open_date: datetime = Field(..., description="Open timestamp")
    close_date: Optional[datetime] = Field(None, description="Close timestamp")
    close_premium: Optional[float] = Field(None, description="Close premium per share")
    close_method: Optional[str] = Field(None, description="Close method")
    status: str = Field(..., description="Trade status")
    notes: Optional[str] = Field(None, description="Free-text notes")
    position_id: Optional[str] = Field(None, description="Linked position")
    rolled_to_trade_id: Optional[str] = Field(None, description="Successor trade")
    rolled_from_trade_id: Optional[str] = Field(None, description="Predecessor trade")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class TradeRollResponse(BaseModel):
    """Response schema for a roll: the closed trade and its successor."""

    rolled_trade: TradeResponse = Field(..., description="Trade now ROLLED")
    new_trade: TradeResponse = Field(..., description="Successor trade (OPEN)")


class UnrealizedPnLResponse(BaseModel):
    """Mark-to-market P&L for one trade or position."""

    id: str = Field(..., description="Trade or position identifier")
    ticker: str = Field(..., description="Underlying ticker symbol")
    unrealized_pnl: float = Field(..., description="Unrealized P&L in dollars")
