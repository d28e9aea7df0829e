"""Pydantic models for account settings."""

from datetime import datetime

from pydantic import BaseModel, Field


class AccountSettingsResponse(BaseModel):
    """Response schema for account capital settings."""

    total_capital: float = Field(..., description="Total account capital")
    cash_available: float = Field(..., description="Cash not yet deployed")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class AccountSettingsUpdate(BaseModel):
    """Request schema for setting account capital directly.

    Example:
        >>> AccountSettingsUpdate(total_capital=100000, cash_available=40000)
    """

    total_capital: float = Field(..., ge=0, description="Total account capital")
    cash_available: float = Field(..., ge=0, description="Cash not yet deployed")

    model_config = {
        "json_schema_extra": {
            "example": {"total_capital": 100000.0, "cash_available": 40000.0}
        }
    }


class CashMovementRequest(BaseModel):
    """Request schema for a deposit or withdrawal."""

    amount: float = Field(..., gt=0, description="Amount to move")

    model_config = {"json_schema_extra": {"example": {"amount": 5000.0}}}
