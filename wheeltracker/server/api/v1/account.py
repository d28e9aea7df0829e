"""Account settings API endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wheeltracker.server.database.session import get_db
from wheeltracker.server.models.account import (
    AccountSettingsResponse,
    AccountSettingsUpdate,
    CashMovementRequest,
)
from wheeltracker.server.services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["account"])


@router.get(
    "/account",
    response_model=AccountSettingsResponse,
    summary="Get account settings",
)
def get_account(db: Session = Depends(get_db)) -> AccountSettingsResponse:
    """Current total capital and available cash."""
    return AccountSettingsResponse.model_validate(AccountService(db).get_settings())


@router.put(
    "/account",
    response_model=AccountSettingsResponse,
    summary="Set account capital",
)
def update_account(
    account_update: AccountSettingsUpdate,
    db: Session = Depends(get_db),
) -> AccountSettingsResponse:
    """Overwrite total capital and available cash.

    Example:
        >>> PUT /api/v1/account
        >>> {"total_capital": 100000.0, "cash_available": 40000.0}
    """
    settings = AccountService(db).update_settings(
        account_update.total_capital, account_update.cash_available
    )
    return AccountSettingsResponse.model_validate(settings)


@router.post(
    "/account/deposit",
    response_model=AccountSettingsResponse,
    summary="Deposit cash",
)
def deposit(
    movement: CashMovementRequest,
    db: Session = Depends(get_db),
) -> AccountSettingsResponse:
    """Add to total capital and available cash."""
    return AccountSettingsResponse.model_validate(
        AccountService(db).deposit(movement.amount)
    )


@router.post(
    "/account/withdraw",
    response_model=AccountSettingsResponse,
    summary="Withdraw cash",
)
def withdraw(
    movement: CashMovementRequest,
    db: Session = Depends(get_db),
) -> AccountSettingsResponse:
    """Subtract from total capital and available cash.

    Raises:
        InvalidArgumentError: If amount exceeds available cash (400)
    """
    return AccountSettingsResponse.model_validate(
        AccountService(db).withdraw(movement.amount)
    )
