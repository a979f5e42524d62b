"""
Chart-of-accounts API endpoints, including the account ledger.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.errors import BookkeepingError
from bookkeeping.models.base import get_db
from bookkeeping.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
)
from bookkeeping.schemas.ledger import LedgerEntryResponse
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.ledger_service import LedgerService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Add an account to the chart of accounts."""
    service = AccountService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except BookkeepingError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    group: int | None = None,
    db: Session = Depends(get_db),
):
    """List all accounts, optionally restricted to one account group."""
    service = AccountService(db)
    try:
        if group is not None:
            return service.list_accounts_by_group(group)
        return service.list_accounts()
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{account_no}", response_model=AccountResponse)
def get_account(
    account_no: int,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        return service.get_account(account_no)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{account_no}", response_model=AccountResponse)
def update_account(
    account_no: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        account = service.update_account(account_no, request)
        db.commit()
        return account
    except BookkeepingError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{account_no}", status_code=204)
def delete_account(
    account_no: int,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        service.delete_account(account_no)
        db.commit()
    except BookkeepingError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{account_no}/ledger", response_model=list[LedgerEntryResponse])
def get_account_ledger(
    account_no: int,
    period: str | None = None,
    db: Session = Depends(get_db),
):
    """
    Chronological postings to an account with a running balance.

    Without a period the whole history is returned; with one,
    the balance restarts from zero at the start of that period.
    """
    service = LedgerService(db)
    try:
        return service.ledger_for(account_no, period or None)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
