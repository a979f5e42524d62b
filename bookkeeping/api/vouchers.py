"""
Voucher API endpoints.

Creating, reading and correcting vouchers is open to every
authenticated caller. Editing or deleting a voucher outright
is an Admin-only operation; everyone else amends a voucher by
correcting it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.api.deps import Actor, get_current_actor, require_role
from bookkeeping.errors import BookkeepingError, ConsistencyError
from bookkeeping.models.base import get_db
from bookkeeping.models.enums import UserRole
from bookkeeping.schemas.voucher import (
    VoucherCreateRequest,
    VoucherUpdate,
    CorrectionWithChangesRequest,
    VoucherResponse,
    VoucherDetailResponse,
    BalanceCheckResponse,
)
from bookkeeping.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vouchers", tags=["Vouchers"])


def _http_error(db: Session, e: BookkeepingError) -> HTTPException:
    db.rollback()
    if isinstance(e, ConsistencyError):
        logger.error("Voucher operation failed: %s", e)
    return HTTPException(status_code=e.status_code, detail=str(e))


@router.post("", response_model=VoucherResponse, status_code=201)
def create_voucher(
    request: VoucherCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """
    Create a voucher with its line items.

    Every line must be one-sided and reference an existing
    account. The voucher and all lines are committed together.
    """
    service = LedgerService(db)
    try:
        voucher = service.create_voucher(request, request.lines)
        db.commit()
        return voucher
    except BookkeepingError as e:
        raise _http_error(db, e)


@router.get("", response_model=list[VoucherResponse])
def list_vouchers(
    period: str | None = None,
    created_by: int | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """List vouchers newest first, filtered by period, creator or both."""
    service = LedgerService(db)
    try:
        return service.find_vouchers(period=period, created_by=created_by)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/periods", response_model=list[str])
def list_periods(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Every period that has at least one voucher, newest first."""
    return LedgerService(db).list_periods()


@router.get("/{voucher_id}", response_model=VoucherDetailResponse)
def get_voucher(
    voucher_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """A voucher with its line items and account names."""
    service = LedgerService(db)
    try:
        return service.get_voucher_detail(voucher_id)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{voucher_id}/validate", response_model=BalanceCheckResponse)
def validate_voucher_balance(
    voucher_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    service = LedgerService(db)
    try:
        balanced = service.validate_balance(voucher_id)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return BalanceCheckResponse(voucher_id=voucher_id, is_balanced=balanced)


@router.post(
    "/{voucher_id}/correct",
    response_model=VoucherResponse,
    status_code=201,
)
def correct_voucher(
    voucher_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Reverse a voucher. The original becomes superseded."""
    service = LedgerService(db)
    try:
        correction = service.create_correction(voucher_id, actor.user_id)
        db.commit()
        return correction
    except BookkeepingError as e:
        raise _http_error(db, e)


@router.post(
    "/{voucher_id}/correct-with-changes",
    response_model=VoucherResponse,
    status_code=201,
)
def correct_voucher_with_changes(
    voucher_id: int,
    request: CorrectionWithChangesRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Replace a voucher with a corrected one. The original becomes superseded."""
    service = LedgerService(db)
    try:
        correction = service.create_correction_with_changes(
            voucher_id,
            actor.user_id,
            request.date,
            request.description,
            request.reference,
            request.period,
            request.lines,
        )
        db.commit()
        return correction
    except BookkeepingError as e:
        raise _http_error(db, e)


@router.put("/{voucher_id}", response_model=VoucherResponse)
def update_voucher(
    voucher_id: int,
    request: VoucherUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(UserRole.ADMIN)),
):
    service = LedgerService(db)
    try:
        voucher = service.update_voucher(voucher_id, request)
        db.commit()
        return voucher
    except BookkeepingError as e:
        raise _http_error(db, e)


@router.delete("/{voucher_id}", status_code=204)
def delete_voucher(
    voucher_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_role(UserRole.ADMIN)),
):
    service = LedgerService(db)
    try:
        service.delete_voucher(voucher_id)
        db.commit()
    except BookkeepingError as e:
        raise _http_error(db, e)
