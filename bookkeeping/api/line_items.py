"""
Line item API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.errors import BookkeepingError
from bookkeeping.models.base import get_db
from bookkeeping.schemas.line_item import (
    LineItemCreate,
    LineItemUpdate,
    LineItemResponse,
)
from bookkeeping.services.line_item_service import LineItemService

router = APIRouter(prefix="/line-items", tags=["Line Items"])


@router.post("", response_model=LineItemResponse, status_code=201)
def create_line_item(
    request: LineItemCreate,
    db: Session = Depends(get_db),
):
    """Add a posting to an existing, uncorrected voucher."""
    service = LineItemService(db)
    try:
        line_item = service.create_line_item(request)
        db.commit()
        return line_item
    except BookkeepingError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/voucher/{voucher_id}", response_model=list[LineItemResponse])
def list_line_items_by_voucher(
    voucher_id: int,
    db: Session = Depends(get_db),
):
    service = LineItemService(db)
    try:
        return service.list_by_voucher(voucher_id)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/account/{account_no}", response_model=list[LineItemResponse])
def list_line_items_by_account(
    account_no: int,
    db: Session = Depends(get_db),
):
    service = LineItemService(db)
    try:
        return service.list_by_account(account_no)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{line_id}", response_model=LineItemResponse)
def get_line_item(
    line_id: int,
    db: Session = Depends(get_db),
):
    service = LineItemService(db)
    try:
        return service.get_line_item(line_id)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{line_id}", response_model=LineItemResponse)
def update_line_item(
    line_id: int,
    request: LineItemUpdate,
    db: Session = Depends(get_db),
):
    service = LineItemService(db)
    try:
        line_item = service.update_line_item(line_id, request)
        db.commit()
        return line_item
    except BookkeepingError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{line_id}", status_code=204)
def delete_line_item(
    line_id: int,
    db: Session = Depends(get_db),
):
    service = LineItemService(db)
    try:
        service.delete_line_item(line_id)
        db.commit()
    except BookkeepingError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))
