"""
Report API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.errors import BookkeepingError
from bookkeeping.models.base import get_db
from bookkeeping.schemas.report import IncomeStatementResponse
from bookkeeping.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/income-statement", response_model=IncomeStatementResponse)
def get_income_statement(
    from_date: str,
    to_date: str,
    db: Session = Depends(get_db),
):
    """Income statement between two dates (YYYY-MM-DD), inclusive."""
    service = ReportService(db)
    try:
        return service.income_statement(from_date, to_date)
    except BookkeepingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
