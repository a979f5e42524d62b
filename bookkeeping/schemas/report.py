"""
Pydantic schemas for financial reports.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class ReportPeriod(BaseModel):
    from_date: str
    to_date: str


class IncomeStatementEntry(BaseModel):
    account_no: int
    account_name: str
    balance: Decimal


class IncomeStatementResponse(BaseModel):
    """
    Income statement over a date range.

    Balances are debit minus credit, so income shows as a
    negative figure and expenses as a positive one.
    """
    period: ReportPeriod
    income: list[IncomeStatementEntry] = Field(default_factory=list)
    expenses: list[IncomeStatementEntry] = Field(default_factory=list)
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_result: Decimal = Decimal("0")
