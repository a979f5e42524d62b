"""
Report service: financial statements derived from line items.

Reports read only vouchers that have not been superseded:
when a voucher is corrected, only its replacement counts.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from bookkeeping.errors import ValidationError
from bookkeeping.schemas.report import (
    IncomeStatementEntry,
    IncomeStatementResponse,
    ReportPeriod,
)
from bookkeeping.schemas.voucher import parse_calendar_date
from bookkeeping.stores.line_item_store import LineItemStore

# Account number ranges of the income statement
INCOME_ACCOUNTS = range(3000, 4000)
EXPENSE_ACCOUNTS = range(4000, 9000)


def _parse_report_date(value: str, field: str) -> datetime:
    if not value:
        raise ValidationError(f"{field} is required")
    try:
        return parse_calendar_date(value)
    except ValueError:
        raise ValidationError(
            f"invalid {field} format, expected YYYY-MM-DD"
        ) from None


class ReportService:

    def __init__(self, db: Session):
        self.db = db
        self.line_items = LineItemStore(db)

    def income_statement(
        self, from_date: str, to_date: str
    ) -> IncomeStatementResponse:
        """
        Income statement for vouchers dated from_date to to_date, inclusive.

        Each P&L account's balance is debit minus credit. Accounts
        3000-3999 are income, 4000-8999 are expenses; accounts with
        a zero balance are left out. The net result is the sum of
        both totals.
        """
        start = _parse_report_date(from_date, "from_date")
        end = _parse_report_date(to_date, "to_date")
        if start > end:
            raise ValidationError("from_date must be before or equal to to_date")

        statement = IncomeStatementResponse(
            period=ReportPeriod(from_date=from_date, to_date=to_date)
        )

        # to_date covers the whole day
        balances = self.line_items.profit_and_loss_balances(
            start, end + timedelta(days=1)
        )
        for account_no, account_name, balance in balances:
            if balance == 0:
                continue
            entry = IncomeStatementEntry(
                account_no=account_no,
                account_name=account_name,
                balance=balance,
            )
            if account_no in INCOME_ACCOUNTS:
                statement.income.append(entry)
                statement.total_income += balance
            elif account_no in EXPENSE_ACCOUNTS:
                statement.expenses.append(entry)
                statement.total_expenses += balance

        statement.net_result = statement.total_income + statement.total_expenses
        return statement
