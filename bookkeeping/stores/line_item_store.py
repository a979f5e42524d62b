"""
Line item store: persistence for debit/credit postings.

Besides plain CRUD it holds the two aggregate reads the
engine needs: postings per account (for the ledger) and
net debit-minus-credit per P&L account (for reports).
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, delete, func

from bookkeeping.models.account import Account
from bookkeeping.models.enums import AccountType
from bookkeeping.models.line_item import LineItem
from bookkeeping.models.voucher import Voucher
from bookkeeping.stores.base import BaseStore

# Amounts are stored with four decimals
AMOUNT_QUANTUM = Decimal("0.0001")


def _amount(value) -> Decimal:
    """Normalize an aggregate (float on some backends) to a 4-decimal Decimal."""
    return Decimal(str(value or 0)).quantize(AMOUNT_QUANTUM)


class LineItemStore(BaseStore):

    def create(self, line_item: LineItem) -> LineItem:
        self.db.add(line_item)
        self._flush(f"line item for voucher {line_item.voucher_id}")
        return line_item

    def get_by_id(self, line_id: int) -> LineItem | None:
        return self.db.get(LineItem, line_id)

    def list_by_voucher(self, voucher_id: int) -> list[LineItem]:
        items = self.db.execute(
            select(LineItem)
            .where(LineItem.voucher_id == voucher_id)
            .order_by(LineItem.id)
        ).scalars().all()
        return list(items)

    def list_by_account(self, account_no: int) -> list[LineItem]:
        items = self.db.execute(
            select(LineItem)
            .where(LineItem.account_no == account_no)
            .order_by(LineItem.id)
        ).scalars().all()
        return list(items)

    def update(self, line_item: LineItem) -> LineItem:
        self._flush(f"line item {line_item.id}")
        return line_item

    def delete(self, line_id: int) -> None:
        self._execute(
            delete(LineItem).where(LineItem.id == line_id),
            f"line item {line_id}",
        )
        self._flush(f"line item {line_id}")

    def delete_all_for_voucher(self, voucher_id: int) -> int:
        """Delete every line of a voucher. Deleting nothing is not an error."""
        result = self._execute(
            delete(LineItem).where(LineItem.voucher_id == voucher_id),
            f"line items of voucher {voucher_id}",
        )
        self._flush(f"line items of voucher {voucher_id}")
        return result.rowcount

    def debit_total(self, voucher_id: int) -> Decimal:
        total = self.db.execute(
            select(func.coalesce(func.sum(LineItem.debit_amount), 0))
            .where(LineItem.voucher_id == voucher_id)
        ).scalar()
        return _amount(total)

    def postings_for_account(
        self, account_no: int, period: str | None = None
    ) -> list[tuple[LineItem, Voucher]]:
        """Every posting to an account with its voucher, in posting order."""
        query = (
            select(LineItem, Voucher)
            .join(Voucher, LineItem.voucher_id == Voucher.id)
            .where(LineItem.account_no == account_no)
        )
        if period is not None:
            query = query.where(Voucher.period == period)
        query = query.order_by(Voucher.date, Voucher.voucher_number, LineItem.id)
        return [(row[0], row[1]) for row in self.db.execute(query).all()]

    def profit_and_loss_balances(
        self, start: datetime, end: datetime
    ) -> list[tuple[int, str, Decimal]]:
        """
        Net debit-minus-credit per P&L account over [start, end).

        Lines of superseded vouchers are skipped: once a voucher
        has been corrected only its replacement is reported.
        """
        balance = func.sum(LineItem.debit_amount - LineItem.credit_amount)
        rows = self.db.execute(
            select(Account.account_no, Account.account_name, balance)
            .select_from(LineItem)
            .join(Voucher, LineItem.voucher_id == Voucher.id)
            .join(Account, LineItem.account_no == Account.account_no)
            .where(
                Voucher.date >= start,
                Voucher.date < end,
                Voucher.corrected_by_voucher_id.is_(None),
                Account.type == AccountType.PROFIT_AND_LOSS,
            )
            .group_by(Account.account_no, Account.account_name)
            .order_by(Account.account_no)
        ).all()
        return [
            (account_no, name, _amount(total))
            for account_no, name, total in rows
        ]
