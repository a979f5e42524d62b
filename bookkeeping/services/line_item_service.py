"""
Line item service: single postings outside the voucher workflow.

Used to build up or edit a voucher line by line. Lines of a
superseded voucher are kept unchanged for audit, so they can
no longer be added, edited or removed here. The owning
voucher's total is refreshed after every change.
"""

from sqlalchemy.orm import Session

from bookkeeping.errors import ValidationError, NotFoundError, ConflictError
from bookkeeping.models.line_item import LineItem
from bookkeeping.models.voucher import Voucher
from bookkeeping.schemas.line_item import LineItemCreate, LineItemUpdate
from bookkeeping.stores.account_store import AccountStore
from bookkeeping.stores.line_item_store import LineItemStore
from bookkeeping.stores.voucher_store import VoucherStore


class LineItemService:

    def __init__(self, db: Session):
        self.db = db
        self.line_items = LineItemStore(db)
        self.vouchers = VoucherStore(db)
        self.accounts = AccountStore(db)

    def _editable_voucher(self, voucher_id: int) -> Voucher:
        voucher = self.vouchers.get_by_id(voucher_id)
        if voucher is None:
            raise NotFoundError(f"Voucher {voucher_id} not found")
        if voucher.is_superseded:
            raise ConflictError(
                f"Voucher #{voucher.voucher_number} has been corrected "
                f"and its line items can no longer change"
            )
        return voucher

    def _require_account(self, account_no: int) -> None:
        if self.accounts.get_by_number(account_no) is None:
            raise NotFoundError(f"Account {account_no} not found")

    def _refresh_total(self, voucher: Voucher) -> None:
        voucher.total_amount = self.line_items.debit_total(voucher.id)
        self.vouchers.update(voucher)

    def create_line_item(self, request: LineItemCreate) -> LineItem:
        voucher = self._editable_voucher(request.voucher_id)
        self._require_account(request.account_no)

        line_item = self.line_items.create(LineItem(
            voucher_id=voucher.id,
            account_no=request.account_no,
            debit_amount=request.debit_amount,
            credit_amount=request.credit_amount,
            tax_code=request.tax_code,
            project_id=request.project_id,
            cost_center_id=request.cost_center_id,
        ))
        self._refresh_total(voucher)
        return line_item

    def get_line_item(self, line_id: int) -> LineItem:
        if line_id <= 0:
            raise ValidationError("invalid line item ID")
        line_item = self.line_items.get_by_id(line_id)
        if line_item is None:
            raise NotFoundError(f"Line item {line_id} not found")
        return line_item

    def list_by_voucher(self, voucher_id: int) -> list[LineItem]:
        if voucher_id <= 0:
            raise ValidationError("invalid voucher ID")
        return self.line_items.list_by_voucher(voucher_id)

    def list_by_account(self, account_no: int) -> list[LineItem]:
        if account_no <= 0:
            raise ValidationError("invalid account number")
        return self.line_items.list_by_account(account_no)

    def update_line_item(self, line_id: int, request: LineItemUpdate) -> LineItem:
        line_item = self.get_line_item(line_id)
        voucher = self._editable_voucher(line_item.voucher_id)
        self._require_account(request.account_no)

        line_item.account_no = request.account_no
        line_item.debit_amount = request.debit_amount
        line_item.credit_amount = request.credit_amount
        line_item.tax_code = request.tax_code
        line_item.project_id = request.project_id
        line_item.cost_center_id = request.cost_center_id
        self.line_items.update(line_item)
        self._refresh_total(voucher)
        return line_item

    def delete_line_item(self, line_id: int) -> None:
        line_item = self.get_line_item(line_id)
        voucher = self._editable_voucher(line_item.voucher_id)
        self.line_items.delete(line_id)
        self._refresh_total(voucher)
