"""
Ledger service: the core of the bookkeeping system.

This service enforces the fundamental rules:
1. Every line item is one-sided (debit or credit, never both)
2. A voucher balances when its debits equal its credits within 0.01
3. Posted vouchers are amended only by correction, never in place
4. A voucher is corrected at most once (ACTIVE -> SUPERSEDED)

Correction vouchers and their line items are written in the
caller's transaction. The caller commits on success and rolls
back on any error, so a correction is never half applied.
"""

import logging
from decimal import Decimal

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from bookkeeping.errors import (
    ValidationError,
    NotFoundError,
    ConflictError,
    from_schema_error,
)
from bookkeeping.models.enums import BalanceSide
from bookkeeping.models.line_item import LineItem
from bookkeeping.models.voucher import Voucher
from bookkeeping.schemas.ledger import LedgerEntryResponse
from bookkeeping.schemas.line_item import LinePosting, VoucherLineResponse
from bookkeeping.schemas.voucher import (
    VoucherCreate,
    VoucherHeader,
    VoucherUpdate,
    VoucherResponse,
    VoucherDetailResponse,
    is_valid_period,
)
from bookkeeping.stores.account_store import AccountStore
from bookkeeping.stores.line_item_store import LineItemStore
from bookkeeping.stores.voucher_store import VoucherStore

logger = logging.getLogger(__name__)

# Debits and credits closer than this are considered equal
BALANCE_TOLERANCE = Decimal("0.01")

CORRECTION_DESCRIPTION = "Correction of voucher #{number}: {description}"
DESCRIPTION_MAX_LENGTH = 255


def debit_total(lines) -> Decimal:
    """
    The total amount of a voucher: the sum of its debits.

    Every voucher total in the system is computed this way,
    whether the voucher was entered directly, reversed or
    replaced by a correction.
    """
    return sum((line.debit_amount for line in lines), Decimal("0"))


class LedgerService:
    """
    All voucher and ledger operations pass through this service.

    The service takes a database session as a constructor
    argument; the caller controls the transaction boundary.
    """

    def __init__(self, db: Session):
        self.db = db
        self.vouchers = VoucherStore(db)
        self.line_items = LineItemStore(db)
        self.accounts = AccountStore(db)

    # --- Helpers ---

    def _get_voucher(self, voucher_id: int) -> Voucher:
        if voucher_id <= 0:
            raise ValidationError("invalid voucher ID")
        voucher = self.vouchers.get_by_id(voucher_id)
        if voucher is None:
            raise NotFoundError(f"Voucher {voucher_id} not found")
        return voucher

    def _lock_voucher(self, voucher_id: int) -> Voucher:
        """Like _get_voucher, but re-reads and locks the row."""
        if voucher_id <= 0:
            raise ValidationError("invalid voucher ID")
        voucher = self.vouchers.get_for_update(voucher_id)
        if voucher is None:
            raise NotFoundError(f"Voucher {voucher_id} not found")
        return voucher

    def _require_accounts(self, lines: list[LinePosting]) -> None:
        wanted = {line.account_no for line in lines}
        missing = wanted - set(self.accounts.get_many(wanted))
        if missing:
            raise NotFoundError(f"Accounts not found: {sorted(missing)}")

    def _add_lines(self, voucher: Voucher, lines: list[LinePosting]) -> list[LineItem]:
        created = []
        for posting in lines:
            created.append(self.line_items.create(LineItem(
                voucher_id=voucher.id,
                account_no=posting.account_no,
                debit_amount=posting.debit_amount,
                credit_amount=posting.credit_amount,
                tax_code=posting.tax_code,
                project_id=posting.project_id,
                cost_center_id=posting.cost_center_id,
            )))
        return created

    @staticmethod
    def _ensure_not_corrected(voucher: Voucher) -> None:
        if voucher.is_superseded:
            logger.warning(
                "Voucher #%s already corrected by voucher %s",
                voucher.voucher_number, voucher.corrected_by_voucher_id,
            )
            raise ConflictError(
                f"Voucher #{voucher.voucher_number} has already been corrected"
            )

    @staticmethod
    def _require_actor(actor_id: int) -> None:
        if actor_id <= 0:
            raise ValidationError("invalid user ID")

    # --- Voucher creation and reads ---

    def create_voucher(
        self, request: VoucherCreate, lines: list[LinePosting]
    ) -> Voucher:
        """
        Create a voucher and its line items.

        The header and every line have already passed their
        schema constraints; here the referenced accounts must
        exist. The voucher is inserted first so each line can be
        attached to the store-assigned voucher id.
        """
        self._require_accounts(lines)

        voucher = self.vouchers.create(Voucher(
            date=request.date,
            description=request.description,
            reference=request.reference,
            period=request.period,
            created_by=request.created_by,
            total_amount=debit_total(lines),
        ))
        self._add_lines(voucher, lines)

        logger.info(
            "Created voucher #%s (%s lines, total %s)",
            voucher.voucher_number, len(lines), voucher.total_amount,
        )
        return voucher

    def get_voucher(self, voucher_id: int) -> Voucher:
        return self._get_voucher(voucher_id)

    def get_voucher_detail(self, voucher_id: int) -> VoucherDetailResponse:
        """
        A voucher with its line items and account names.

        This is everything a document renderer needs to print
        the voucher.
        """
        voucher = self._get_voucher(voucher_id)
        lines = self.line_items.list_by_voucher(voucher.id)
        accounts = self.accounts.get_many({line.account_no for line in lines})

        detail_lines = []
        for line in lines:
            account = accounts.get(line.account_no)
            detail_lines.append(VoucherLineResponse(
                id=line.id,
                voucher_id=line.voucher_id,
                account_no=line.account_no,
                account_name=account.account_name if account else "",
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                tax_code=line.tax_code,
                project_id=line.project_id,
                cost_center_id=line.cost_center_id,
            ))

        header = VoucherResponse.model_validate(voucher)
        return VoucherDetailResponse(**header.model_dump(), lines=detail_lines)

    def list_vouchers(self) -> list[Voucher]:
        """All vouchers, newest voucher number first."""
        return self.vouchers.get_all()

    def list_vouchers_by_period(self, period: str) -> list[Voucher]:
        if not is_valid_period(period):
            raise ValidationError(
                "period must be in format YYYY-MM (e.g. '2025-01')"
            )
        return self.vouchers.get_by_period(period)

    def list_vouchers_by_creator(self, user_id: int) -> list[Voucher]:
        self._require_actor(user_id)
        return self.vouchers.get_by_creator(user_id)

    def find_vouchers(
        self, period: str | None = None, created_by: int | None = None
    ) -> list[Voucher]:
        """Vouchers matching every filter given, newest first."""
        if period is not None and created_by is not None:
            if not is_valid_period(period):
                raise ValidationError(
                    "period must be in format YYYY-MM (e.g. '2025-01')"
                )
            self._require_actor(created_by)
            return self.vouchers.get_by_period_and_creator(period, created_by)
        if period is not None:
            return self.list_vouchers_by_period(period)
        if created_by is not None:
            return self.list_vouchers_by_creator(created_by)
        return self.list_vouchers()

    def list_periods(self) -> list[str]:
        return self.vouchers.get_all_periods()

    # --- Privileged maintenance ---

    def update_voucher(self, voucher_id: int, request: VoucherUpdate) -> Voucher:
        """
        Update the header of an active voucher.

        A superseded voucher is kept exactly as it was when it
        was corrected, so it cannot be updated.
        """
        voucher = self._get_voucher(voucher_id)
        self._ensure_not_corrected(voucher)

        voucher.date = request.date
        voucher.description = request.description
        voucher.reference = request.reference
        voucher.period = request.period
        return self.vouchers.update(voucher)

    def delete_voucher(self, voucher_id: int) -> None:
        """
        Irreversibly delete a voucher and its line items.

        This is not a correction. Vouchers on either end of a
        correction chain cannot be deleted, since that would
        leave the other side pointing at nothing.
        """
        voucher = self._get_voucher(voucher_id)
        if voucher.is_linked:
            raise ConflictError(
                f"Voucher #{voucher.voucher_number} is part of a correction "
                f"chain and cannot be deleted"
            )

        removed = self.line_items.delete_all_for_voucher(voucher.id)
        self.vouchers.delete(voucher.id)
        logger.info(
            "Deleted voucher #%s and %s line items",
            voucher.voucher_number, removed,
        )

    # --- Balance ---

    def validate_balance(self, voucher_id: int) -> bool:
        """
        Check that a voucher's debits equal its credits.

        Debits and credits are summed independently; the voucher
        balances when they differ by less than BALANCE_TOLERANCE.
        """
        voucher = self._get_voucher(voucher_id)
        lines = self.line_items.list_by_voucher(voucher.id)

        total_debits = sum((line.debit_amount for line in lines), Decimal("0"))
        total_credits = sum((line.credit_amount for line in lines), Decimal("0"))
        return abs(total_debits - total_credits) < BALANCE_TOLERANCE

    def find_unbalanced_vouchers(self) -> list[int]:
        """Ids of every voucher whose line items do not balance."""
        return [
            voucher_id for voucher_id in self.vouchers.ids()
            if not self.validate_balance(voucher_id)
        ]

    # --- Corrections ---

    def _link_correction(
        self,
        original: Voucher,
        correction: Voucher,
        lines: list[LinePosting],
    ) -> Voucher:
        """
        Insert a correction voucher, claim the original, then add lines.

        The original is claimed with a conditional update right
        after the correction header exists. If another request
        got there first, the header is removed again and the
        ConflictError propagates.
        """
        self.vouchers.create_correction(correction, original.id)
        try:
            self.vouchers.mark_corrected(original.id, correction.id)
        except ConflictError:
            self.vouchers.delete(correction.id)
            raise

        self._add_lines(correction, lines)
        logger.info(
            "Voucher #%s corrected by voucher #%s",
            original.voucher_number, correction.voucher_number,
        )
        return correction

    def create_correction(self, original_id: int, actor_id: int) -> Voucher:
        """
        Reverse a voucher.

        The correction carries the original's date, reference and
        period, and one line per original line with debit and
        credit swapped. The original becomes SUPERSEDED.
        """
        self._require_actor(actor_id)
        original = self._lock_voucher(original_id)
        self._ensure_not_corrected(original)

        reversed_lines = [
            LinePosting(
                account_no=line.account_no,
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                tax_code=line.tax_code,
                project_id=line.project_id,
                cost_center_id=line.cost_center_id,
            ).reversed()
            for line in self.line_items.list_by_voucher(original.id)
        ]

        description = CORRECTION_DESCRIPTION.format(
            number=original.voucher_number,
            description=original.description,
        )
        correction = Voucher(
            date=original.date,
            description=description[:DESCRIPTION_MAX_LENGTH],
            reference=original.reference,
            period=original.period,
            created_by=actor_id,
            total_amount=debit_total(reversed_lines),
        )
        return self._link_correction(original, correction, reversed_lines)

    def create_correction_with_changes(
        self,
        original_id: int,
        actor_id: int,
        new_date,
        new_description: str,
        new_reference: str,
        new_period: str,
        new_lines: list[LinePosting],
    ) -> Voucher:
        """
        Replace a voucher with a corrected one.

        Same linkage as create_correction, but the header fields
        and line items come from the caller instead of being a
        mechanical reversal of the original.
        """
        self._require_actor(actor_id)
        try:
            header = VoucherHeader(
                date=new_date,
                description=new_description,
                reference=new_reference,
                period=new_period,
            )
        except SchemaValidationError as e:
            raise from_schema_error(e) from e
        if not new_lines:
            raise ValidationError("a corrected voucher needs at least one line item")

        original = self._lock_voucher(original_id)
        self._ensure_not_corrected(original)
        self._require_accounts(new_lines)

        correction = Voucher(
            date=header.date,
            description=header.description,
            reference=header.reference,
            period=header.period,
            created_by=actor_id,
            total_amount=debit_total(new_lines),
        )
        return self._link_correction(original, correction, new_lines)

    # --- Ledger ---

    def ledger_for(
        self, account_no: int, period: str | None = None
    ) -> list[LedgerEntryResponse]:
        """
        The chronological ledger of one account.

        The running balance starts at zero at the beginning of
        the window and moves in the account's normal direction:
        debit-side accounts grow with debits, credit-side
        accounts grow with credits.
        """
        if account_no <= 0:
            raise ValidationError("invalid account number")
        if period is not None and not is_valid_period(period):
            raise ValidationError(
                "period must be in format YYYY-MM (e.g. '2025-01')"
            )
        account = self.accounts.get_by_number(account_no)
        if account is None:
            raise NotFoundError(f"Account {account_no} not found")

        sign = 1 if account.standard_side == BalanceSide.DEBIT else -1
        balance = Decimal("0")
        entries = []
        for line, voucher in self.line_items.postings_for_account(account_no, period):
            balance += sign * (line.debit_amount - line.credit_amount)
            entries.append(LedgerEntryResponse(
                date=voucher.date,
                voucher_id=voucher.id,
                voucher_number=voucher.voucher_number,
                line_id=line.id,
                description=voucher.description,
                reference=voucher.reference,
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                balance=balance,
                superseded=voucher.is_superseded,
            ))
        return entries

