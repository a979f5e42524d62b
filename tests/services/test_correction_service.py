"""
Tests for voucher corrections.

A posted voucher is never edited in place: it is corrected by
a new voucher, either a mechanical reversal or a replacement
with new header fields and lines. These tests cover the
linkage between the two and the at-most-once rule.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from bookkeeping.errors import ConflictError, NotFoundError, ValidationError
from bookkeeping.models.enums import AccountType, BalanceSide, VoucherState
from bookkeeping.models.voucher import Voucher
from bookkeeping.schemas.account import AccountCreate
from bookkeeping.schemas.line_item import LinePosting
from bookkeeping.schemas.voucher import VoucherCreate
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.ledger_service import LedgerService
from bookkeeping.stores.voucher_store import VoucherStore


def make_chart(db_session):
    accounts = AccountService(db_session)
    for no, account_type, side in [
        (1510, AccountType.BALANCE_SHEET, BalanceSide.DEBIT),
        (3010, AccountType.PROFIT_AND_LOSS, BalanceSide.CREDIT),
        (3040, AccountType.PROFIT_AND_LOSS, BalanceSide.CREDIT),
    ]:
        accounts.create_account(AccountCreate(
            account_no=no,
            account_name=f"Account {no}",
            account_group=int(str(no)[0]),
            type=account_type,
            standard_side=side,
        ))
    db_session.commit()


def make_sale(db_session, amount="1000"):
    """Voucher #1: credit sales, debit receivables."""
    service = LedgerService(db_session)
    voucher = service.create_voucher(
        VoucherCreate(
            date="2025-01-15",
            description="Sale to customer",
            reference="INV-1",
            period="2025-01",
            created_by=1,
        ),
        [
            LinePosting(account_no=3010, credit_amount=Decimal(amount), tax_code=3),
            LinePosting(account_no=1510, debit_amount=Decimal(amount), project_id=4),
        ],
    )
    db_session.commit()
    return voucher


def voucher_count(db_session):
    return db_session.execute(select(func.count(Voucher.id))).scalar()


class TestCreateCorrection:

    def test_reversal_swaps_every_line(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        correction = service.create_correction(original.id, actor_id=2)
        db_session.commit()

        lines = service.line_items.list_by_voucher(correction.id)
        assert [(l.account_no, l.debit_amount, l.credit_amount) for l in lines] == [
            (3010, Decimal("1000"), Decimal("0")),
            (1510, Decimal("0"), Decimal("1000")),
        ]
        assert lines[0].tax_code == 3
        assert lines[1].project_id == 4

    def test_reversal_copies_header(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        correction = service.create_correction(original.id, actor_id=2)
        db_session.commit()

        assert correction.date == datetime(2025, 1, 15)
        assert correction.reference == "INV-1"
        assert correction.period == "2025-01"
        assert correction.created_by == 2
        assert correction.description == "Correction of voucher #1: Sale to customer"
        assert correction.voucher_number == 2
        assert correction.total_amount == Decimal("1000")

    def test_links_are_mutual(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        correction = service.create_correction(original.id, actor_id=2)
        db_session.commit()

        original = service.get_voucher(original.id)
        assert original.corrected_by_voucher_id == correction.id
        assert correction.corrects_voucher_id == original.id
        assert original.state == VoucherState.SUPERSEDED
        assert correction.state == VoucherState.ACTIVE

    def test_original_lines_untouched(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        service.create_correction(original.id, actor_id=2)
        db_session.commit()

        lines = service.line_items.list_by_voucher(original.id)
        assert [(l.debit_amount, l.credit_amount) for l in lines] == [
            (Decimal("0"), Decimal("1000")),
            (Decimal("1000"), Decimal("0")),
        ]

    def test_second_correction_rejected(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)
        service.create_correction(original.id, actor_id=2)
        db_session.commit()

        with pytest.raises(ConflictError, match="already been corrected"):
            service.create_correction(original.id, actor_id=2)
        db_session.rollback()

        assert voucher_count(db_session) == 2

    def test_correction_can_itself_be_corrected(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)
        first = service.create_correction(original.id, actor_id=2)
        db_session.commit()

        second = service.create_correction(first.id, actor_id=2)
        db_session.commit()

        assert second.corrects_voucher_id == first.id
        assert service.get_voucher(first.id).is_superseded

    def test_missing_original(self, db_session):
        with pytest.raises(NotFoundError):
            LedgerService(db_session).create_correction(99, actor_id=2)

    def test_invalid_actor(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)

        with pytest.raises(ValidationError, match="invalid user ID"):
            LedgerService(db_session).create_correction(original.id, actor_id=0)

    def test_losing_concurrent_correction_leaves_nothing_behind(
        self, db_session, second_session
    ):
        """
        Two requests load the same active voucher; the other one
        commits its correction first. Ours must fail with a conflict
        and must not leave an orphaned correction voucher.
        """
        make_chart(db_session)
        original = make_sale(db_session)
        ours = LedgerService(db_session)
        assert ours.get_voucher(original.id).is_superseded is False

        theirs = LedgerService(second_session)
        winner = theirs.create_correction(original.id, actor_id=3)
        second_session.commit()

        with pytest.raises(ConflictError, match="already been corrected"):
            ours.create_correction(original.id, actor_id=2)
        db_session.rollback()

        corrections = db_session.execute(
            select(Voucher).where(Voucher.corrects_voucher_id == original.id)
        ).scalars().all()
        assert [v.id for v in corrections] == [winner.id]
        assert ours.get_voucher(original.id).corrected_by_voucher_id == winner.id


class TestCreateCorrectionWithChanges:

    def correct(self, service, original_id, lines=None, **overrides):
        fields = dict(
            new_date="2025-01-16",
            new_description="Sale to customer, corrected amount",
            new_reference="INV-1-B",
            new_period="2025-01",
        )
        fields.update(overrides)
        if lines is None:
            lines = [
                LinePosting(account_no=3040, credit_amount=Decimal("800")),
                LinePosting(account_no=1510, debit_amount=Decimal("800")),
            ]
        return service.create_correction_with_changes(
            original_id, 2, new_lines=lines, **fields
        )

    def test_replacement_voucher(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        correction = self.correct(service, original.id)
        db_session.commit()

        assert correction.corrects_voucher_id == original.id
        assert correction.description == "Sale to customer, corrected amount"
        assert correction.reference == "INV-1-B"
        assert correction.date == datetime(2025, 1, 16)
        assert correction.total_amount == Decimal("800")
        assert service.get_voucher(original.id).corrected_by_voucher_id == correction.id

        lines = service.line_items.list_by_voucher(correction.id)
        assert [l.account_no for l in lines] == [3040, 1510]

    def test_total_is_sum_of_debits(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        correction = self.correct(service, original.id, lines=[
            LinePosting(account_no=3010, credit_amount=Decimal("900")),
            LinePosting(account_no=1510, debit_amount=Decimal("600")),
            LinePosting(account_no=1510, debit_amount=Decimal("300")),
        ])

        assert correction.total_amount == Decimal("900")

    def test_already_corrected(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)
        service.create_correction(original.id, actor_id=2)
        db_session.commit()

        with pytest.raises(ConflictError):
            self.correct(service, original.id)

    def test_invalid_period(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)

        with pytest.raises(ValidationError, match="period"):
            self.correct(LedgerService(db_session), original.id, new_period="2025-1")

    def test_blank_description(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)

        with pytest.raises(ValidationError, match="description"):
            self.correct(LedgerService(db_session), original.id, new_description=" ")

    def test_no_lines(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)

        with pytest.raises(ValidationError, match="at least one line"):
            self.correct(LedgerService(db_session), original.id, lines=[])

    def test_unknown_account_leaves_original_active(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        service = LedgerService(db_session)

        with pytest.raises(NotFoundError, match="9999"):
            self.correct(service, original.id, lines=[
                LinePosting(account_no=9999, debit_amount=Decimal("1")),
            ])
        db_session.rollback()

        assert service.get_voucher(original.id).state == VoucherState.ACTIVE
        assert voucher_count(db_session) == 1


class TestCorrectionHeaderUniqueness:

    def correction_header(self, description):
        return Voucher(
            date=datetime(2025, 1, 15),
            description=description,
            reference="",
            period="2025-01",
            created_by=2,
            total_amount=Decimal("0"),
        )

    def test_second_header_for_same_original_is_conflict(self, db_session):
        make_chart(db_session)
        original = make_sale(db_session)
        store = VoucherStore(db_session)
        store.create_correction(self.correction_header("first"), original.id)

        with pytest.raises(ConflictError, match="already been corrected"):
            store.create_correction(self.correction_header("second"), original.id)

    def test_stale_session_still_sees_committed_correction(
        self, db_session, second_session
    ):
        make_chart(db_session)
        original = make_sale(db_session)
        stale = LedgerService(db_session).get_voucher(original.id)

        LedgerService(second_session).create_correction(original.id, actor_id=3)
        second_session.commit()

        locked = VoucherStore(db_session).get_for_update(original.id)
        assert locked is stale
        assert locked.is_superseded
