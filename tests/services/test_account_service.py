"""
Tests for the AccountService (chart of accounts).
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaValidationError

from bookkeeping.errors import ConflictError, NotFoundError, ValidationError
from bookkeeping.models.enums import AccountType, BalanceSide
from bookkeeping.schemas.account import AccountCreate, AccountUpdate
from bookkeeping.schemas.line_item import LinePosting
from bookkeeping.schemas.voucher import VoucherCreate
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.ledger_service import LedgerService


def account_request(account_no, name="Account", group=None,
                    account_type=AccountType.BALANCE_SHEET,
                    side=BalanceSide.DEBIT, tax_standard="25%"):
    return AccountCreate(
        account_no=account_no,
        account_name=name,
        account_group=group if group is not None else int(str(account_no)[0]),
        tax_standard=tax_standard,
        type=account_type,
        standard_side=side,
    )


class TestAccountSchema:

    def test_group_nine_rejected(self):
        with pytest.raises(SchemaValidationError, match="account_group"):
            account_request(1510, group=9)

    def test_group_three_accepted(self):
        request = account_request(3010, group=3)
        assert request.account_group == 3

    def test_group_zero_rejected(self):
        with pytest.raises(SchemaValidationError):
            account_request(1510, group=0)

    def test_unknown_type_rejected(self):
        with pytest.raises(SchemaValidationError):
            AccountCreate(
                account_no=1510,
                account_name="Receivables",
                account_group=1,
                type="Income",
                standard_side="Debit",
            )

    def test_unknown_side_rejected(self):
        with pytest.raises(SchemaValidationError):
            AccountCreate(
                account_no=1510,
                account_name="Receivables",
                account_group=1,
                type="BS",
                standard_side="Left",
            )

    def test_enum_values_parse_from_strings(self):
        request = AccountCreate(
            account_no=3010,
            account_name="Sales",
            account_group=3,
            type="P&L",
            standard_side="Credit",
        )
        assert request.type == AccountType.PROFIT_AND_LOSS
        assert request.standard_side == BalanceSide.CREDIT

    def test_non_positive_account_number_rejected(self):
        with pytest.raises(SchemaValidationError):
            account_request(0, group=1)


class TestCreateAccount:

    def test_create_account_succeeds(self, db_session):
        service = AccountService(db_session)
        account = service.create_account(account_request(1510, "Receivables"))
        db_session.commit()

        assert account.account_no == 1510
        assert account.account_group == 1
        assert account.type == AccountType.BALANCE_SHEET
        assert account.standard_side == BalanceSide.DEBIT
        assert account.tax_standard == "25%"

    def test_duplicate_number_rejected(self, db_session):
        service = AccountService(db_session)
        service.create_account(account_request(1510, "Receivables"))
        db_session.commit()

        with pytest.raises(ConflictError, match="already exists"):
            service.create_account(account_request(1510, "Receivables again"))


class TestReadAccounts:

    def test_get_missing_account_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="not found"):
            AccountService(db_session).get_account(9999)

    def test_get_non_positive_number_is_validation_error(self, db_session):
        with pytest.raises(ValidationError):
            AccountService(db_session).get_account(0)

    def test_list_accounts_ordered_by_number(self, db_session):
        service = AccountService(db_session)
        for no in (4010, 1510, 3010):
            service.create_account(account_request(no))
        db_session.commit()

        assert [a.account_no for a in service.list_accounts()] == [1510, 3010, 4010]

    def test_list_by_group(self, db_session):
        service = AccountService(db_session)
        for no in (3040, 1510, 3010):
            service.create_account(account_request(no))
        db_session.commit()

        accounts = service.list_accounts_by_group(3)
        assert [a.account_no for a in accounts] == [3010, 3040]

    def test_list_by_group_out_of_range(self, db_session):
        with pytest.raises(ValidationError, match="between 1 and 8"):
            AccountService(db_session).list_accounts_by_group(9)


class TestUpdateAndDelete:

    def test_update_account(self, db_session):
        service = AccountService(db_session)
        service.create_account(account_request(3010, "Sales"))
        db_session.commit()

        account = service.update_account(3010, AccountUpdate(
            account_name="Sales, domestic",
            account_group=3,
            tax_standard="12%",
            type=AccountType.PROFIT_AND_LOSS,
            standard_side=BalanceSide.CREDIT,
        ))
        db_session.commit()

        reloaded = service.get_account(3010)
        assert account is reloaded
        assert reloaded.account_name == "Sales, domestic"
        assert reloaded.type == AccountType.PROFIT_AND_LOSS
        assert reloaded.standard_side == BalanceSide.CREDIT

    def test_update_missing_account(self, db_session):
        with pytest.raises(NotFoundError):
            AccountService(db_session).update_account(3010, AccountUpdate(
                account_name="Sales",
                account_group=3,
                type=AccountType.PROFIT_AND_LOSS,
                standard_side=BalanceSide.CREDIT,
            ))

    def test_delete_account(self, db_session):
        service = AccountService(db_session)
        service.create_account(account_request(1510))
        db_session.commit()

        service.delete_account(1510)
        db_session.commit()

        with pytest.raises(NotFoundError):
            service.get_account(1510)

    def test_delete_missing_account(self, db_session):
        with pytest.raises(NotFoundError):
            AccountService(db_session).delete_account(1510)

    def test_delete_account_with_postings_is_conflict(self, db_session):
        service = AccountService(db_session)
        service.create_account(account_request(1510, "Receivables"))
        service.create_account(account_request(
            3010, "Sales",
            account_type=AccountType.PROFIT_AND_LOSS, side=BalanceSide.CREDIT,
        ))
        LedgerService(db_session).create_voucher(
            VoucherCreate(
                date="2025-01-15", description="Sale", period="2025-01",
                created_by=1,
            ),
            [
                LinePosting(account_no=3010, credit_amount=Decimal("100")),
                LinePosting(account_no=1510, debit_amount=Decimal("100")),
            ],
        )
        db_session.commit()

        with pytest.raises(ConflictError, match="has postings"):
            service.delete_account(3010)
        db_session.rollback()

        assert service.get_account(3010).account_name == "Sales"
