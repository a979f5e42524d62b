"""
Account service: the chart-of-accounts registry.

Field-level rules (group 1-8, type, side) are enforced by
the AccountCreate/AccountUpdate schemas before a request ever
reaches this service. The service adds the rules that need
the store: uniqueness of the account number and existence.
"""

import logging

from sqlalchemy.orm import Session

from bookkeeping.errors import ValidationError, NotFoundError, ConflictError
from bookkeeping.models.account import Account
from bookkeeping.schemas.account import AccountCreate, AccountUpdate
from bookkeeping.stores.account_store import AccountStore

logger = logging.getLogger(__name__)

MIN_ACCOUNT_GROUP = 1
MAX_ACCOUNT_GROUP = 8


class AccountService:

    def __init__(self, db: Session):
        self.db = db
        self.accounts = AccountStore(db)

    def create_account(self, request: AccountCreate) -> Account:
        """
        Add an account to the chart of accounts.

        Raises ConflictError if the account number already exists.
        """
        if self.accounts.get_by_number(request.account_no) is not None:
            raise ConflictError(
                f"Account with number {request.account_no} already exists"
            )

        account = self.accounts.create(Account(
            account_no=request.account_no,
            account_name=request.account_name,
            account_group=request.account_group,
            tax_standard=request.tax_standard,
            type=request.type,
            standard_side=request.standard_side,
        ))
        logger.info("Created account %s %s", account.account_no, account.account_name)
        return account

    def get_account(self, account_no: int) -> Account:
        if account_no <= 0:
            raise ValidationError("invalid account number")
        account = self.accounts.get_by_number(account_no)
        if account is None:
            raise NotFoundError(f"Account {account_no} not found")
        return account

    def list_accounts(self) -> list[Account]:
        """All accounts ordered by account number."""
        return self.accounts.get_all()

    def list_accounts_by_group(self, account_group: int) -> list[Account]:
        if not MIN_ACCOUNT_GROUP <= account_group <= MAX_ACCOUNT_GROUP:
            raise ValidationError(
                f"account group must be between {MIN_ACCOUNT_GROUP} "
                f"and {MAX_ACCOUNT_GROUP}"
            )
        return self.accounts.get_by_group(account_group)

    def update_account(self, account_no: int, request: AccountUpdate) -> Account:
        """Update an account in place. The account number never changes."""
        account = self.get_account(account_no)
        account.account_name = request.account_name
        account.account_group = request.account_group
        account.tax_standard = request.tax_standard
        account.type = request.type
        account.standard_side = request.standard_side
        return self.accounts.update(account)

    def delete_account(self, account_no: int) -> None:
        """
        Remove an account.

        Whether the account is still referenced by line items is
        left to the database's foreign key.
        """
        self.get_account(account_no)
        self.accounts.delete(account_no)
        logger.info("Deleted account %s", account_no)
