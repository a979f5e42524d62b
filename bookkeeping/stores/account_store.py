"""
Account store: persistence for the chart of accounts.
"""

from sqlalchemy import select, delete

from bookkeeping.models.account import Account
from bookkeeping.stores.base import BaseStore


class AccountStore(BaseStore):

    def create(self, account: Account) -> Account:
        self.db.add(account)
        self._flush(
            f"account {account.account_no}",
            conflict=f"Account {account.account_no} already exists",
        )
        return account

    def get_by_number(self, account_no: int) -> Account | None:
        return self.db.get(Account, account_no)

    def get_all(self) -> list[Account]:
        accounts = self.db.execute(
            select(Account).order_by(Account.account_no)
        ).scalars().all()
        return list(accounts)

    def get_by_group(self, account_group: int) -> list[Account]:
        accounts = self.db.execute(
            select(Account)
            .where(Account.account_group == account_group)
            .order_by(Account.account_no)
        ).scalars().all()
        return list(accounts)

    def get_many(self, account_numbers: set[int]) -> dict[int, Account]:
        if not account_numbers:
            return {}
        accounts = self.db.execute(
            select(Account).where(Account.account_no.in_(account_numbers))
        ).scalars().all()
        return {a.account_no: a for a in accounts}

    def update(self, account: Account) -> Account:
        self._flush(f"account {account.account_no}")
        return account

    def delete(self, account_no: int) -> None:
        self._execute(
            delete(Account).where(Account.account_no == account_no),
            f"account {account_no}",
            conflict=f"Account {account_no} has postings and cannot be deleted",
        )
        self._flush(f"account {account_no}")
