"""
Account model (chart of accounts).

Accounts are keyed by their caller-assigned account number.
Groups 1-8 follow the chart-of-accounts classes; the number
range also drives income statement classification
(3000-3999 income, 4000-8999 expenses).
"""

from sqlalchemy import String, Integer, CheckConstraint, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base
from bookkeeping.models.enums import AccountType, BalanceSide, enum_values


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            "account_group BETWEEN 1 AND 8",
            name="ck_accounts_group_range",
        ),
    )

    account_no: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False
    )
    account_name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_group: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    tax_standard: Mapped[str] = mapped_column(
        String(20), nullable=False, default=""
    )
    type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
    )
    standard_side: Mapped[BalanceSide] = mapped_column(
        SAEnum(
            BalanceSide,
            name="balance_side_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_no} {self.account_name} ({self.type.value})>"
