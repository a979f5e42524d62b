"""
Line item model.

One debit or credit posting inside a voucher. A line is
one-sided: exactly one of debit_amount / credit_amount is
positive and the other is zero. The engine validates this
before insert; the check constraint is the last line of
defence at the database.
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base


class LineItem(Base):
    __tablename__ = "line_items"
    __table_args__ = (
        CheckConstraint(
            "(debit_amount > 0 AND credit_amount = 0) "
            "OR (debit_amount = 0 AND credit_amount > 0)",
            name="ck_line_items_one_sided",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    voucher_id: Mapped[int] = mapped_column(
        ForeignKey("vouchers.id"), nullable=False, index=True
    )
    account_no: Mapped[int] = mapped_column(
        ForeignKey("accounts.account_no"), nullable=False, index=True
    )
    debit_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    credit_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    tax_code: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cost_center_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<LineItem {self.account_no} "
            f"D{self.debit_amount} C{self.credit_amount}>"
        )
