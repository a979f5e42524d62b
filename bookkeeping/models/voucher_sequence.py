"""
Voucher number sequence.

A single counter row per sequence name. Allocation locks the
row (SELECT ... FOR UPDATE) and increments it inside the
caller's transaction, so numbers are strictly increasing,
never duplicated between concurrent writers and never reused
after a voucher is deleted.
"""

from sqlalchemy import String, BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base

VOUCHER_NUMBER_SEQUENCE = "voucher_number"


class VoucherSequence(Base):
    __tablename__ = "voucher_sequences"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    next_value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<VoucherSequence {self.name}={self.next_value}>"
