"""
Voucher model (journal entry header).

A voucher owns a set of line items whose debits and credits
must balance. Vouchers are never edited after they have been
corrected: a correction is a new voucher that points back at
the original through corrects_voucher_id, while the original
records corrected_by_voucher_id exactly once.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Integer, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base
from bookkeeping.models.enums import VoucherState


class Voucher(Base):
    __tablename__ = "vouchers"

    id: Mapped[int] = mapped_column(primary_key=True)
    voucher_number: Mapped[int] = mapped_column(
        Integer, unique=True, nullable=False
    )
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    reference: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    period: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    created_by: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    corrects_voucher_id: Mapped[int | None] = mapped_column(
        ForeignKey("vouchers.id"), nullable=True, unique=True
    )
    corrected_by_voucher_id: Mapped[int | None] = mapped_column(
        ForeignKey("vouchers.id"), nullable=True, unique=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    @property
    def state(self) -> VoucherState:
        if self.corrected_by_voucher_id is not None:
            return VoucherState.SUPERSEDED
        return VoucherState.ACTIVE

    @property
    def is_superseded(self) -> bool:
        return self.state == VoucherState.SUPERSEDED

    @property
    def is_linked(self) -> bool:
        """True when the voucher sits on either end of a correction chain."""
        return (
            self.corrects_voucher_id is not None
            or self.corrected_by_voucher_id is not None
        )

    def __repr__(self) -> str:
        return (
            f"<Voucher #{self.voucher_number} {self.period} "
            f"{self.total_amount} ({self.state.value})>"
        )
