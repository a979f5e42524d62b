"""
Voucher store: persistence for voucher headers and the
correction chain.

Two operations carry the concurrency guarantees of the
ledger:

- create/create_correction allocate the voucher number from
  a locked sequence row, so numbers strictly increase and are
  never reused, even after deletions.
- mark_corrected is a single conditional UPDATE that only
  succeeds while corrected_by_voucher_id is still NULL. Two
  concurrent corrections of the same voucher cannot both win.
  The unique corrects_voucher_id column backs this up: a
  second correction header for one original is refused as a
  ConflictError.
"""

import logging

from sqlalchemy import select, update, delete

from bookkeeping.errors import ConflictError
from bookkeeping.models.voucher import Voucher
from bookkeeping.models.voucher_sequence import (
    VoucherSequence,
    VOUCHER_NUMBER_SEQUENCE,
)
from bookkeeping.stores.base import BaseStore

logger = logging.getLogger(__name__)


class VoucherStore(BaseStore):

    def _next_voucher_number(self) -> int:
        seq = self.db.execute(
            select(VoucherSequence)
            .where(VoucherSequence.name == VOUCHER_NUMBER_SEQUENCE)
            .with_for_update()
        ).scalar_one_or_none()

        if seq is None:
            # Migrations seed this row; a bare schema (tests) creates it lazily.
            seq = VoucherSequence(name=VOUCHER_NUMBER_SEQUENCE, next_value=1)
            self.db.add(seq)

        value = seq.next_value
        seq.next_value = value + 1
        return value

    def create(self, voucher: Voucher, conflict: str | None = None) -> Voucher:
        """Insert a voucher, assigning its id and voucher number."""
        voucher.voucher_number = self._next_voucher_number()
        self.db.add(voucher)
        self._flush(f"voucher #{voucher.voucher_number}", conflict=conflict)
        return voucher

    def create_correction(self, voucher: Voucher, original_id: int) -> Voucher:
        """
        Insert a voucher that corrects original_id.

        corrects_voucher_id is unique, so a second correction of
        the same original fails here with ConflictError.
        """
        voucher.corrects_voucher_id = original_id
        return self.create(
            voucher,
            conflict=f"Voucher {original_id} has already been corrected",
        )

    def mark_corrected(self, original_id: int, corrected_by_id: int) -> None:
        """
        Record that original_id has been superseded by corrected_by_id.

        Raises ConflictError if the original is already corrected
        (or no longer exists).
        """
        result = self._execute(
            update(Voucher)
            .where(
                Voucher.id == original_id,
                Voucher.corrected_by_voucher_id.is_(None),
            )
            .values(corrected_by_voucher_id=corrected_by_id),
            f"correction link {original_id} -> {corrected_by_id}",
            conflict=f"Voucher {original_id} has already been corrected",
        )
        if result.rowcount != 1:
            logger.warning(
                "Rejected second correction of voucher %s (by %s)",
                original_id, corrected_by_id,
            )
            raise ConflictError(
                f"Voucher {original_id} has already been corrected"
            )
        self._flush(f"correction link {original_id} -> {corrected_by_id}")

    def get_by_id(self, voucher_id: int) -> Voucher | None:
        return self.db.get(Voucher, voucher_id)

    def get_for_update(self, voucher_id: int) -> Voucher | None:
        """
        Load a voucher row locked for the rest of the transaction.

        The row is re-read even if the session already holds it, so
        a correction committed by another request is always seen.
        """
        return self.db.execute(
            select(Voucher)
            .where(Voucher.id == voucher_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_all(self) -> list[Voucher]:
        """All vouchers, newest first."""
        vouchers = self.db.execute(
            select(Voucher).order_by(Voucher.voucher_number.desc())
        ).scalars().all()
        return list(vouchers)

    def get_by_period(self, period: str) -> list[Voucher]:
        vouchers = self.db.execute(
            select(Voucher)
            .where(Voucher.period == period)
            .order_by(Voucher.voucher_number.desc())
        ).scalars().all()
        return list(vouchers)

    def get_by_creator(self, user_id: int) -> list[Voucher]:
        vouchers = self.db.execute(
            select(Voucher)
            .where(Voucher.created_by == user_id)
            .order_by(Voucher.voucher_number.desc())
        ).scalars().all()
        return list(vouchers)

    def get_by_period_and_creator(self, period: str, user_id: int) -> list[Voucher]:
        vouchers = self.db.execute(
            select(Voucher)
            .where(Voucher.period == period, Voucher.created_by == user_id)
            .order_by(Voucher.voucher_number.desc())
        ).scalars().all()
        return list(vouchers)

    def get_all_periods(self) -> list[str]:
        """Distinct periods with at least one voucher, newest first."""
        periods = self.db.execute(
            select(Voucher.period).distinct().order_by(Voucher.period.desc())
        ).scalars().all()
        return list(periods)

    def ids(self) -> list[int]:
        return list(self.db.execute(
            select(Voucher.id).order_by(Voucher.voucher_number)
        ).scalars().all())

    def update(self, voucher: Voucher) -> Voucher:
        self._flush(f"voucher #{voucher.voucher_number}")
        return voucher

    def delete(self, voucher_id: int) -> None:
        self._execute(
            delete(Voucher).where(Voucher.id == voucher_id),
            f"voucher {voucher_id}",
        )
        self._flush(f"voucher {voucher_id}")
