"""
Pydantic schemas for the per-account ledger view.

Ledger entries are derived from line items, never stored.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class LedgerEntryResponse(BaseModel):
    """One posting to an account with the running balance after it."""
    date: datetime
    voucher_id: int
    voucher_number: int
    line_id: int
    description: str
    reference: str
    debit_amount: Decimal
    credit_amount: Decimal
    balance: Decimal
    superseded: bool
