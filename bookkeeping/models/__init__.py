"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from bookkeeping.models.base import Base
from bookkeeping.models.enums import (
    AccountType,
    BalanceSide,
    VoucherState,
    UserRole,
)
from bookkeeping.models.account import Account
from bookkeeping.models.voucher import Voucher
from bookkeeping.models.line_item import LineItem
from bookkeeping.models.voucher_sequence import VoucherSequence

__all__ = [
    "Base",
    "AccountType",
    "BalanceSide",
    "VoucherState",
    "UserRole",
    "Account",
    "Voucher",
    "LineItem",
    "VoucherSequence",
]
