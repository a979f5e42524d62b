"""
Shared enumerations for database models and schemas.

The values are the literal strings stored in the database and
exchanged over the API ("P&L", "Debit", ...).
"""

import enum


class AccountType(str, enum.Enum):
    """Reporting classification of an account."""
    PROFIT_AND_LOSS = "P&L"
    BALANCE_SHEET = "BS"


class BalanceSide(str, enum.Enum):
    """Side on which an account's balance conventionally increases."""
    DEBIT = "Debit"
    CREDIT = "Credit"


class VoucherState(str, enum.Enum):
    """
    Voucher lifecycle.

    ACTIVE -> SUPERSEDED is the only transition, and
    SUPERSEDED is terminal.
    """
    ACTIVE = "ACTIVE"
    SUPERSEDED = "SUPERSEDED"


class UserRole(str, enum.Enum):
    ADMIN = "Admin"
    BOOKKEEPER = "Bookkeeper"
    MANAGER = "Manager"


def enum_values(enum_cls) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]
