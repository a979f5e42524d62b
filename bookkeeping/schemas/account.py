"""
Pydantic schemas for the chart of accounts.

The field constraints here are the account invariants:
group 1-8, type P&L/BS, side Debit/Credit.
"""

from pydantic import BaseModel, Field

from bookkeeping.models.enums import AccountType, BalanceSide


class AccountUpdate(BaseModel):
    """Mutable attributes of an account."""
    account_name: str = Field(min_length=1, max_length=100)
    account_group: int = Field(ge=1, le=8)
    tax_standard: str = Field(default="", max_length=20)
    type: AccountType
    standard_side: BalanceSide


class AccountCreate(AccountUpdate):
    """Request to add an account to the chart of accounts."""
    account_no: int = Field(gt=0)


class AccountResponse(BaseModel):
    account_no: int
    account_name: str
    account_group: int
    tax_standard: str
    type: AccountType
    standard_side: BalanceSide

    model_config = {"from_attributes": True}
