"""
Pydantic schemas for line items.

A posting is one-sided: exactly one of debit_amount and
credit_amount is positive. The check runs before any store
call, whether the line arrives on its own or inside a voucher.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class LinePosting(BaseModel):
    """A debit or credit against one account, not yet tied to a voucher."""
    account_no: int = Field(gt=0)
    debit_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    credit_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    tax_code: int = Field(default=0, ge=0)
    project_id: int | None = Field(default=None, gt=0)
    cost_center_id: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def must_be_one_sided(self) -> "LinePosting":
        if self.debit_amount > 0 and self.credit_amount > 0:
            raise ValueError(
                "a line item cannot have both debit and credit amounts"
            )
        if self.debit_amount == 0 and self.credit_amount == 0:
            raise ValueError(
                "a line item must have either a debit or a credit amount"
            )
        return self

    def reversed(self) -> "LinePosting":
        """The same posting with debit and credit swapped."""
        return self.model_copy(update={
            "debit_amount": self.credit_amount,
            "credit_amount": self.debit_amount,
        })


class LineItemCreate(LinePosting):
    """Request to add a posting to an existing voucher."""
    voucher_id: int = Field(gt=0)


class LineItemUpdate(LinePosting):
    """Replacement values for a posting; the owning voucher cannot change."""


class LineItemResponse(BaseModel):
    id: int
    voucher_id: int
    account_no: int
    debit_amount: Decimal
    credit_amount: Decimal
    tax_code: int
    project_id: int | None
    cost_center_id: int | None

    model_config = {"from_attributes": True}


class VoucherLineResponse(LineItemResponse):
    """A posting with its account name resolved, for voucher documents."""
    account_name: str
