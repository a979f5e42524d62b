"""
Pydantic schemas for vouchers and corrections.

Posting dates are accepted either as a calendar date
("2025-01-15") or as a full ISO timestamp, and are always
normalized to a naive UTC datetime. Periods are "YYYY-MM".
"""

import re
from datetime import date, datetime, time, timezone
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from bookkeeping.models.enums import VoucherState
from bookkeeping.schemas.line_item import LinePosting, VoucherLineResponse

PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
PERIOD_RE = re.compile(PERIOD_PATTERN)
DATE_FORMAT = "%Y-%m-%d"
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def is_valid_period(value: str) -> bool:
    return bool(PERIOD_RE.match(value or ""))


def parse_calendar_date(text: str) -> datetime:
    """Parse a zero-padded YYYY-MM-DD date; "2025-1-5" is rejected."""
    if not DATE_RE.fullmatch(text):
        raise ValueError("expected YYYY-MM-DD")
    return datetime.strptime(text, DATE_FORMAT)


def normalize_posting_date(value):
    """Turn a date, a datetime or their string forms into a naive UTC datetime."""
    if isinstance(value, str):
        text = value.strip()
        try:
            if DATE_RE.fullmatch(text):
                value = parse_calendar_date(text)
            else:
                value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(
                "date must be YYYY-MM-DD or an ISO timestamp"
            ) from None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return value


class VoucherHeader(BaseModel):
    """The editable fields of a voucher."""
    date: datetime
    description: str = Field(min_length=1, max_length=255)
    reference: str = Field(default="", max_length=100)
    period: str = Field(
        min_length=7,
        max_length=7,
        pattern=PERIOD_PATTERN,
        description="Accounting period, YYYY-MM",
    )

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return normalize_posting_date(v)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description is required")
        return v


class VoucherCreate(VoucherHeader):
    """A new voucher header; line items are passed alongside."""
    created_by: int = Field(gt=0)


class VoucherCreateRequest(VoucherCreate):
    """HTTP body for creating a voucher with its line items."""
    lines: list[LinePosting] = Field(default_factory=list)


class VoucherUpdate(VoucherHeader):
    """Privileged header update. Correction links are not writable."""


class CorrectionWithChangesRequest(VoucherHeader):
    """
    Replacement header and line items for a corrected voucher.

    The creator of the correction is the authenticated caller,
    not a field of the request.
    """
    lines: list[LinePosting] = Field(min_length=1)


class VoucherResponse(BaseModel):
    id: int
    voucher_number: int
    date: datetime
    description: str
    reference: str
    total_amount: Decimal
    period: str
    created_by: int
    corrects_voucher_id: int | None
    corrected_by_voucher_id: int | None
    state: VoucherState

    model_config = {"from_attributes": True}


class VoucherDetailResponse(VoucherResponse):
    """A fully materialized voucher, as handed to the document renderer."""
    lines: list[VoucherLineResponse]


class BalanceCheckResponse(BaseModel):
    voucher_id: int
    is_balanced: bool
