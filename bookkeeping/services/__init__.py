"""Business logic services."""

from bookkeeping.services.account_service import AccountService
from bookkeeping.services.line_item_service import LineItemService
from bookkeeping.services.ledger_service import LedgerService
from bookkeeping.services.report_service import ReportService

__all__ = ["AccountService", "LineItemService", "LedgerService", "ReportService"]
