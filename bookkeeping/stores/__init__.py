"""Persistence stores consumed by the services."""

from bookkeeping.stores.account_store import AccountStore
from bookkeeping.stores.line_item_store import LineItemStore
from bookkeeping.stores.voucher_store import VoucherStore

__all__ = ["AccountStore", "LineItemStore", "VoucherStore"]
