"""Ledger domain exports"""

from .exceptions import LedgerWriteError
from .models import LedgerEntry, LedgerEntryType, Order
from .repository import LedgerRepository

__all__ = [
    "LedgerEntry",
    "LedgerEntryType",
    "LedgerRepository",
    "LedgerWriteError",
    "Order",
]
