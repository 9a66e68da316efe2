"""Ledger domain exceptions."""

from coinshop.core.exceptions import InternalError


class LedgerWriteError(InternalError):
    """Raised when an order or ledger entry cannot be appended."""
