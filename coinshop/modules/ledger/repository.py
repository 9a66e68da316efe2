"""Repository protocol for the append-only ledger (orders and coin transfers)."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import LedgerEntry, Order


class LedgerRepository(Protocol):
    async def record_order(
        self,
        *,
        account_id: int,
        merch_id: int,
        quantity: int,
        total_price: int,
    ) -> Order:
        ...

    async def record_transfer_pair(
        self,
        *,
        from_account_id: int,
        to_account_id: int,
        amount: int,
    ) -> tuple[LedgerEntry, LedgerEntry]:
        ...

    async def list_orders(self, account_id: int) -> Sequence[Order]:
        ...

    async def list_entries(
        self, account_id: int, limit: int | None = None
    ) -> Sequence[LedgerEntry]:
        ...
