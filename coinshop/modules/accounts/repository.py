"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol

from .models import Account


class AccountRepository(Protocol):
    """Durable keyed storage of accounts.

    ``lock_for_update`` and ``update_balance`` act inside the unit of work the
    repository is bound to. ``lock_for_update`` never waits: a row held by another
    unit raises :class:`AccountBusyError`. ``update_balance`` must only follow
    ``lock_for_update`` on the same id within the same unit.
    """

    async def get_by_id(self, account_id: int) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        ...

    async def create(self, username: str, initial_balance: int) -> Account:
        ...

    async def lock_for_update(self, account_id: int) -> Account | None:
        ...

    async def update_balance(self, account_id: int, new_balance: int) -> None:
        ...
