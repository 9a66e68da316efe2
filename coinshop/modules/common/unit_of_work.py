"""Unit of work contract shared by the coordinators.

A unit of work is one atomic scope: everything done through its stores becomes visible
on :meth:`UnitOfWork.commit` or not at all. Leaving the ``async with`` block without a
commit, whether by an exception, a cancelled task or a plain return, aborts the unit
and releases every row lock it holds.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol

from coinshop.modules.accounts.repository import AccountRepository
from coinshop.modules.catalog.repository import CatalogRepository
from coinshop.modules.ledger.repository import LedgerRepository


class UnitState(str, Enum):
    IDLE = "idle"
    LOCK_ACQUIRED = "lock_acquired"
    VALIDATED = "validated"
    MUTATED = "mutated"
    COMMITTED = "committed"
    ABORTED = "aborted"


class UnitOfWork(Protocol):
    accounts: AccountRepository
    catalog: CatalogRepository
    ledger: LedgerRepository
    state: UnitState

    async def __aenter__(self) -> "UnitOfWork":
        ...

    async def __aexit__(self, exc_type, exc, tb) -> None:
        ...

    def advance(self, state: UnitState) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
