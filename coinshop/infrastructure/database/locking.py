"""Non-blocking exclusive row locks.

A locker either takes the row lock in the database (``FOR UPDATE NOWAIT``) or, for
backends without row-level locking such as SQLite, in an in-process registry. Both fail
immediately with :class:`RowLockedError` when another unit of work holds the row, and
both hold the lock until the owning unit of work ends.

SQLite also serialises writers on a database-wide lock that no locker controls. When the
driver gives up waiting for it, :func:`is_lock_unavailable` recognises the error so the
write can be reported as busy.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from typing import Any, Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

PG_LOCK_NOT_AVAILABLE = "55P03"
MYSQL_LOCK_NOWAIT = 3572
NATIVE_LOCK_DIALECTS = frozenset({"postgresql", "mysql", "mariadb", "oracle"})


class RowLockedError(Exception):
    """Raised when a row is already locked by another unit of work."""

    def __init__(self, key: Hashable) -> None:
        super().__init__(f"row {key!r} is locked")
        self.key = key


def is_lock_unavailable(exc: DBAPIError) -> bool:
    """Tell whether a driver error is the backend's "lock not available" signal."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == PG_LOCK_NOT_AVAILABLE:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == MYSQL_LOCK_NOWAIT:
        return True
    return "database is locked" in str(orig)


def _row_key(model: type[Any], pk: Any) -> tuple[str, Any]:
    return (model.__tablename__, pk)


class RowLocker(Protocol):
    async def fetch_locked(
        self,
        session: AsyncSession,
        model: type[ModelT],
        pk: Any,
        *,
        owner: object,
    ) -> ModelT | None:
        ...

    def release(self, owner: object) -> None:
        ...


class NativeRowLocker:
    """Row locks taken by the database and released with its transaction."""

    async def fetch_locked(
        self,
        session: AsyncSession,
        model: type[ModelT],
        pk: Any,
        *,
        owner: object,
    ) -> ModelT | None:
        stmt = (
            select(model)
            .where(model.id == pk)
            .with_for_update(nowait=True)
            .execution_options(populate_existing=True)
        )
        try:
            result = await session.execute(stmt)
        except DBAPIError as exc:
            if is_lock_unavailable(exc):
                raise RowLockedError(_row_key(model, pk)) from exc
            raise
        return result.scalars().first()

    def release(self, owner: object) -> None:
        return None


class LockRegistry:
    """Process-wide table of held row keys and the unit of work owning each."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._owners: dict[Hashable, object] = {}

    def try_acquire(self, key: Hashable, owner: object) -> bool:
        with self._guard:
            holder = self._owners.get(key)
            if holder is None:
                self._owners[key] = owner
                return True
            return holder is owner

    def release_all(self, owner: object) -> int:
        with self._guard:
            keys = [key for key, holder in self._owners.items() if holder is owner]
            for key in keys:
                del self._owners[key]
        return len(keys)

    def is_locked(self, key: Hashable) -> bool:
        with self._guard:
            return key in self._owners


class RegistryRowLocker:
    """Row locks emulated in-process for backends without ``FOR UPDATE``."""

    def __init__(self, registry: LockRegistry | None = None) -> None:
        self.registry = registry or LockRegistry()

    async def fetch_locked(
        self,
        session: AsyncSession,
        model: type[ModelT],
        pk: Any,
        *,
        owner: object,
    ) -> ModelT | None:
        key = _row_key(model, pk)
        if not self.registry.try_acquire(key, owner):
            raise RowLockedError(key)
        stmt = select(model).where(model.id == pk).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    def release(self, owner: object) -> None:
        released = self.registry.release_all(owner)
        if released:
            logger.debug("Released %d row lock(s)", released)


def create_row_locker(strategy: str, dialect_name: str) -> RowLocker:
    if strategy == "native":
        return NativeRowLocker()
    if strategy == "registry":
        return RegistryRowLocker()
    if strategy != "auto":
        raise ValueError(f"unknown lock strategy: {strategy}")
    if dialect_name in NATIVE_LOCK_DIALECTS:
        return NativeRowLocker()
    return RegistryRowLocker()
