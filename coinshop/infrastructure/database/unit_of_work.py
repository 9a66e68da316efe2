"""SQLAlchemy unit of work: one session, one transaction, one set of row locks."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coinshop.infrastructure.database.locking import RowLocker
from coinshop.infrastructure.database.repositories import (
    SqlAccountRepository,
    SqlCatalogRepository,
    SqlLedgerRepository,
)
from coinshop.modules.common.unit_of_work import UnitState

logger = logging.getLogger(__name__)


class SqlUnitOfWork:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        locker: RowLocker,
    ) -> None:
        self._session_factory = session_factory
        self._locker = locker
        self.session: AsyncSession | None = None
        self.state = UnitState.IDLE

    async def __aenter__(self) -> "SqlUnitOfWork":
        self.session = self._session_factory()
        self.state = UnitState.IDLE
        self.accounts = SqlAccountRepository(self.session, self._locker, lock_owner=self)
        self.catalog = SqlCatalogRepository(self.session)
        self.ledger = SqlLedgerRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        assert self.session is not None
        try:
            if self.state is not UnitState.COMMITTED:
                await self.rollback()
        finally:
            self._locker.release(self)
            await self.session.close()
            self.session = None

    def advance(self, state: UnitState) -> None:
        logger.debug("Unit of work %s -> %s", self.state.value, state.value)
        self.state = state

    async def commit(self) -> None:
        assert self.session is not None
        await self.session.commit()
        self.advance(UnitState.COMMITTED)

    async def rollback(self) -> None:
        assert self.session is not None
        await self.session.rollback()
        self.advance(UnitState.ABORTED)
