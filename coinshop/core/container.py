"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from coinshop.core.config import Settings, get_settings
from coinshop.infrastructure.database.locking import RowLocker, create_row_locker
from coinshop.infrastructure.database.session import (
    build_engine,
    build_session_factory,
    get_engine,
    get_session_factory,
    init_db,
)
from coinshop.infrastructure.database.unit_of_work import SqlUnitOfWork
from coinshop.modules.accounts.service import AccountService
from coinshop.modules.catalog.seed import seed_catalog
from coinshop.modules.history.service import HistoryService
from coinshop.modules.purchases.service import PurchaseService
from coinshop.modules.transfers.service import TransferService


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    row_locker: RowLocker

    @classmethod
    def from_engine(
        cls,
        settings: Settings,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> "ApplicationContainer":
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory or build_session_factory(engine),
            row_locker=create_row_locker(settings.database.lock_strategy, engine.dialect.name),
        )

    async def init_infrastructure(self, *, seed: bool = True) -> None:
        """Create tables and install the default catalog (migrations preferred in production)."""
        await init_db(self.engine)
        if seed:
            await seed_catalog(self.session_factory)

    def unit_of_work(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self.session_factory, self.row_locker)

    @property
    def accounts(self) -> AccountService:
        return AccountService(self.unit_of_work, starting_balance=self.settings.starting_balance)

    @property
    def purchases(self) -> PurchaseService:
        return PurchaseService(self.unit_of_work)

    @property
    def transfers(self) -> TransferService:
        return TransferService(self.unit_of_work)

    @property
    def history(self) -> HistoryService:
        return HistoryService(self.unit_of_work, history_limit=self.settings.ledger.history_limit)


def build_container(settings: Settings) -> ApplicationContainer:
    """Create a container with its own engine; the caller disposes ``container.engine``."""
    return ApplicationContainer.from_engine(settings, build_engine(settings))


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer.from_engine(
        get_settings(),
        get_engine(),
        session_factory=get_session_factory(),
    )


__all__ = ["ApplicationContainer", "build_container", "get_container"]
