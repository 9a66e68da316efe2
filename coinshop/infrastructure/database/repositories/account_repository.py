"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from coinshop.db.models import Account as AccountModel
from coinshop.infrastructure.database.locking import RowLocker, RowLockedError, is_lock_unavailable
from coinshop.modules.accounts.exceptions import (
    AccountAlreadyExistsError,
    AccountBusyError,
    AccountNotFoundError,
)
from coinshop.modules.accounts.models import Account
from coinshop.modules.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models.

    Row locks are owned by ``lock_owner`` (the unit of work the repository belongs
    to) and released by that unit when it ends.
    """

    def __init__(self, session: AsyncSession, locker: RowLocker, lock_owner: object) -> None:
        self._session = session
        self._locker = locker
        self._lock_owner = lock_owner

    async def get_by_id(self, account_id: int) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create(self, username: str, initial_balance: int) -> Account:
        model = AccountModel(username=username, coin_balance=initial_balance)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise AccountAlreadyExistsError(f"username already exists: {username}") from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def lock_for_update(self, account_id: int) -> Account | None:
        try:
            model = await self._locker.fetch_locked(
                self._session,
                AccountModel,
                account_id,
                owner=self._lock_owner,
            )
        except RowLockedError as exc:
            raise AccountBusyError(account_id) from exc
        return self._to_domain(model)

    async def update_balance(self, account_id: int, new_balance: int) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(coin_balance=new_balance)
            .execution_options(synchronize_session="evaluate")
        )
        try:
            result = await self._session.execute(stmt)
        except DBAPIError as exc:
            # SQLite takes a database-wide write lock here, outside the row locker
            if is_lock_unavailable(exc):
                raise AccountBusyError(account_id) from exc
            raise
        if result.rowcount == 0:
            raise AccountNotFoundError(account_id)

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=int(model.id),
            username=model.username,
            coin_balance=int(model.coin_balance),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
