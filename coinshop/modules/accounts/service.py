"""Domain services for account management."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from coinshop.core.exceptions import InternalError
from coinshop.modules.common.unit_of_work import UnitOfWorkFactory

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import Account

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = 1000


@dataclass(slots=True)
class AccountService:
    """Account lookups plus creation on first successful authentication.

    Storage failures surface as :class:`InternalError`; a missing account as
    :class:`AccountNotFoundError`.
    """

    uow_factory: UnitOfWorkFactory
    starting_balance: int = DEFAULT_STARTING_BALANCE

    async def get_by_id(self, account_id: int) -> Account:
        try:
            async with self.uow_factory() as uow:
                account = await uow.accounts.get_by_id(account_id)
        except SQLAlchemyError as exc:
            logger.exception("Account lookup failed: id=%s", account_id)
            raise InternalError(f"account lookup failed: {exc}") from exc
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def get_by_username(self, username: str) -> Account:
        account = await self._find_by_username(username)
        if account is None:
            raise AccountNotFoundError(username)
        return account

    async def create_account(self, username: str) -> Account:
        try:
            async with self.uow_factory() as uow:
                account = await uow.accounts.create(username, self.starting_balance)
                await uow.commit()
        except SQLAlchemyError as exc:
            logger.exception("Account creation failed: username=%s", username)
            raise InternalError(f"account creation failed: {exc}") from exc
        logger.info("Created account %s with balance %d", username, account.coin_balance)
        return account

    async def ensure_account(self, username: str) -> Account:
        """Return the account for ``username``, creating it with the starting balance.

        Two callers racing to create the same username both end up with the single
        stored account: the loser's insert hits the unique constraint and re-reads.
        """
        account = await self._find_by_username(username)
        if account is not None:
            return account
        try:
            return await self.create_account(username)
        except AccountAlreadyExistsError:
            logger.info("Account %s created concurrently, re-reading", username)
        return await self.get_by_username(username)

    async def _find_by_username(self, username: str) -> Account | None:
        try:
            async with self.uow_factory() as uow:
                return await uow.accounts.get_by_username(username)
        except SQLAlchemyError as exc:
            logger.exception("Account lookup failed: username=%s", username)
            raise InternalError(f"account lookup failed: {exc}") from exc
