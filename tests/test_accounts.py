"""Account creation and lookup."""

import asyncio
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from coinshop.core.container import build_container
from coinshop.core.exceptions import InternalError
from coinshop.infrastructure.database.repositories import SqlAccountRepository
from coinshop.modules.accounts import AccountAlreadyExistsError, AccountNotFoundError


async def test_ensure_account_creates_with_starting_balance(container):
    account = await container.accounts.ensure_account("first@example.com")

    assert account.id is not None
    assert account.username == "first@example.com"
    assert account.coin_balance == 1000


async def test_ensure_account_returns_existing(container):
    created = await container.accounts.ensure_account("again@example.com")
    await container.purchases.buy(created.id, "pen")

    existing = await container.accounts.ensure_account("again@example.com")

    assert existing.id == created.id
    assert existing.coin_balance == 990


async def test_concurrent_ensure_account_yields_one_account(container):
    accounts = await asyncio.gather(
        *(container.accounts.ensure_account("race@example.com") for _ in range(5))
    )

    assert len({account.id for account in accounts}) == 1


async def test_create_duplicate_username_fails(container):
    await container.accounts.create_account("dup@example.com")

    with pytest.raises(AccountAlreadyExistsError):
        await container.accounts.create_account("dup@example.com")


async def test_starting_balance_comes_from_settings(settings):
    settings.ledger.starting_balance = 250
    container = build_container(settings)
    try:
        await container.init_infrastructure(seed=False)
        account = await container.accounts.ensure_account("custom@example.com")
    finally:
        await container.engine.dispose()

    assert account.coin_balance == 250


async def test_lookups_raise_not_found(container):
    with pytest.raises(AccountNotFoundError):
        await container.accounts.get_by_id(404)
    with pytest.raises(AccountNotFoundError):
        await container.accounts.get_by_username("ghost@example.com")


async def test_storage_failure_on_lookup_is_internal(container):
    error = OperationalError("SELECT accounts", {}, Exception("disk I/O error"))

    with patch.object(SqlAccountRepository, "get_by_id", side_effect=error):
        with pytest.raises(InternalError) as exc_info:
            await container.accounts.get_by_id(1)
    assert exc_info.value.__cause__ is error

    with patch.object(SqlAccountRepository, "get_by_username", side_effect=error):
        with pytest.raises(InternalError):
            await container.accounts.ensure_account("someone@example.com")
