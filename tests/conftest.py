"""Shared fixtures: a fresh file-backed SQLite database per test.

A file (not ``:memory:``) is used so that concurrent units of work in one test see the
same database through separate connections.
"""

import pytest
from sqlalchemy import func, select, update

from coinshop.core.config import DatabaseSettings, Settings
from coinshop.core.container import build_container
from coinshop.db.models import Account, CoinTransaction, Order


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'coinshop.db'}"),
    )


@pytest.fixture
async def container(settings):
    container = build_container(settings)
    await container.init_infrastructure(seed=True)
    yield container
    await container.engine.dispose()


@pytest.fixture
def make_account(container):
    async def _make(username, balance=None):
        account = await container.accounts.ensure_account(username)
        if balance is not None:
            async with container.session_factory() as session:
                await session.execute(
                    update(Account).where(Account.id == account.id).values(coin_balance=balance)
                )
                await session.commit()
            account.coin_balance = balance
        return account

    return _make


@pytest.fixture
def balance_of(container):
    async def _balance(account_id):
        async with container.session_factory() as session:
            result = await session.execute(
                select(Account.coin_balance).where(Account.id == account_id)
            )
            return result.scalar_one()

    return _balance


@pytest.fixture
def order_count(container):
    async def _count(account_id):
        async with container.session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(Order).where(Order.account_id == account_id)
            )
            return result.scalar_one()

    return _count


@pytest.fixture
def ledger_rows(container):
    async def _rows(account_id):
        async with container.session_factory() as session:
            result = await session.execute(
                select(CoinTransaction.type, CoinTransaction.amount, CoinTransaction.related_account_id)
                .where(CoinTransaction.account_id == account_id)
                .order_by(CoinTransaction.id)
            )
            return [tuple(row) for row in result.all()]

    return _rows
