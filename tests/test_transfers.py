"""Transfers: two balance updates and two ledger entries, all or nothing.

Tests cover:
    - Successful transfer moves coins and writes a sent/received entry pair
    - Sum of both balances is conserved across a sequence of transfers
    - Invalid amounts are rejected before any lock is taken
    - Self transfer, unknown receiver and insufficient funds change nothing
    - Sender or receiver locked elsewhere fails fast with a busy error
    - Opposing transfers between the same pair never both fail
    - Ledger failure restores both balances
"""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from coinshop.core.exceptions import BusyError, InsufficientFundsError, InternalError
from coinshop.infrastructure.database.repositories import SqlLedgerRepository
from coinshop.modules.accounts import AccountBusyError, AccountNotFoundError
from coinshop.modules.ledger import LedgerWriteError
from coinshop.modules.transfers import (
    InvalidAmountError,
    ReceiverNotFoundError,
    SelfTransferError,
    TransferService,
)


async def test_send_coin_moves_coins_and_records_pair(container, make_account, balance_of, ledger_rows):
    sender = await make_account("sender@example.com")
    receiver = await make_account("receiver@example.com", balance=500)

    await container.transfers.send_coin(sender.id, receiver.username, 100)

    assert await balance_of(sender.id) == 900
    assert await balance_of(receiver.id) == 600
    assert await ledger_rows(sender.id) == [("transfer_sent", 100, receiver.id)]
    assert await ledger_rows(receiver.id) == [("transfer_received", 100, sender.id)]


async def test_transfers_conserve_total(container, make_account, balance_of):
    a = await make_account("a@example.com")
    b = await make_account("b@example.com", balance=300)

    for sender, receiver, amount in [(a, b, 10), (b, a, 250), (a, b, 1), (b, a, 59), (a, b, 1000)]:
        before = await balance_of(a.id) + await balance_of(b.id)
        await container.transfers.send_coin(sender.id, receiver.username, amount)
        assert await balance_of(a.id) + await balance_of(b.id) == before

    assert await balance_of(a.id) == 298
    assert await balance_of(b.id) == 1002


@pytest.mark.parametrize("amount", [0, -5, True, 1.5, "10"])
async def test_invalid_amount_is_rejected_before_any_unit_opens(amount):
    uow_factory = MagicMock()
    service = TransferService(uow_factory)

    with pytest.raises(InvalidAmountError) as exc_info:
        await service.send_coin(1, "r@example.com", amount)

    assert exc_info.value.amount == amount
    uow_factory.assert_not_called()


async def test_self_transfer_is_rejected(container, make_account, balance_of, ledger_rows):
    account = await make_account("self@example.com")

    with pytest.raises(SelfTransferError):
        await container.transfers.send_coin(account.id, account.username, 50)

    assert await balance_of(account.id) == 1000
    assert await ledger_rows(account.id) == []


async def test_unknown_receiver(container, make_account, balance_of):
    sender = await make_account("lonely@example.com")

    with pytest.raises(ReceiverNotFoundError) as exc_info:
        await container.transfers.send_coin(sender.id, "nobody@example.com", 10)

    assert isinstance(exc_info.value, AccountNotFoundError)
    assert exc_info.value.code == "receiver_not_found"
    assert await balance_of(sender.id) == 1000


async def test_unknown_sender(container, make_account):
    receiver = await make_account("target@example.com")

    with pytest.raises(AccountNotFoundError):
        await container.transfers.send_coin(987654, receiver.username, 10)


async def test_insufficient_funds(container, make_account, balance_of, ledger_rows):
    sender = await make_account("poor@example.com", balance=30)
    receiver = await make_account("rich@example.com")

    with pytest.raises(InsufficientFundsError):
        await container.transfers.send_coin(sender.id, receiver.username, 31)

    assert await balance_of(sender.id) == 30
    assert await balance_of(receiver.id) == 1000
    assert await ledger_rows(sender.id) == []


async def test_locked_receiver_fails_fast(container, make_account, balance_of):
    sender = await make_account("from@example.com")
    receiver = await make_account("to@example.com")

    async with container.unit_of_work() as holder:
        await holder.accounts.lock_for_update(receiver.id)
        with pytest.raises(AccountBusyError) as exc_info:
            await container.transfers.send_coin(sender.id, receiver.username, 10)

    assert exc_info.value.account_id == receiver.id
    assert await balance_of(sender.id) == 1000
    assert await balance_of(receiver.id) == 1000

    # the sender lock taken by the failed transfer was released
    await container.transfers.send_coin(sender.id, receiver.username, 10)
    assert await balance_of(receiver.id) == 1010


async def test_ledger_failure_restores_both_balances(container, make_account, balance_of, ledger_rows):
    sender = await make_account("x@example.com")
    receiver = await make_account("y@example.com", balance=500)

    with patch.object(
        SqlLedgerRepository, "record_transfer_pair", side_effect=LedgerWriteError("constraint")
    ):
        with pytest.raises(InternalError):
            await container.transfers.send_coin(sender.id, receiver.username, 100)

    assert await balance_of(sender.id) == 1000
    assert await balance_of(receiver.id) == 500
    assert await ledger_rows(sender.id) == []
    assert await ledger_rows(receiver.id) == []


async def test_concurrent_transfers_from_one_sender(container, make_account, balance_of):
    sender = await make_account("busy@example.com", balance=100)
    first = await make_account("first@example.com", balance=0)
    second = await make_account("second@example.com", balance=0)

    results = await asyncio.gather(
        container.transfers.send_coin(sender.id, first.username, 80),
        container.transfers.send_coin(sender.id, second.username, 80),
        return_exceptions=True,
    )

    failures = [result for result in results if isinstance(result, Exception)]
    assert len(failures) == 1
    assert isinstance(failures[0], (BusyError, InsufficientFundsError))
    assert await balance_of(sender.id) == 20
    assert await balance_of(first.id) + await balance_of(second.id) == 80


async def test_opposing_transfers_never_both_fail(container, make_account, balance_of):
    a = await make_account("left@example.com")
    b = await make_account("right@example.com")

    for _ in range(5):
        results = await asyncio.gather(
            container.transfers.send_coin(a.id, b.username, 10),
            container.transfers.send_coin(b.id, a.username, 10),
            return_exceptions=True,
        )

        failures = [result for result in results if isinstance(result, Exception)]
        assert len(failures) < 2
        assert all(isinstance(failure, AccountBusyError) for failure in failures)
        assert await balance_of(a.id) + await balance_of(b.id) == 2000
