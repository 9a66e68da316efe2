"""Account summary: balance, inventory and coin history."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from coinshop.core.exceptions import InternalError
from coinshop.modules.accounts.exceptions import AccountNotFoundError
from coinshop.modules.common.unit_of_work import UnitOfWork, UnitOfWorkFactory
from coinshop.modules.ledger.models import LedgerEntryType

from .models import CoinHistory, HistoryEntry, InventoryItem, Summary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HistoryService:
    """Read-only aggregation; takes no locks and never commits.

    The balance must be readable or the call fails. Inventory and coin history are
    best effort: a failed read is logged and yields an empty section. With
    ``history_limit`` set, only that many of the newest coin entries are reported.
    """

    uow_factory: UnitOfWorkFactory
    history_limit: int | None = None

    async def summarize(self, account_id: int) -> Summary:
        try:
            async with self.uow_factory() as uow:
                account = await uow.accounts.get_by_id(account_id)
        except SQLAlchemyError as exc:
            logger.exception("Balance read failed: account=%s", account_id)
            raise InternalError(f"summary failed: {exc}") from exc
        if account is None:
            raise AccountNotFoundError(account_id)

        return Summary(
            coins=account.coin_balance,
            inventory=await self._inventory(account_id),
            coin_history=await self._coin_history(account_id),
        )

    async def _inventory(self, account_id: int) -> list[InventoryItem]:
        try:
            async with self.uow_factory() as uow:
                orders = await uow.ledger.list_orders(account_id)
        except SQLAlchemyError:
            logger.warning("Inventory unavailable for account %s", account_id, exc_info=True)
            return []

        counts: dict[str, int] = {}
        for order in orders:
            counts[order.merch_name] = counts.get(order.merch_name, 0) + order.quantity
        return [InventoryItem(type=name, quantity=quantity) for name, quantity in counts.items()]

    async def _coin_history(self, account_id: int) -> CoinHistory:
        history = CoinHistory()
        try:
            async with self.uow_factory() as uow:
                entries = await uow.ledger.list_entries(account_id, limit=self.history_limit)
                names = await self._usernames(
                    uow, {entry.related_account_id for entry in entries}
                )
        except SQLAlchemyError:
            logger.warning("Coin history unavailable for account %s", account_id, exc_info=True)
            return history

        for entry in entries:
            counterparty = names.get(entry.related_account_id, "")
            if entry.type is LedgerEntryType.TRANSFER_RECEIVED:
                history.received.append(HistoryEntry(amount=entry.amount, from_user=counterparty))
            elif entry.type is LedgerEntryType.TRANSFER_SENT:
                history.sent.append(HistoryEntry(amount=entry.amount, to_user=counterparty))
        return history

    @staticmethod
    async def _usernames(uow: UnitOfWork, account_ids: set[int | None]) -> dict[int | None, str]:
        names: dict[int | None, str] = {}
        for account_id in account_ids:
            if account_id is None:
                continue
            account = await uow.accounts.get_by_id(account_id)
            if account is not None:
                names[account_id] = account.username
        return names
