"""SQLAlchemy implementation for the order and coin transfer ledger"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coinshop.db.models import CoinTransaction, Merch, Order as OrderModel
from coinshop.modules.ledger.exceptions import LedgerWriteError
from coinshop.modules.ledger.models import LedgerEntry, LedgerEntryType, Order


class SqlLedgerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def record_order(
        self,
        *,
        account_id: int,
        merch_id: int,
        quantity: int,
        total_price: int,
    ) -> Order:
        order = OrderModel(
            account_id=account_id,
            merch_id=merch_id,
            quantity=quantity,
            total_price=total_price,
        )
        self.session.add(order)
        try:
            await self.session.flush()
            await self.session.refresh(order)
            merch = await self.session.get(Merch, merch_id)
        except SQLAlchemyError as exc:
            raise LedgerWriteError(f"failed to create order: {exc}") from exc
        return self._to_order(order, merch.name if merch else "")

    async def record_transfer_pair(
        self,
        *,
        from_account_id: int,
        to_account_id: int,
        amount: int,
    ) -> tuple[LedgerEntry, LedgerEntry]:
        sent = CoinTransaction(
            account_id=from_account_id,
            amount=amount,
            type=LedgerEntryType.TRANSFER_SENT.value,
            related_account_id=to_account_id,
        )
        received = CoinTransaction(
            account_id=to_account_id,
            amount=amount,
            type=LedgerEntryType.TRANSFER_RECEIVED.value,
            related_account_id=from_account_id,
        )
        self.session.add_all([sent, received])
        try:
            await self.session.flush()
            await self.session.refresh(sent)
            await self.session.refresh(received)
        except SQLAlchemyError as exc:
            raise LedgerWriteError(f"failed to record coin transfer: {exc}") from exc
        return self._to_entry(sent), self._to_entry(received)

    async def list_orders(self, account_id: int) -> list[Order]:
        stmt = (
            select(OrderModel, Merch.name)
            .join(Merch, OrderModel.merch_id == Merch.id)
            .where(OrderModel.account_id == account_id)
            .order_by(desc(OrderModel.created_at), desc(OrderModel.id))
        )
        result = await self.session.execute(stmt)
        return [self._to_order(order, name) for order, name in result.all()]

    async def list_entries(self, account_id: int, limit: int | None = None) -> list[LedgerEntry]:
        stmt = (
            select(CoinTransaction)
            .where(CoinTransaction.account_id == account_id)
            .order_by(desc(CoinTransaction.created_at), desc(CoinTransaction.id))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_entry(row) for row in result.scalars().all()]

    @staticmethod
    def _to_order(model: OrderModel, merch_name: str) -> Order:
        return Order(
            id=int(model.id),
            account_id=int(model.account_id),
            merch_id=int(model.merch_id),
            merch_name=merch_name,
            quantity=model.quantity,
            total_price=model.total_price,
            created_at=model.created_at,
        )

    @staticmethod
    def _to_entry(model: CoinTransaction) -> LedgerEntry:
        return LedgerEntry(
            id=int(model.id),
            account_id=int(model.account_id),
            amount=model.amount,
            type=LedgerEntryType(model.type),
            related_account_id=(
                int(model.related_account_id) if model.related_account_id is not None else None
            ),
            created_at=model.created_at,
        )
