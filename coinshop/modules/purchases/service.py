"""Buying catalog merch with coins."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from coinshop.core.exceptions import BusyError, CoinShopError, InsufficientFundsError, InternalError
from coinshop.modules.accounts.exceptions import AccountNotFoundError
from coinshop.modules.catalog.exceptions import ItemNotFoundError
from coinshop.modules.common.unit_of_work import UnitOfWorkFactory, UnitState
from coinshop.modules.ledger.models import Order

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PurchaseService:
    uow_factory: UnitOfWorkFactory

    async def buy(self, account_id: int, item_name: str) -> Order:
        """Debit the item price from the account and record one order, atomically.

        The catalog item is read in the same transaction as the debit. The account row
        is locked without waiting, so a concurrent operation on the same account makes
        this call fail with a retryable busy error instead of queueing.
        """
        logger.info("Purchase started: account=%s item=%s", account_id, item_name)
        try:
            async with self.uow_factory() as uow:
                item = await uow.catalog.get_by_name(item_name)
                if item is None:
                    raise ItemNotFoundError(item_name)

                account = await uow.accounts.lock_for_update(account_id)
                if account is None:
                    raise AccountNotFoundError(account_id)
                uow.advance(UnitState.LOCK_ACQUIRED)

                if account.coin_balance < item.price:
                    raise InsufficientFundsError(account.coin_balance, item.price)
                uow.advance(UnitState.VALIDATED)

                await uow.accounts.update_balance(account_id, account.coin_balance - item.price)
                order = await uow.ledger.record_order(
                    account_id=account_id,
                    merch_id=item.id,
                    quantity=1,
                    total_price=item.price,
                )
                uow.advance(UnitState.MUTATED)

                await uow.commit()
        except (BusyError, InsufficientFundsError) as exc:
            logger.warning("Purchase rejected: account=%s item=%s: %s", account_id, item_name, exc)
            raise
        except InternalError:
            logger.exception("Purchase failed: account=%s item=%s", account_id, item_name)
            raise
        except CoinShopError:
            raise
        except SQLAlchemyError as exc:
            logger.exception("Purchase failed: account=%s item=%s", account_id, item_name)
            raise InternalError(f"purchase failed: {exc}") from exc

        logger.info(
            "Purchase committed: account=%s item=%s price=%d balance=%d",
            account_id,
            item_name,
            item.price,
            account.coin_balance - item.price,
        )
        return order
