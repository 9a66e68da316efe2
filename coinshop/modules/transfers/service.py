"""Peer-to-peer coin transfers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from coinshop.core.exceptions import BusyError, CoinShopError, InsufficientFundsError, InternalError
from coinshop.modules.accounts.exceptions import AccountNotFoundError
from coinshop.modules.common.unit_of_work import UnitOfWorkFactory, UnitState

from .exceptions import InvalidAmountError, ReceiverNotFoundError, SelfTransferError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransferService:
    uow_factory: UnitOfWorkFactory

    async def send_coin(self, from_account_id: int, to_username: str, amount: int) -> None:
        """Move ``amount`` coins from one account to another, atomically.

        Both rows are locked in ascending id order before either balance changes, and
        the funds check runs against the locked sender row. Locks never wait, so when
        two transfers collide at least one of them proceeds and the other gets a
        retryable busy error. A successful call writes one ``transfer_sent`` entry for
        the sender and one ``transfer_received`` entry for the receiver, same amount.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(amount)

        logger.info(
            "Transfer started: from=%s to=%s amount=%d", from_account_id, to_username, amount
        )
        try:
            async with self.uow_factory() as uow:
                if await uow.accounts.get_by_id(from_account_id) is None:
                    raise AccountNotFoundError(from_account_id)
                receiver = await uow.accounts.get_by_username(to_username)
                if receiver is None:
                    raise ReceiverNotFoundError(to_username)
                if receiver.id == from_account_id:
                    raise SelfTransferError()

                locked = {}
                for account_id in sorted((from_account_id, receiver.id)):
                    locked[account_id] = await uow.accounts.lock_for_update(account_id)
                sender, receiver = locked[from_account_id], locked[receiver.id]
                if sender is None:
                    raise AccountNotFoundError(from_account_id)
                if receiver is None:
                    raise ReceiverNotFoundError(to_username)
                uow.advance(UnitState.LOCK_ACQUIRED)

                if sender.coin_balance < amount:
                    raise InsufficientFundsError(sender.coin_balance, amount)
                uow.advance(UnitState.VALIDATED)

                await uow.accounts.update_balance(sender.id, sender.coin_balance - amount)
                await uow.accounts.update_balance(receiver.id, receiver.coin_balance + amount)
                await uow.ledger.record_transfer_pair(
                    from_account_id=sender.id,
                    to_account_id=receiver.id,
                    amount=amount,
                )
                uow.advance(UnitState.MUTATED)

                await uow.commit()
        except (BusyError, InsufficientFundsError) as exc:
            logger.warning(
                "Transfer rejected: from=%s to=%s amount=%d: %s",
                from_account_id,
                to_username,
                amount,
                exc,
            )
            raise
        except InternalError:
            logger.exception("Transfer failed: from=%s to=%s", from_account_id, to_username)
            raise
        except CoinShopError:
            raise
        except SQLAlchemyError as exc:
            logger.exception("Transfer failed: from=%s to=%s", from_account_id, to_username)
            raise InternalError(f"transfer failed: {exc}") from exc

        logger.info(
            "Transfer committed: from=%s to=%s amount=%d", sender.id, receiver.id, amount
        )
