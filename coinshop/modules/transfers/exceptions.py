"""Coin transfer exceptions."""

from coinshop.core.exceptions import CoinShopError
from coinshop.modules.accounts.exceptions import AccountNotFoundError


class InvalidAmountError(CoinShopError):
    """Raised when the transfer amount is not a positive integer."""

    code = "invalid_amount"

    def __init__(self, amount: object) -> None:
        super().__init__(f"amount must be a positive integer, got {amount!r}")
        self.amount = amount


class ReceiverNotFoundError(AccountNotFoundError):
    """Raised when the receiving username does not exist."""

    code = "receiver_not_found"


class SelfTransferError(CoinShopError):
    """Cannot transfer coins to yourself."""

    code = "self_transfer"
