"""Account domain specific exceptions."""

from coinshop.core.exceptions import BusyError, CoinShopError, ConflictError, NotFoundError


class AccountError(CoinShopError):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError, ConflictError):
    """Raised when attempting to create an account with duplicate username."""

    code = "account_exists"


class AccountNotFoundError(AccountError, NotFoundError):
    """Raised when the requested account cannot be found."""

    code = "account_not_found"

    def __init__(self, account: int | str) -> None:
        super().__init__(f"account not found: {account}")
        self.account = account


class AccountBusyError(AccountError, BusyError):
    """Raised when the account row is locked by another operation."""

    def __init__(self, account_id: int) -> None:
        super().__init__(f"account {account_id} is locked, please try again")
        self.account_id = account_id
