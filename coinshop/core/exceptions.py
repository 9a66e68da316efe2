"""Error hierarchy shared by every coin shop operation.

Each error is fatal to the current call only. ``code`` is stable and safe to hand to a
transport layer; ``retryable`` tells the caller whether repeating the same call can
succeed without any other change.
"""


class CoinShopError(Exception):
    """Base class for all coin shop errors."""

    code = "error"
    retryable = False

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = message or self.__class__.__doc__ or self.code


class NotFoundError(CoinShopError):
    """Requested entity does not exist."""

    code = "not_found"


class ConflictError(CoinShopError):
    """Entity already exists."""

    code = "conflict"


class BusyError(CoinShopError):
    """Resource is locked by another operation, please try again."""

    code = "busy"
    retryable = True


class InsufficientFundsError(CoinShopError):
    """Balance is below the required amount."""

    code = "insufficient_funds"

    def __init__(self, balance: int, required: int) -> None:
        super().__init__(f"insufficient funds: balance {balance}, required {required}")
        self.balance = balance
        self.required = required


class InternalError(CoinShopError):
    """Persistence failure after validation passed."""

    code = "internal"
