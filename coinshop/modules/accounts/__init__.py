"""Account domain exports"""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountBusyError,
    AccountError,
    AccountNotFoundError,
)
from .models import Account
from .repository import AccountRepository
from .service import AccountService

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountBusyError",
    "AccountError",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountService",
]
