"""Transfer domain exports"""

from .exceptions import InvalidAmountError, ReceiverNotFoundError, SelfTransferError
from .service import TransferService

__all__ = [
    "InvalidAmountError",
    "ReceiverNotFoundError",
    "SelfTransferError",
    "TransferService",
]
