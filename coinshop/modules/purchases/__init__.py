"""Purchase domain exports"""

from .service import PurchaseService

__all__ = ["PurchaseService"]
