"""History domain exports"""

from .models import CoinHistory, HistoryEntry, InventoryItem, Summary
from .service import HistoryService

__all__ = [
    "CoinHistory",
    "HistoryEntry",
    "HistoryService",
    "InventoryItem",
    "Summary",
]
