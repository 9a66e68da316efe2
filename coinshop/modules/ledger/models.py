"""Domain models for ledger records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class LedgerEntryType(str, Enum):
    TRANSFER_SENT = "transfer_sent"
    TRANSFER_RECEIVED = "transfer_received"


@dataclass(slots=True)
class Order:
    id: int
    account_id: int
    merch_id: int
    merch_name: str
    quantity: int
    total_price: int
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class LedgerEntry:
    id: int
    account_id: int
    amount: int
    type: LedgerEntryType
    related_account_id: Optional[int] = None
    created_at: Optional[datetime] = None
