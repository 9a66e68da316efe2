"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Account:
    id: int
    username: str
    coin_balance: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
