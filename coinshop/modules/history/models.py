"""Read models for the account summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class InventoryItem:
    type: str
    quantity: int


@dataclass(slots=True)
class HistoryEntry:
    amount: int
    from_user: str | None = None
    to_user: str | None = None


@dataclass(slots=True)
class CoinHistory:
    received: list[HistoryEntry] = field(default_factory=list)
    sent: list[HistoryEntry] = field(default_factory=list)


@dataclass(slots=True)
class Summary:
    coins: int
    inventory: list[InventoryItem] = field(default_factory=list)
    coin_history: CoinHistory = field(default_factory=CoinHistory)

    def to_dict(self) -> dict[str, Any]:
        return {
            "coins": self.coins,
            "inventory": [{"type": item.type, "quantity": item.quantity} for item in self.inventory],
            "coinHistory": {
                "received": [
                    {"fromUser": entry.from_user, "amount": entry.amount}
                    for entry in self.coin_history.received
                ],
                "sent": [
                    {"toUser": entry.to_user, "amount": entry.amount}
                    for entry in self.coin_history.sent
                ],
            },
        }
