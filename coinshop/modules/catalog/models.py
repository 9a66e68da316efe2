"""Domain models for the merch catalog."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CatalogItem:
    id: int
    name: str
    price: int
