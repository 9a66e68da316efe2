"""Repository protocol for the read-only merch catalog."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import CatalogItem


class CatalogRepository(Protocol):
    async def get_by_name(self, name: str) -> CatalogItem | None:
        ...

    async def list_items(self) -> Sequence[CatalogItem]:
        ...
