"""SQLAlchemy implementation for the merch catalog"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coinshop.db.models import Merch
from coinshop.modules.catalog.models import CatalogItem


class SqlCatalogRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_name(self, name: str) -> CatalogItem | None:
        stmt = select(Merch).where(Merch.name == name)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def list_items(self) -> list[CatalogItem]:
        result = await self.session.execute(select(Merch).order_by(Merch.name))
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: Merch) -> CatalogItem:
        return CatalogItem(id=int(model.id), name=model.name, price=int(model.price))
