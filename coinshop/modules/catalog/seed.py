"""Default merch catalog."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coinshop.db.models import Merch

logger = logging.getLogger(__name__)

DEFAULT_CATALOG: dict[str, int] = {
    "t-shirt": 80,
    "cup": 20,
    "book": 50,
    "pen": 10,
    "powerbank": 200,
    "hoody": 300,
    "umbrella": 200,
    "socks": 10,
    "wallet": 50,
    "pink-hoody": 500,
}


async def seed_catalog(
    session_factory: async_sessionmaker[AsyncSession],
    items: dict[str, int] | None = None,
) -> int:
    """Insert catalog items that are missing. Existing rows keep their price."""
    items = DEFAULT_CATALOG if items is None else items
    async with session_factory() as session:
        result = await session.execute(select(Merch.name))
        existing = set(result.scalars().all())
        missing = [name for name in items if name not in existing]
        for name in missing:
            session.add(Merch(name=name, price=items[name]))
        await session.commit()
    if missing:
        logger.info("Seeded %d catalog item(s): %s", len(missing), ", ".join(missing))
    return len(missing)
