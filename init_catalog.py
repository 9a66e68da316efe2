"""
Initialise the database schema and the default merch catalog.
Optionally pre-create accounts: python init_catalog.py alice bob
"""
import asyncio
import sys

from coinshop.core.config import get_settings
from coinshop.core.container import get_container
from coinshop.core.logging import configure_logging


async def bootstrap(usernames: list[str]) -> None:
    container = get_container()
    await container.init_infrastructure(seed=True)

    for username in usernames:
        account = await container.accounts.ensure_account(username)
        print(f"account ready: {account.username} (id={account.id}, coins={account.coin_balance})")

    await container.engine.dispose()


if __name__ == "__main__":
    configure_logging(get_settings())
    asyncio.run(bootstrap(sys.argv[1:]))
