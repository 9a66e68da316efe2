"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .catalog_repository import SqlCatalogRepository
from .ledger_repository import SqlLedgerRepository

__all__ = [
    "SqlAccountRepository",
    "SqlCatalogRepository",
    "SqlLedgerRepository",
]
