"""Catalog domain exports"""

from .exceptions import ItemNotFoundError
from .models import CatalogItem
from .repository import CatalogRepository
from .seed import DEFAULT_CATALOG, seed_catalog

__all__ = [
    "CatalogItem",
    "CatalogRepository",
    "DEFAULT_CATALOG",
    "ItemNotFoundError",
    "seed_catalog",
]
