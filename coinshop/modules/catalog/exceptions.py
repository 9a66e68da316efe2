"""Catalog domain exceptions."""

from coinshop.core.exceptions import NotFoundError


class ItemNotFoundError(NotFoundError):
    """Raised when no catalog item carries the requested name."""

    code = "item_not_found"

    def __init__(self, name: str) -> None:
        super().__init__(f"item not found: {name}")
        self.name = name
