"""Port definition for ItemRepository."""

from typing import Protocol

from domain.model.item import Item, ItemFields


class ItemRepository(Protocol):
    def find_many(self, skip: int = 0, limit: int = 50) -> list[Item]: ...

    def get_by_id(self, item_id: str) -> Item | None: ...

    def create(self, fields: ItemFields) -> Item: ...

    def replace(self, item_id: str, fields: ItemFields) -> Item | None:
        """Overwrite the mutable fields. Return the fresh Item, or None if not found."""
        ...

    def delete(self, item_id: str) -> bool: ...
