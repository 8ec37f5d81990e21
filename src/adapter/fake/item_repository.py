"""In-memory implementation of ItemRepository for testing."""

from dataclasses import asdict, replace
from datetime import datetime, timezone

from bson import ObjectId

from domain.model.item import Item, ItemFields


class FakeItemRepository:
    def __init__(self):
        self.store: dict[str, Item] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, fields: ItemFields) -> Item:
        item_id = str(ObjectId())
        item = Item(id=item_id, created_at=datetime.now(timezone.utc), **asdict(fields))
        self.store[item_id] = item
        return replace(item)

    def replace(self, item_id: str, fields: ItemFields) -> Item | None:
        item = self.store.get(item_id)
        if not item:
            return None
        updated = replace(item, updated_at=datetime.now(timezone.utc), **asdict(fields))
        self.store[item_id] = updated
        return replace(updated)

    def delete(self, item_id: str) -> bool:
        return self.store.pop(item_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def find_many(self, skip: int = 0, limit: int = 50) -> list[Item]:
        items = sorted(self.store.values(), key=lambda i: i.id)
        return [replace(i) for i in items[skip:skip + limit]]

    def get_by_id(self, item_id: str) -> Item | None:
        item = self.store.get(item_id)
        return replace(item) if item else None
