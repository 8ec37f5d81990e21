"""Item service: catalog business rules on top of ItemRepository."""

import logging

from domain.model.errors import NotFoundError, ValidationError
from domain.model.item import Item, ItemFields
from port.item_repository import ItemRepository
from utils.object_id import is_object_id

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def _require_valid_id(item_id: str) -> None:
    if not is_object_id(item_id):
        raise ValidationError("Invalid id")


def _require_fields(fields: ItemFields) -> None:
    if not fields.name or fields.price is None:
        raise ValidationError("name and price are required")


def clamp_page(skip: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp pagination to skip >= 0 and 1 <= limit <= MAX_LIMIT."""
    skip = max(0, skip or 0)
    limit = DEFAULT_LIMIT if limit is None else limit
    return skip, min(MAX_LIMIT, max(1, limit))


def list_items(repo: ItemRepository, skip: int | None = 0, limit: int | None = DEFAULT_LIMIT) -> list[Item]:
    skip, limit = clamp_page(skip, limit)
    return repo.find_many(skip=skip, limit=limit)


def get_item(repo: ItemRepository, item_id: str) -> Item:
    """Fetch one item.

    Raises:
        ValidationError: id is not a 24-hex ObjectId
        NotFoundError: no such item
    """
    _require_valid_id(item_id)
    item = repo.get_by_id(item_id)
    if not item:
        raise NotFoundError("Not found")
    return item


def create_item(repo: ItemRepository, fields: ItemFields) -> Item:
    _require_fields(fields)
    item = repo.create(fields)
    logger.info("Item created", extra={"itemId": item.id})
    return item


def replace_item(repo: ItemRepository, item_id: str, fields: ItemFields) -> Item:
    """Overwrite all mutable fields of an item.

    Raises:
        ValidationError: invalid id, or name/price missing
        NotFoundError: no such item
    """
    _require_valid_id(item_id)
    _require_fields(fields)
    item = repo.replace(item_id, fields)
    if not item:
        raise NotFoundError("Not found")
    logger.info("Item replaced", extra={"itemId": item_id})
    return item


def delete_item(repo: ItemRepository, item_id: str) -> None:
    _require_valid_id(item_id)
    if not repo.delete(item_id):
        raise NotFoundError("Not found")
    logger.info("Item deleted", extra={"itemId": item_id})
