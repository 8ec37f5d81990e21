"""MongoDB implementation of ItemRepository."""

from dataclasses import asdict
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import ITEMS_COLLECTION_NAME
from domain.model.item import Item, ItemFields
from utils.object_id import parse_object_id

logger = getLogger(__name__)


class MongoItemRepository:
    def __init__(self, db: Database):
        self.collection = db[ITEMS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for items collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('created_at', -1)], 'idx_items_created_at')
            create_index_safe(self.collection, [('category', 1)], 'idx_items_category')
            return True
        except PyMongoError as e:
            logger.error("Failed to create items indexes", extra={"error": str(e)})
            return False

    @staticmethod
    def _to_document(fields: ItemFields) -> dict:
        return {
            'name': str(fields.name),
            'price': float(fields.price),
            'description': str(fields.description),
            'sku': str(fields.sku),
            'quantity': int(fields.quantity),
            'category': str(fields.category),
            'is_active': bool(fields.is_active),
        }

    def _to_domain(self, doc: dict) -> Item:
        """Convert MongoDB document to Item domain model."""
        return Item(
            id=str(doc['_id']),
            name=doc['name'],
            price=doc['price'],
            created_at=doc['created_at'],
            description=doc.get('description', ''),
            sku=doc.get('sku', ''),
            quantity=doc.get('quantity', 0),
            category=doc.get('category', ''),
            is_active=doc.get('is_active', True),
            updated_at=doc.get('updated_at'),
        )

    def find_many(self, skip: int = 0, limit: int = 50) -> list[Item]:
        try:
            cursor = self.collection.find({}).sort('_id', 1).skip(skip).limit(limit)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list items", extra={"error": str(e)})
            raise

    def get_by_id(self, item_id: str) -> Item | None:
        oid = parse_object_id(item_id)
        if oid is None:
            return None
        try:
            doc = self.collection.find_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to get item", extra={"itemId": item_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def create(self, fields: ItemFields) -> Item:
        doc = self._to_document(fields)
        doc['created_at'] = datetime.now(timezone.utc)
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to create item", extra={"error": str(e), "fields": asdict(fields)})
            raise
        doc['_id'] = result.inserted_id
        return self._to_domain(doc)

    def replace(self, item_id: str, fields: ItemFields) -> Item | None:
        oid = parse_object_id(item_id)
        if oid is None:
            return None
        update = self._to_document(fields)
        update['updated_at'] = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': oid},
                {'$set': update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to replace item", extra={"itemId": item_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def delete(self, item_id: str) -> bool:
        oid = parse_object_id(item_id)
        if oid is None:
            return False
        try:
            result = self.collection.delete_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to delete item", extra={"itemId": item_id, "error": str(e)})
            raise
        return result.deleted_count > 0
