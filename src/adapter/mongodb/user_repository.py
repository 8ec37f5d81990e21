"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import ConflictError
from domain.model.user import User
from utils.object_id import parse_object_id

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        Email is unique among password accounts only; OAuth records may share
        an email with a password account.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(
                self.collection, [('email', 1)], 'idx_users_email',
                unique=True,
                partialFilterExpression={'password_hash': {'$exists': True}},
            )
            create_index_safe(
                self.collection, [('provider', 1), ('provider_id', 1)], 'idx_users_provider_identity',
                unique=True,
                partialFilterExpression={'provider_id': {'$exists': True}},
            )
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=str(doc['_id']),
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc.get('updated_at'),
            password_hash=doc.get('password_hash'),
            provider=doc.get('provider'),
            provider_id=doc.get('provider_id'),
            display_name=doc.get('display_name'),
        )

    def _find_one(self, query: dict, context: dict, sort: list | None = None) -> User | None:
        try:
            doc = self.collection.find_one(query, sort=sort)
        except PyMongoError as e:
            logger.error("Failed to find user", extra={**context, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def create(
        self,
        email: str,
        password_hash: str | None = None,
        provider: str | None = None,
        provider_id: str | None = None,
        display_name: str | None = None,
    ) -> User:
        """Insert a user document; unset credential fields are omitted."""
        now = datetime.now(timezone.utc)
        user_doc = {'email': email, 'created_at': now, 'updated_at': now}
        optional = {
            'password_hash': password_hash,
            'provider': provider,
            'provider_id': provider_id,
            'display_name': display_name,
        }
        user_doc.update({k: v for k, v in optional.items() if v is not None})

        try:
            result = self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: duplicate key", extra={"provider": provider})
            raise ConflictError("User already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"error": str(e)})
            raise

        user_doc['_id'] = result.inserted_id
        user = self._to_domain(user_doc)
        logger.debug("User document inserted", extra={"userId": user.id})
        return user

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email, preferring a password account over OAuth records."""
        return self._find_one(
            {'email': email},
            {"lookup": "email"},
            sort=[('password_hash', DESCENDING)],
        )

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found or malformed."""
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        return self._find_one({'_id': oid}, {"userId": user_id})

    def get_by_provider_identity(self, provider: str, provider_id: str) -> User | None:
        return self._find_one(
            {'provider': provider, 'provider_id': provider_id},
            {"provider": provider},
        )

    def _update(self, user_id: str, fields: dict) -> bool:
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        fields = {**fields, 'updated_at': datetime.now(timezone.utc)}
        try:
            result = self.collection.update_one({'_id': oid}, {'$set': fields})
        except DuplicateKeyError as e:
            raise ConflictError("Email already in use") from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise
        return result.matched_count > 0

    def update_email(self, user_id: str, email: str) -> bool:
        return self._update(user_id, {'email': email})

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        return self._update(user_id, {'password_hash': password_hash})

    def delete(self, user_id: str) -> bool:
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        try:
            result = self.collection.delete_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise
        return result.deleted_count > 0
