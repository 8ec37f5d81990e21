import logging
import os
from functools import lru_cache

from fastapi import HTTPException

from adapter.external.google_oauth import GoogleOAuthAdapter
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.item_repository import MongoItemRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.item_repository import ItemRepository
from port.oauth_provider import OAuthProvider
from port.user_repository import UserRepository
from services.token_service import TokenService, parse_expires_in

logger = logging.getLogger(__name__)


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_item_repo() -> ItemRepository:
    return MongoItemRepository(_get_db())


@lru_cache
def _build_token_service(secret_key: str, expires_in: str) -> TokenService:
    return TokenService(secret_key, expires_in=parse_expires_in(expires_in))


def get_token_service() -> TokenService:
    """Build the token service from JWT_SECRET_KEY / JWT_EXPIRES_IN.

    There is no fallback secret; a missing key fails the request with 500.
    """
    secret_key = os.getenv("JWT_SECRET_KEY")
    if not secret_key:
        logger.error(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
        raise HTTPException(status_code=500, detail="Token signing is not configured")
    return _build_token_service(secret_key, os.getenv("JWT_EXPIRES_IN", "1h"))


@lru_cache
def get_oauth_provider() -> OAuthProvider:
    return GoogleOAuthAdapter()
