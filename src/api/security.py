"""Route guard: bearer token extraction and verification.

The guard is stateless. It verifies the token signature and expiry and
hands the embedded identity to the handler without consulting the store.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from api.dependencies import get_token_service
from domain.model.errors import AuthError
from domain.model.identity import Identity
from services.token_service import TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def authenticate(authorization: Optional[str], tokens: TokenService) -> Identity:
    """Verify the bearer token carried by an Authorization header value.

    Raises:
        AuthError: header missing or not a Bearer credential, or token invalid/expired
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise AuthError("Missing Bearer token")
    try:
        return tokens.verify(token)
    except AuthError as e:
        raise AuthError("Invalid or expired token") from e


def _unauthorized(e: AuthError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(e),
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_bearer_header(authorization: Optional[str] = Header(None)) -> str:
    """Reject requests without a Bearer credential before any token service is built."""
    if not extract_bearer_token(authorization):
        raise _unauthorized(AuthError("Missing Bearer token"))
    return authorization


def get_current_identity(
    authorization: str = Depends(require_bearer_header),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Get the authenticated identity (required). Raises 401 if not authenticated."""
    try:
        return authenticate(authorization, tokens)
    except AuthError as e:
        raise _unauthorized(e) from e
