"""OAuth service: maps external provider identities to local users."""

import logging

from domain.model.errors import ConflictError, IdentityError
from domain.model.identity import OAuthProfile
from domain.model.user import User
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)


def link_or_create(
    repo: UserRepository,
    provider: str,
    provider_id: str,
    email: str | None,
    display_name: str | None = None,
) -> User:
    """Return the user for an external identity, creating it on first sight.

    An existing record is returned unchanged. A password account that happens
    to share the email is left alone; the two stay separate records.

    Raises:
        IdentityError: the profile carries no email or no provider id
    """
    if not provider_id:
        raise IdentityError("OAuth profile has no id")
    if not email:
        raise IdentityError("OAuth profile has no email")

    user = repo.get_by_provider_identity(provider, provider_id)
    if user:
        return user

    try:
        user = repo.create(
            email=email,
            provider=provider,
            provider_id=provider_id,
            display_name=display_name,
        )
    except ConflictError:
        # a concurrent first login created the record first
        user = repo.get_by_provider_identity(provider, provider_id)
        if not user:
            raise
        return user

    logger.info("OAuth user created", extra={"userId": user.id, "provider": provider})
    return user


def login_with_profile(
    repo: UserRepository,
    tokens: TokenService,
    profile: OAuthProfile,
) -> tuple[User, str]:
    """Link the profile to a local user and issue a token for it."""
    user = link_or_create(
        repo,
        provider=profile.provider,
        provider_id=profile.provider_id,
        email=profile.email,
        display_name=profile.display_name,
    )
    return user, tokens.issue(user.id, user.email)
