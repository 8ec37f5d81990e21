# domain/model/identity.py

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Verified subject of a bearer token."""
    subject_id: str
    email: str


@dataclass(frozen=True)
class OAuthProfile:
    """Identity supplied by an external OAuth provider after its handshake."""
    provider: str
    provider_id: str
    email: str | None
    display_name: str | None = None
