from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user record."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime | None = None
    password_hash: str | None = None
    provider: str | None = None
    provider_id: str | None = None
    display_name: str | None = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)
