"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace
from datetime import datetime, timezone

from bson import ObjectId

from domain.model.errors import ConflictError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self, enforce_unique: bool = True):
        self.store: dict[str, User] = {}
        self.enforce_unique = enforce_unique

    def _password_email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return any(
            u.email == email and u.password_hash and u.id != exclude_id
            for u in self.store.values()
        )

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        email: str,
        password_hash: str | None = None,
        provider: str | None = None,
        provider_id: str | None = None,
        display_name: str | None = None,
    ) -> User:
        if self.enforce_unique:
            if password_hash and self._password_email_taken(email):
                raise ConflictError("User already exists")
            if provider_id and self.get_by_provider_identity(provider, provider_id):
                raise ConflictError("User already exists")

        user_id = str(ObjectId())
        now = datetime.now(timezone.utc)
        user = User(
            id=user_id,
            email=email,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
            provider=provider,
            provider_id=provider_id,
            display_name=display_name,
        )
        self.store[user_id] = user
        return replace(user)

    def update_email(self, user_id: str, email: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False
        if self.enforce_unique and user.password_hash and self._password_email_taken(email, user_id):
            raise ConflictError("Email already in use")
        user.email = email
        user.updated_at = datetime.now(timezone.utc)
        return True

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False
        user.password_hash = password_hash
        user.updated_at = datetime.now(timezone.utc)
        return True

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        matches = [u for u in self.store.values() if u.email == email]
        if not matches:
            return None
        # password accounts win over OAuth records sharing the email
        matches.sort(key=lambda u: u.password_hash is None)
        return replace(matches[0])

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def get_by_provider_identity(self, provider: str, provider_id: str) -> User | None:
        for user in self.store.values():
            if user.provider == provider and user.provider_id == provider_id:
                return replace(user)
        return None
