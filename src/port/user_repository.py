from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Every operation touches a single document keyed by a unique field.
    """
    def create(
        self,
        email: str,
        password_hash: str | None = None,
        provider: str | None = None,
        provider_id: str | None = None,
        display_name: str | None = None,
    ) -> User:
        """Create a new user with created_at set to now.

        Raises ConflictError if the store rejects a duplicate unique key.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_provider_identity(self, provider: str, provider_id: str) -> User | None:
        """Find a user by external OAuth identity. Return User or None if not found."""
        ...

    def update_email(self, user_id: str, email: str) -> bool:
        """Set a new email. Return True if a record matched.

        Raises ConflictError if the store rejects a duplicate unique key.
        """
        ...

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash. Return True if a record matched."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return True if a record was removed."""
        ...
