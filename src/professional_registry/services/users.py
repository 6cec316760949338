"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol

from professional_registry.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user for an id, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""

    def create_user(
        self, username: str, password_hash: str, full_name: str, is_staff: bool
    ) -> UserRecord:
        """Create and return a new user record."""


@dataclass
class UserService:
    """Application service for user lookups and creation."""

    repository: UserRepository

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user for an id, or None when absent."""
        return self.repository.get_user(user_id)

    def get_user_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, or None when absent."""
        return self.repository.get_by_username(username)

    def create_user(
        self,
        username: str,
        password_hash: str,
        full_name: str,
        *,
        is_staff: bool = False,
    ) -> UserRecord:
        """Persist a new user with an already hashed password."""
        return self.repository.create_user(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            is_staff=is_staff,
        )
