"""Supabase-backed user repository."""

from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from professional_registry.adapters.supabase_errors import (
    UNIQUE_VIOLATION,
    storage_errors,
)
from professional_registry.domain.errors import DuplicateUsername, StorageError
from professional_registry.domain.models import UserRecord
from professional_registry.services.users import UserRepository

_COLUMNS = "id, username, password, full_name, is_staff"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user for an id, if present."""
        with storage_errors("load user"):
            response = (
                self.client.table("users")
                .select(_COLUMNS)
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""
        with storage_errors("load user"):
            response = (
                self.client.table("users")
                .select(_COLUMNS)
                .eq("username", username)
                .limit(1)
                .execute()
            )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, username: str, password_hash: str, full_name: str, is_staff: bool
    ) -> UserRecord:
        """Create a new user row and return it."""
        with storage_errors("create user"):
            try:
                response = (
                    self.client.table("users")
                    .insert(
                        {
                            "username": username,
                            "password": password_hash,
                            "full_name": full_name,
                            "is_staff": is_staff,
                        }
                    )
                    .execute()
                )
            except APIError as exc:
                if exc.code == UNIQUE_VIOLATION:
                    raise DuplicateUsername() from exc
                raise
        if not response.data:
            raise StorageError("Failed to create user")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a users row into a domain model."""
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        password_hash=str(row["password"]),
        full_name=str(row.get("full_name") or ""),
        is_staff=bool(row.get("is_staff", False)),
    )
