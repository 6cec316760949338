"""Domain models for registry users."""

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    """Access role of an authenticated user."""

    VIEWER = "viewer"
    STAFF = "staff"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    username: str
    password_hash: str
    full_name: str
    is_staff: bool = False

    @property
    def role(self) -> Role:
        return Role.STAFF if self.is_staff else Role.VIEWER
