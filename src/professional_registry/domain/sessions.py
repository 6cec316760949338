"""Domain models for login sessions."""

from dataclasses import dataclass
from datetime import datetime

from professional_registry.domain.models import Role, UserRecord


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted login session."""

    id: str
    user_id: int
    expires_at: datetime


@dataclass(frozen=True)
class AuthenticatedSession:
    """A resolved session bound to its user and role.

    ``renewed`` is set when resolving the session moved its expiry forward.
    """

    session_id: str
    user: UserRecord
    role: Role
    renewed: bool = False
