"""Authentication and durable session management.

A session moves from Anonymous to Authenticated on login or registration and
ends when the user logs out or the session expires. Resolution never raises
for an unknown or expired session; it reports Anonymous as ``None`` and lets
the access-control layer decide.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from professional_registry.domain.errors import DuplicateUsername, InvalidCredentials
from professional_registry.domain.models import UserRecord
from professional_registry.domain.sessions import AuthenticatedSession, SessionRecord
from professional_registry.domain.validation import LoginRequest, RegisterRequest
from professional_registry.services.passwords import BcryptPasswordHasher
from professional_registry.services.users import UserService

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for login sessions."""

    def create_session(
        self, session_id: str, user_id: int, expires_at: datetime
    ) -> SessionRecord:
        """Create a session row and return it."""

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""

    def extend_session(self, session_id: str, expires_at: datetime) -> None:
        """Move the expiry of a session."""

    def delete_session(self, session_id: str) -> None:
        """Delete a session; missing sessions are ignored."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AuthService:
    """Verifies credentials and maps session ids to users."""

    user_service: UserService
    session_repository: SessionRepository
    hasher: BcryptPasswordHasher
    session_ttl: timedelta
    clock: Callable[[], datetime] = _utcnow
    _dummy_hash: str | None = field(default=None, init=False, repr=False)

    def register(self, request: RegisterRequest) -> tuple[UserRecord, SessionRecord]:
        """Create an account and log it in."""
        if self.user_service.get_user_by_username(request.username) is not None:
            raise DuplicateUsername()
        user = self.user_service.create_user(
            username=request.username,
            password_hash=self.hasher.hash(request.password),
            full_name=request.full_name,
            is_staff=request.is_staff,
        )
        logger.info(
            "User registered",
            extra={"user_id": user.id, "role": user.role.value},
        )
        return user, self._start_session(user)

    def login(self, request: LoginRequest) -> tuple[UserRecord, SessionRecord]:
        """Check credentials and open a session."""
        user = self.user_service.get_user_by_username(request.username)
        if user is None:
            # Same cost as a real check so response time does not leak existence.
            self.hasher.verify(request.password, self._get_dummy_hash())
            logger.info("Login failed", extra={"username": request.username})
            raise InvalidCredentials()
        if not self.hasher.verify(request.password, user.password_hash):
            logger.info("Login failed", extra={"username": request.username})
            raise InvalidCredentials()
        return user, self._start_session(user)

    def logout(self, session_id: str | None) -> None:
        """Destroy a session. Unknown or missing ids are ignored."""
        if session_id:
            self.session_repository.delete_session(session_id)

    def resolve(self, session_id: str | None) -> AuthenticatedSession | None:
        """Return the authenticated session, or None for Anonymous."""
        if not session_id:
            return None
        session = self.session_repository.get_session(session_id)
        if session is None:
            return None
        now = self.clock()
        if session.expires_at <= now:
            self.session_repository.delete_session(session.id)
            return None
        user = self.user_service.get_user(session.user_id)
        if user is None:
            self.session_repository.delete_session(session.id)
            return None
        renewed = session.expires_at - now < self.session_ttl / 2
        if renewed:
            self.session_repository.extend_session(session.id, now + self.session_ttl)
        return AuthenticatedSession(
            session_id=session.id, user=user, role=user.role, renewed=renewed
        )

    def _start_session(self, user: UserRecord) -> SessionRecord:
        return self.session_repository.create_session(
            session_id=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=self.clock() + self.session_ttl,
        )

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash
