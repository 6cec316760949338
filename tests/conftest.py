"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from professional_registry.api.app import create_app
from professional_registry.config import Settings
from professional_registry.containers import AppContainer
from professional_registry.domain.errors import DuplicateUsername
from professional_registry.domain.models import UserRecord
from professional_registry.domain.professionals import Professional
from professional_registry.domain.sessions import SessionRecord
from professional_registry.services.auth import AuthService, SessionRepository
from professional_registry.services.passwords import BcryptPasswordHasher
from professional_registry.services.professionals import (
    ProfessionalRepository,
    ProfessionalService,
)
from professional_registry.services.users import UserRepository, UserService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    next_id: int = 1

    def get_user(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> UserRecord | None:
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    def create_user(
        self, username: str, password_hash: str, full_name: str, is_staff: bool
    ) -> UserRecord:
        if self.get_by_username(username) is not None:
            raise DuplicateUsername()
        user = UserRecord(
            id=self.next_id,
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            is_staff=is_staff,
        )
        self.users[user.id] = user
        self.next_id += 1
        return user


@dataclass
class InMemoryProfessionalRepository(ProfessionalRepository):
    """In-memory professional repository for tests."""

    professionals: dict[int, Professional] = field(default_factory=dict)
    next_id: int = 1
    writes: int = 0

    def list_professionals(self) -> list[Professional]:
        return [self.professionals[key] for key in sorted(self.professionals)]

    def search_professionals(self, term: str) -> list[Professional]:
        needle = term.lower()
        return [
            professional
            for professional in self.list_professionals()
            if needle in professional.full_name.lower()
            or needle in professional.phone_number.lower()
        ]

    def get_professional(self, professional_id: int) -> Professional | None:
        return self.professionals.get(professional_id)

    def create_professional(self, payload: dict[str, object]) -> Professional:
        professional = Professional(id=self.next_id, **_plain(payload))
        self.professionals[professional.id] = professional
        self.next_id += 1
        self.writes += 1
        return professional

    def update_professional(
        self, professional_id: int, payload: dict[str, object]
    ) -> Professional | None:
        current = self.professionals.get(professional_id)
        if current is None:
            return None
        updated = replace(current, **_plain(payload))
        self.professionals[professional_id] = updated
        self.writes += 1
        return updated

    def delete_professional(self, professional_id: int) -> bool:
        return self.professionals.pop(professional_id, None) is not None


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)
    extended: list[str] = field(default_factory=list)

    def create_session(
        self, session_id: str, user_id: int, expires_at: datetime
    ) -> SessionRecord:
        session = SessionRecord(id=session_id, user_id=user_id, expires_at=expires_at)
        self.sessions[session_id] = session
        return session

    def get_session(self, session_id: str) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def extend_session(self, session_id: str, expires_at: datetime) -> None:
        self.sessions[session_id] = replace(
            self.sessions[session_id], expires_at=expires_at
        )
        self.extended.append(session_id)

    def delete_session(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)


@dataclass
class FakeClock:
    """Controllable clock for session expiry tests."""

    now: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def _plain(payload: dict[str, object]) -> dict[str, object]:
    return {
        key: str(value) if isinstance(value, str) else value
        for key, value in payload.items()
    }


def professional_payload(**overrides: object) -> dict[str, object]:
    """Return a valid camelCase create payload."""
    payload: dict[str, object] = {
        "trackingNumber": "ECA-2023-001",
        "fullName": "abebe BIKILA",
        "gender": "Male",
        "dateOfRegistration": "2023-05-01",
        "phoneNumber": "+251911000000",
        "professionalTitle": "civil ENGINEER",
        "professionalNumber": "PN-1001",
        "sector": "construction",
        "serviceType": "New",
    }
    payload.update(overrides)
    return payload


def make_professional(professional_id: int = 1, **overrides: object) -> Professional:
    """Return a stored professional record."""
    values: dict[str, object] = {
        "tracking_number": "ECA-2023-001",
        "full_name": "Abebe Bikila",
        "gender": "Male",
        "date_of_registration": date(2023, 5, 1),
        "phone_number": "+251911000000",
        "professional_title": "Civil Engineer",
        "professional_number": "PN-1001",
        "sector": "construction",
        "service_type": "New",
    }
    values.update(overrides)
    return Professional(id=professional_id, **values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"
        ),
        bcrypt_rounds=4,
        environment="local",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def professional_repository() -> InMemoryProfessionalRepository:
    return InMemoryProfessionalRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    professional_repository: InMemoryProfessionalRepository,
    session_repository: InMemorySessionRepository,
    clock: FakeClock,
) -> AppContainer:
    user_service = UserService(user_repository)
    auth_service = AuthService(
        user_service=user_service,
        session_repository=session_repository,
        hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
        session_ttl=settings.session_ttl,
        clock=clock,
    )
    return AppContainer(
        settings=settings,
        user_service=user_service,
        auth_service=auth_service,
        professional_service=ProfessionalService(professional_repository),
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def register(
    client: TestClient,
    username: str,
    *,
    is_staff: bool = False,
    password: str = "secret1",
) -> dict[str, object]:
    """Register a user through the API; the client keeps the session cookie."""
    response = client.post(
        "/api/register",
        json={
            "username": username,
            "password": password,
            "fullName": username.title(),
            "isStaff": is_staff,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def staff_client(container: AppContainer) -> TestClient:
    client = TestClient(create_app(container))
    register(client, "alice", is_staff=True)
    return client


@pytest.fixture
def viewer_client(container: AppContainer) -> TestClient:
    client = TestClient(create_app(container))
    register(client, "victor")
    return client
