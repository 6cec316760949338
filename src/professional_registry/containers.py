"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from professional_registry.adapters.supabase_professional_repository import (
    SupabaseProfessionalRepository,
)
from professional_registry.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from professional_registry.adapters.supabase_user_repository import (
    SupabaseUserRepository,
)
from professional_registry.config import Settings
from professional_registry.services.auth import AuthService
from professional_registry.services.passwords import BcryptPasswordHasher
from professional_registry.services.professionals import ProfessionalService
from professional_registry.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    auth_service: AuthService
    professional_service: ProfessionalService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(SupabaseUserRepository(supabase_client))
    auth_service = AuthService(
        user_service=user_service,
        session_repository=SupabaseSessionRepository(supabase_client),
        hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
        session_ttl=resolved_settings.session_ttl,
    )
    professional_service = ProfessionalService(
        SupabaseProfessionalRepository(supabase_client)
    )
    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        auth_service=auth_service,
        professional_service=professional_service,
    )
