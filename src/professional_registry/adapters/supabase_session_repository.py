"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from professional_registry.adapters.supabase_errors import storage_errors
from professional_registry.domain.errors import StorageError
from professional_registry.domain.sessions import SessionRecord
from professional_registry.services.auth import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for login sessions."""

    client: Client

    def create_session(
        self, session_id: str, user_id: int, expires_at: datetime
    ) -> SessionRecord:
        """Create a session row and return it."""
        with storage_errors("create session"):
            response = (
                self.client.table("sessions")
                .insert(
                    {
                        "id": session_id,
                        "user_id": user_id,
                        "expires_at": expires_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageError("Failed to create session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""
        with storage_errors("load session"):
            response = (
                self.client.table("sessions")
                .select("id, user_id, expires_at")
                .eq("id", session_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def extend_session(self, session_id: str, expires_at: datetime) -> None:
        """Move the session expiry forward."""
        with storage_errors("renew session"):
            self.client.table("sessions").update(
                {"expires_at": expires_at.isoformat()}
            ).eq("id", session_id).execute()

    def delete_session(self, session_id: str) -> None:
        """Delete a session row."""
        with storage_errors("delete session"):
            self.client.table("sessions").delete().eq("id", session_id).execute()


def _parse_session(row: dict[str, object]) -> SessionRecord:
    return SessionRecord(
        id=str(row["id"]),
        user_id=int(row["user_id"]),
        expires_at=datetime.fromisoformat(str(row["expires_at"])),
    )
