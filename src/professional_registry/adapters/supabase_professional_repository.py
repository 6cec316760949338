"""Supabase implementation for professional records."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from professional_registry.adapters.supabase_errors import storage_errors
from professional_registry.domain.errors import StorageError
from professional_registry.domain.professionals import Professional
from professional_registry.services.professionals import ProfessionalRepository

_TABLE = "professionals"
_SEARCH_FUNCTION = "search_professionals"


@dataclass
class SupabaseProfessionalRepository(ProfessionalRepository):
    """Supabase-backed repository for professional registrations."""

    client: Client

    def list_professionals(self) -> list[Professional]:
        """Return all records in insertion order."""
        with storage_errors("fetch professionals"):
            response = self.client.table(_TABLE).select("*").order("id").execute()
        return [_parse_professional(row) for row in response.data or []]

    def search_professionals(self, term: str) -> list[Professional]:
        """Case-insensitive substring match on full name or phone number."""
        # Literal match via position(); ilike treats `*`, `%` and `_` as wildcards.
        with storage_errors("search professionals"):
            response = self.client.rpc(_SEARCH_FUNCTION, {"term": term}).execute()
        return [_parse_professional(row) for row in response.data or []]

    def get_professional(self, professional_id: int) -> Professional | None:
        """Return a record by id, if present."""
        with storage_errors("fetch professional"):
            response = (
                self.client.table(_TABLE)
                .select("*")
                .eq("id", professional_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_professional(response.data[0])

    def create_professional(self, payload: dict[str, object]) -> Professional:
        """Insert a record and return it."""
        with storage_errors("create professional"):
            response = self.client.table(_TABLE).insert(_to_row(payload)).execute()
        if not response.data:
            raise StorageError("Failed to create professional")
        return _parse_professional(response.data[0])

    def update_professional(
        self, professional_id: int, payload: dict[str, object]
    ) -> Professional | None:
        """Update a record and return it, or None when no row matched."""
        with storage_errors("update professional"):
            response = (
                self.client.table(_TABLE)
                .update(_to_row(payload))
                .eq("id", professional_id)
                .execute()
            )
        if not response.data:
            return None
        return _parse_professional(response.data[0])

    def delete_professional(self, professional_id: int) -> bool:
        """Delete a record; the response lists the removed rows."""
        with storage_errors("delete professional"):
            response = (
                self.client.table(_TABLE).delete().eq("id", professional_id).execute()
            )
        return bool(response.data)


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert a service payload to JSON-ready column values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, date):
            row[key] = value.isoformat()
        elif isinstance(value, str):
            # Drops StrEnum members down to their plain value.
            row[key] = str(value)
        else:
            row[key] = value
    return row


def _parse_professional(row: dict[str, object]) -> Professional:
    """Parse a professionals row into a domain model."""
    raw_date = row.get("date_of_registration")
    return Professional(
        id=int(row["id"]),
        tracking_number=str(row.get("tracking_number", "")),
        full_name=str(row.get("full_name", "")),
        gender=str(row.get("gender", "")),
        date_of_registration=(
            date.fromisoformat(raw_date) if isinstance(raw_date, str) else raw_date
        ),
        phone_number=str(row.get("phone_number", "")),
        professional_title=str(row.get("professional_title", "")),
        professional_number=str(row.get("professional_number", "")),
        sector=str(row.get("sector", "")),
        service_type=str(row.get("service_type", "")),
    )
