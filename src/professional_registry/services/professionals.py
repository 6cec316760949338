"""Services for managing professional registrations."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from professional_registry.domain.professionals import TITLE_CASED_FIELDS, Professional
from professional_registry.domain.validation import (
    ProfessionalCreate,
    ProfessionalUpdate,
)

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\S+")


class ProfessionalRepository(Protocol):
    """Persistence interface for professional records."""

    def list_professionals(self) -> list[Professional]:
        """Return all records ordered by id."""

    def search_professionals(self, term: str) -> list[Professional]:
        """Return records whose full name or phone number contains the term."""

    def get_professional(self, professional_id: int) -> Professional | None:
        """Return a record by id, if present."""

    def create_professional(self, payload: dict[str, object]) -> Professional:
        """Insert a record and return it with its assigned id."""

    def update_professional(
        self, professional_id: int, payload: dict[str, object]
    ) -> Professional | None:
        """Apply changes to a record; None when it does not exist."""

    def delete_professional(self, professional_id: int) -> bool:
        """Delete a record; True when a row was removed."""


def title_case(value: str) -> str:
    """Lower-case the text, then capitalize each whitespace-separated word.

    Whitespace is preserved as-is: ``"JOHN  doe"`` becomes ``"John  Doe"``.
    """
    return _WORD.sub(_capitalize_word, value.lower())


def _capitalize_word(match: re.Match[str]) -> str:
    word = match.group(0)
    return word[:1].upper() + word[1:]


def normalize_fields(payload: dict[str, object]) -> dict[str, object]:
    """Title-case the name and title fields present in a payload."""
    normalized = dict(payload)
    for field in TITLE_CASED_FIELDS:
        value = normalized.get(field)
        if isinstance(value, str):
            normalized[field] = title_case(value)
    return normalized


@dataclass
class ProfessionalService:
    """Application service for professional records."""

    repository: ProfessionalRepository

    def get_professionals(self) -> list[Professional]:
        """Return every registered professional."""
        return self.repository.list_professionals()

    def search_professionals(self, term: str | None) -> list[Professional]:
        """Search by name or phone, falling back to the full list when empty."""
        if not term:
            return self.get_professionals()
        return self.repository.search_professionals(term)

    def get_professional(self, professional_id: int) -> Professional | None:
        """Return a single professional, if present."""
        return self.repository.get_professional(professional_id)

    def create_professional(self, request: ProfessionalCreate) -> Professional:
        """Normalize and persist a new professional."""
        payload = normalize_fields(request.model_dump(mode="python"))
        created = self.repository.create_professional(payload)
        logger.info("Professional created", extra={"professional_id": created.id})
        return created

    def update_professional(
        self, professional_id: int, request: ProfessionalUpdate
    ) -> Professional | None:
        """Merge the present fields into an existing record."""
        changes = request.changes()
        if not changes:
            return self.repository.get_professional(professional_id)
        updated = self.repository.update_professional(
            professional_id, normalize_fields(changes)
        )
        if updated is not None:
            logger.info(
                "Professional updated",
                extra={"professional_id": professional_id, "fields": sorted(changes)},
            )
        return updated

    def delete_professional(self, professional_id: int) -> bool:
        """Hard-delete a record."""
        deleted = self.repository.delete_professional(professional_id)
        if deleted:
            logger.info(
                "Professional deleted", extra={"professional_id": professional_id}
            )
        return deleted
