"""Translation of Supabase client failures into storage errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from professional_registry.domain.errors import StorageError

UNIQUE_VIOLATION = "23505"


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise PostgREST and transport failures as ``StorageError``."""
    try:
        yield
    except (APIError, httpx.HTTPError) as exc:
        raise StorageError(f"Failed to {operation}") from exc
