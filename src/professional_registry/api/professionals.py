"""Professional registration endpoints."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from professional_registry.api.dependencies import (
    get_container,
    refresh_session_cookie,
    require_authenticated,
    require_staff,
)
from professional_registry.domain.errors import (
    FieldError,
    NotFound,
    StorageError,
    ValidationError,
)
from professional_registry.domain.professionals import Professional
from professional_registry.domain.sessions import AuthenticatedSession
from professional_registry.domain.validation import (
    Invalid,
    validate_professional_create,
    validate_professional_update,
    validate_search,
)
from professional_registry.services.export import (
    export_filename,
    export_professionals_csv,
)

if TYPE_CHECKING:
    from professional_registry.containers import AppContainer

logger = logging.getLogger(__name__)

# Upper bound of the bigint id column.
_MAX_ID = 2**63 - 1

router = APIRouter(prefix="/api/professionals", tags=["professionals"])


@router.get("", dependencies=[Depends(require_authenticated)])
def list_professionals(request: Request) -> list[dict[str, object]]:
    """List all professionals, or those matching ``searchTerm``."""
    container: AppContainer = get_container(request)
    term = _search_term(request)
    with _storage_failure("Failed to fetch professionals"):
        professionals = container.professional_service.search_professionals(term)
    return [serialize_professional(item) for item in professionals]


@router.get("/export")
def export_professionals(
    request: Request,
    session: AuthenticatedSession = Depends(require_authenticated),
) -> Response:
    """Download the listed professionals as CSV."""
    container: AppContainer = get_container(request)
    term = _search_term(request)
    with _storage_failure("Failed to export professionals"):
        professionals = container.professional_service.search_professionals(term)
    filename = export_filename(datetime.now(tz=UTC).date())
    response = Response(
        content=export_professionals_csv(professionals).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
    # Headers set by dependencies are not merged into a returned Response.
    refresh_session_cookie(response, container.settings, session)
    return response


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def create_professional(
    request: Request, payload: Any = Body(default=None)
) -> dict[str, object]:
    """Create a professional record."""
    container: AppContainer = get_container(request)
    result = validate_professional_create(payload)
    if isinstance(result, Invalid):
        raise ValidationError("Invalid professional data", result.errors)
    with _storage_failure("Failed to create professional"):
        created = container.professional_service.create_professional(result.value)
    return serialize_professional(created)


@router.patch("/{professional_id}", dependencies=[Depends(require_staff)])
def update_professional(
    professional_id: str, request: Request, payload: Any = Body(default=None)
) -> dict[str, object]:
    """Apply a partial update to a professional record."""
    container: AppContainer = get_container(request)
    record_id = _parse_id(professional_id)
    result = validate_professional_update(payload)
    if isinstance(result, Invalid):
        raise ValidationError("Invalid professional data", result.errors)
    with _storage_failure("Failed to update professional"):
        updated = container.professional_service.update_professional(
            record_id, result.value
        )
    if updated is None:
        raise NotFound("Professional not found")
    return serialize_professional(updated)


@router.delete(
    "/{professional_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_staff)],
)
def delete_professional(professional_id: str, request: Request) -> None:
    """Delete a professional record."""
    container: AppContainer = get_container(request)
    record_id = _parse_id(professional_id)
    with _storage_failure("Failed to delete professional"):
        deleted = container.professional_service.delete_professional(record_id)
    if not deleted:
        raise NotFound("Professional not found")


def serialize_professional(professional: Professional) -> dict[str, object]:
    """Return the camelCase wire form of a record."""
    return {
        "id": professional.id,
        "trackingNumber": professional.tracking_number,
        "fullName": professional.full_name,
        "gender": professional.gender,
        "dateOfRegistration": professional.date_of_registration.isoformat(),
        "phoneNumber": professional.phone_number,
        "professionalTitle": professional.professional_title,
        "professionalNumber": professional.professional_number,
        "sector": professional.sector,
        "serviceType": professional.service_type,
    }


def _search_term(request: Request) -> str | None:
    values = request.query_params.getlist("searchTerm")
    params: dict[str, object] = {}
    if len(values) == 1:
        params["searchTerm"] = values[0]
    elif values:
        params["searchTerm"] = values
    result = validate_search(params)
    if isinstance(result, Invalid):
        raise ValidationError("Invalid search parameters", result.errors)
    return result.value.search_term


def _parse_id(raw: str) -> int:
    if raw.isascii() and raw.isdigit() and len(raw) <= len(str(_MAX_ID)):
        value = int(raw)
        if value <= _MAX_ID:
            return value
    raise ValidationError(
        "Invalid professional ID",
        [FieldError(field="id", message="must be a positive integer")],
    )


@contextmanager
def _storage_failure(message: str) -> Iterator[None]:
    """Turn storage errors into an opaque 500 carrying ``message``."""
    try:
        yield
    except StorageError:
        logger.exception(message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        ) from None
