"""Session-cookie authentication endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from professional_registry.api.dependencies import (
    get_container,
    get_session_id,
    require_authenticated,
    set_session_cookie,
)
from professional_registry.domain.errors import ValidationError
from professional_registry.domain.models import UserRecord
from professional_registry.domain.sessions import AuthenticatedSession
from professional_registry.domain.validation import (
    Invalid,
    validate_login,
    validate_registration,
)

if TYPE_CHECKING:
    from professional_registry.containers import AppContainer

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    request: Request, response: Response, payload: Any = Body(default=None)
) -> dict[str, object]:
    """Create an account and start a session for it."""
    container: AppContainer = get_container(request)
    result = validate_registration(payload)
    if isinstance(result, Invalid):
        raise ValidationError("Invalid registration data", result.errors)
    user, session = container.auth_service.register(result.value)
    set_session_cookie(response, container.settings, session.id)
    return serialize_user(user)


@router.post("/login")
def login(
    request: Request, response: Response, payload: Any = Body(default=None)
) -> dict[str, object]:
    """Verify credentials and start a session."""
    container: AppContainer = get_container(request)
    result = validate_login(payload)
    if isinstance(result, Invalid):
        raise ValidationError("Invalid login data", result.errors)
    user, session = container.auth_service.login(result.value)
    set_session_cookie(response, container.settings, session.id)
    return serialize_user(user)


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    session_id: str | None = Depends(get_session_id),
) -> dict[str, str]:
    """End the current session; repeated calls succeed."""
    container: AppContainer = get_container(request)
    container.auth_service.logout(session_id)
    response.delete_cookie(
        container.settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=container.settings.secure_cookies,
    )
    return {"status": "ok"}


@router.get("/user")
def current_user(
    session: AuthenticatedSession = Depends(require_authenticated),
) -> dict[str, object]:
    """Return the user bound to the current session."""
    return serialize_user(session.user)


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Public view of a user; never includes the password hash."""
    return {
        "id": user.id,
        "username": user.username,
        "fullName": user.full_name,
        "isStaff": user.is_staff,
    }
