"""Request-scoped dependencies: container lookup and access-control gates."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from fastapi import Depends, Request, Response

from professional_registry.domain.errors import Forbidden, Unauthenticated
from professional_registry.domain.models import Role
from professional_registry.domain.sessions import AuthenticatedSession

if TYPE_CHECKING:
    from professional_registry.config import Settings
    from professional_registry.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def get_session_id(request: Request) -> str | None:
    """Return the session id carried by the request cookie."""
    container = get_container(request)
    return request.cookies.get(container.settings.session_cookie_name)


def set_session_cookie(response: Response, settings: Settings, session_id: str) -> None:
    """Send the session cookie with a full TTL."""
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )


def refresh_session_cookie(
    response: Response, settings: Settings, session: AuthenticatedSession
) -> None:
    """Re-send the cookie when the server extended the session."""
    if session.renewed:
        set_session_cookie(response, settings, session.session_id)


def current_session(
    request: Request,
    response: Response,
    session_id: str | None = Depends(get_session_id),
) -> AuthenticatedSession | None:
    """Resolve the session cookie; None means Anonymous."""
    container = get_container(request)
    session = container.auth_service.resolve(session_id)
    if session is not None:
        refresh_session_cookie(response, container.settings, session)
    return session


def require_authenticated(
    session: AuthenticatedSession | None = Depends(current_session),
) -> AuthenticatedSession:
    """Reject anonymous requests."""
    if session is None:
        raise Unauthenticated()
    return session


def require_staff(
    session: AuthenticatedSession = Depends(require_authenticated),
) -> AuthenticatedSession:
    """Reject sessions whose user is not staff."""
    match session.role:
        case Role.STAFF:
            return session
        case Role.VIEWER:
            raise Forbidden()
        case _:
            assert_never(session.role)
