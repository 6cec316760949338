"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from professional_registry.api.auth import router as auth_router
from professional_registry.api.professionals import router as professionals_router
from professional_registry.app_logging import configure_logging
from professional_registry.containers import AppContainer
from professional_registry.domain.errors import (
    DuplicateUsername,
    FieldError,
    Forbidden,
    InvalidCredentials,
    NotFound,
    RegistryError,
    StorageError,
    Unauthenticated,
    ValidationError,
)

_STATUS_CODES: dict[type[RegistryError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateUsername: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Professional Registry API")
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(professionals_router)

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            "Storage failure",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    @app.exception_handler(RegistryError)
    async def handle_registry_error(
        request: Request, exc: RegistryError
    ) -> JSONResponse:
        return _error_response(
            _STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR),
            exc.message,
            exc.errors if isinstance(exc, ValidationError) else None,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            FieldError(
                field=".".join(str(part) for part in error.get("loc", ())) or "body",
                message=str(error.get("msg", "")),
            )
            for error in exc.errors()
        ]
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    return app


def _error_response(
    status_code: int, message: str, errors: list[FieldError] | None
) -> JSONResponse:
    content: dict[str, object] = {"message": message}
    if errors is not None:
        content["errors"] = [
            {"field": error.field, "message": error.message} for error in errors
        ]
    return JSONResponse(status_code=status_code, content=content)
