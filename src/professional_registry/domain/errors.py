"""Error taxonomy shared by services and the API layer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str


class RegistryError(Exception):
    """Base class for errors reported to API clients."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RegistryError):
    """Malformed or missing input."""

    default_message = "Invalid request"

    def __init__(
        self, message: str | None = None, errors: list[FieldError] | None = None
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class Unauthenticated(RegistryError):
    """The request carries no valid session."""

    default_message = "Not authenticated"


class InvalidCredentials(RegistryError):
    """Unknown username or wrong password."""

    default_message = "Invalid username or password"


class Forbidden(RegistryError):
    """The session user lacks the staff role."""

    default_message = "Staff access required"


class NotFound(RegistryError):
    """The referenced entity does not exist."""

    default_message = "Not found"


class DuplicateUsername(RegistryError):
    """Registration with a username that is already taken."""

    default_message = "Username already exists"


class StorageError(RegistryError):
    """Backend failure; details stay server-side."""

    default_message = "Storage operation failed"
