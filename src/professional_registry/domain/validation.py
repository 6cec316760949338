"""Request models and validation for inbound payloads.

Every validator returns either ``Valid`` wrapping the parsed model or
``Invalid`` listing field-level errors; none of them raise.
"""

from dataclasses import dataclass
from datetime import date
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from professional_registry.domain.errors import FieldError
from professional_registry.domain.professionals import ServiceType

NonEmptyText = Annotated[str, StringConstraints(min_length=1, strict=True)]

ModelT = TypeVar("ModelT", bound=BaseModel)


class _CamelModel(BaseModel):
    """Base model accepting camelCase keys and ignoring unknown ones."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ProfessionalCreate(_CamelModel):
    """Payload for creating a professional record."""

    tracking_number: NonEmptyText
    full_name: NonEmptyText
    gender: NonEmptyText
    date_of_registration: date
    phone_number: NonEmptyText
    professional_title: NonEmptyText
    professional_number: NonEmptyText
    sector: NonEmptyText
    service_type: ServiceType


class ProfessionalUpdate(_CamelModel):
    """Partial payload for updating a professional record."""

    tracking_number: NonEmptyText | None = None
    full_name: NonEmptyText | None = None
    gender: NonEmptyText | None = None
    date_of_registration: date | None = None
    phone_number: NonEmptyText | None = None
    professional_title: NonEmptyText | None = None
    professional_number: NonEmptyText | None = None
    sector: NonEmptyText | None = None
    service_type: ServiceType | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        # Defaults are not validated, so this only fires for explicit nulls.
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, object]:
        """Return only the fields present in the request."""
        return self.model_dump(exclude_unset=True, mode="python")


class ProfessionalSearch(BaseModel):
    """Query parameters for listing professionals."""

    model_config = ConfigDict(extra="ignore")

    search_term: str | None = Field(default=None, alias="searchTerm", strict=True)


class RegisterRequest(_CamelModel):
    """Payload for account registration."""

    username: Annotated[str, StringConstraints(min_length=3, strict=True)]
    password: Annotated[str, StringConstraints(min_length=6, strict=True)]
    full_name: Annotated[str, StringConstraints(min_length=3, strict=True)]
    is_staff: bool = False


class LoginRequest(_CamelModel):
    """Payload for logging in."""

    username: NonEmptyText
    password: NonEmptyText


@dataclass(frozen=True)
class Valid(Generic[ModelT]):
    """Successful validation carrying the parsed model."""

    value: ModelT


@dataclass(frozen=True)
class Invalid:
    """Failed validation carrying field errors."""

    errors: list[FieldError]


ValidationResult = Valid[ModelT] | Invalid


def validate_professional_create(
    payload: object,
) -> ValidationResult[ProfessionalCreate]:
    """Validate a create payload; all fields are required."""
    return _validate(ProfessionalCreate, payload)


def validate_professional_update(
    payload: object,
) -> ValidationResult[ProfessionalUpdate]:
    """Validate a partial update payload."""
    return _validate(ProfessionalUpdate, payload)


def validate_search(params: object) -> ValidationResult[ProfessionalSearch]:
    """Validate list query parameters."""
    return _validate(ProfessionalSearch, params)


def validate_registration(payload: object) -> ValidationResult[RegisterRequest]:
    """Validate a registration payload."""
    return _validate(RegisterRequest, payload)


def validate_login(payload: object) -> ValidationResult[LoginRequest]:
    """Validate a login payload."""
    return _validate(LoginRequest, payload)


def _validate(model: type[ModelT], payload: object) -> ValidationResult[ModelT]:
    try:
        return Valid(model.model_validate(payload))
    except PydanticValidationError as exc:
        return Invalid([_to_field_error(error) for error in exc.errors()])


def _to_field_error(error: dict) -> FieldError:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return FieldError(field=location or "body", message=str(error.get("msg", "")))
