"""Tests for the professional service."""

from datetime import date

from professional_registry.domain.validation import (
    ProfessionalCreate,
    ProfessionalUpdate,
)
from professional_registry.services.professionals import (
    ProfessionalService,
    title_case,
)
from tests.conftest import InMemoryProfessionalRepository, professional_payload


def _create(service: ProfessionalService, **overrides: object):
    return service.create_professional(
        ProfessionalCreate.model_validate(professional_payload(**overrides))
    )


def test_title_case_preserves_whitespace() -> None:
    assert title_case("JOHN  doe") == "John  Doe"
    assert title_case("jane DOE") == "Jane Doe"
    assert title_case(" senior\tARCHITECT ") == " Senior\tArchitect "
    assert title_case("o'neil mc-DONALD") == "O'neil Mc-donald"
    assert title_case("") == ""


def test_create_normalizes_name_and_title() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())

    created = _create(service, fullName="jane DOE", professionalTitle="SITE engineer")

    assert created.full_name == "Jane Doe"
    assert created.professional_title == "Site Engineer"
    assert created.tracking_number == "ECA-2023-001"
    assert created.date_of_registration == date(2023, 5, 1)
    assert created.service_type == "New"


def test_identical_creates_get_distinct_increasing_ids() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())

    first = _create(service)
    second = _create(service)

    assert first.id < second.id
    assert len(service.get_professionals()) == 2


def test_created_record_is_listed_once() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())

    created = _create(service, trackingNumber="ECA-2023-042")

    matching = [
        item
        for item in service.get_professionals()
        if item.tracking_number == "ECA-2023-042"
    ]
    assert matching == [created]


def test_empty_search_returns_everything() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())
    _create(service, fullName="Abebe Bikila")
    _create(service, fullName="Tirunesh Dibaba")

    assert service.search_professionals("") == service.get_professionals()
    assert service.search_professionals(None) == service.get_professionals()


def test_search_matches_name_or_phone_case_insensitively() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())
    abebe = _create(service, fullName="Abebe Bikila", phoneNumber="0911111111")
    tirunesh = _create(service, fullName="Tirunesh Dibaba", phoneNumber="0922222222")
    _create(service, fullName="Haile Gebrselassie", phoneNumber="0933333333")

    assert service.search_professionals("BIKILA") == [abebe]
    assert service.search_professionals("09222") == [tirunesh]
    assert service.search_professionals("e") == service.get_professionals()
    assert service.search_professionals("ECA-2023") == []


def test_update_with_no_fields_returns_record_unchanged() -> None:
    repository = InMemoryProfessionalRepository()
    service = ProfessionalService(repository)
    created = _create(service)
    writes = repository.writes

    result = service.update_professional(created.id, ProfessionalUpdate())

    assert result == created
    assert repository.writes == writes


def test_update_missing_record_returns_none() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())

    assert service.update_professional(42, ProfessionalUpdate()) is None
    assert (
        service.update_professional(
            42, ProfessionalUpdate.model_validate({"sector": "water"})
        )
        is None
    )


def test_update_normalizes_only_present_fields() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())
    created = _create(service)

    updated = service.update_professional(
        created.id,
        ProfessionalUpdate.model_validate(
            {"fullName": "MARTA  roba", "sector": "water"}
        ),
    )

    assert updated is not None
    assert updated.full_name == "Marta  Roba"
    assert updated.sector == "water"
    assert updated.professional_title == created.professional_title
    assert updated.id == created.id


def test_delete_succeeds_exactly_once() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())
    created = _create(service)

    assert service.delete_professional(created.id) is True
    assert service.delete_professional(created.id) is False
    assert service.get_professionals() == []


def test_get_professional_by_id() -> None:
    service = ProfessionalService(InMemoryProfessionalRepository())
    created = _create(service)

    assert service.get_professional(created.id) == created
    assert service.get_professional(created.id + 1) is None
