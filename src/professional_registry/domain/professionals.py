"""Domain models for professional registrations."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class ServiceType(StrEnum):
    """Kind of registration service requested."""

    NEW = "New"
    RENEWAL = "Renewal"
    UPGRADE = "Upgrade"
    PRACTICING = "Practicing"
    LOST = "Lost"
    REPLACEMENT = "Replacement"


# Text fields renormalized to title case on every write.
TITLE_CASED_FIELDS = ("full_name", "professional_title")


@dataclass(frozen=True)
class Professional:
    """Represents a registered professional."""

    id: int
    tracking_number: str
    full_name: str
    gender: str
    date_of_registration: date
    phone_number: str
    professional_title: str
    professional_number: str
    sector: str
    service_type: str
