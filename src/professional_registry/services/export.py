"""CSV export of professional records."""

import csv
import io
from collections.abc import Sequence
from datetime import date

from professional_registry.domain.professionals import Professional

EXPORT_HEADERS = (
    "Roll No.",
    "Tracking Number",
    "Full Name",
    "Gender",
    "Phone Number",
    "Professional Title",
    "Professional Number",
    "Sector",
    "Service Type",
    "Date of Registration",
)

# Excel needs the BOM to detect UTF-8.
_BOM = "\ufeff"


def export_professionals_csv(professionals: Sequence[Professional]) -> str:
    """Render records as a quoted CSV document.

    Roll No. is the 1-based row position, not the stored id.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for index, professional in enumerate(professionals, start=1):
        writer.writerow(
            [
                index,
                professional.tracking_number,
                professional.full_name,
                professional.gender,
                professional.phone_number,
                professional.professional_title,
                professional.professional_number,
                professional.sector,
                professional.service_type,
                professional.date_of_registration.isoformat(),
            ]
        )
    return _BOM + buffer.getvalue().removesuffix("\n")


def export_filename(today: date) -> str:
    """Return the download name for an export made on ``today``."""
    return f"professionals_data_{today.isoformat()}.csv"
