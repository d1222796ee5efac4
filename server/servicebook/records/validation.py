"""Checks a form runs before handing a record to the encoder."""

from typing import List

from servicebook.records.catalog import OTHER_SENTINEL
from servicebook.records.types import StructuredServiceRecord


class ServiceRecordValidationError(ValueError):
    """Raised when a structured record is not fit for submission."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def validate_record(record: StructuredServiceRecord) -> List[str]:
    """Return user-facing error messages; an empty list means valid.

    Every service needs a type and at least one item, and every item needs
    a name.

    Commas are rejected in custom labels because labels are stored as one
    comma-separated string.
    """
    errors: List[str] = []

    if not record.services:
        errors.append("At least one service is required.")

    for position, entry in enumerate(record.services, start=1):
        label = entry.resolved_label
        if not label.strip():
            errors.append(f"Service {position}: please choose a service type.")
        elif entry.service_type_label == OTHER_SENTINEL and "," in label:
            errors.append(f"Service {position}: custom service type cannot contain a comma.")

        if not entry.items:
            errors.append(f"Service {position}: add at least one item.")

        for item_position, item in enumerate(entry.items, start=1):
            if not (item.name or "").strip():
                errors.append(f"Service {position}, item {item_position}: name is required.")

    return errors


def ensure_valid(record: StructuredServiceRecord) -> None:
    errors = validate_record(record)
    if errors:
        raise ServiceRecordValidationError(errors)
