"""Structured record -> flat storage fields."""

from typing import Any, Dict, List

from servicebook.records.notes import encode_notes
from servicebook.records.parts import SERVICE_TYPE_TAG
from servicebook.records.types import StoredServiceRecord, StructuredServiceRecord

LABEL_SEPARATOR = ", "


def encode(record: StructuredServiceRecord) -> StoredServiceRecord:
    """Flatten a structured record for storage.

    Every service keeps its position in ``service_type`` even when its
    resolved label is empty, and every stored item is tagged with the label
    of the service it belongs to. Business-rule validation is the caller's
    job (see ``validation.ensure_valid``); this function accepts any record.
    """
    labels: List[str] = []
    parts: List[Dict[str, Any]] = []

    for entry in record.services:
        label = entry.resolved_label
        labels.append(label)
        for item in entry.items:
            wire = item.to_wire()
            wire[SERVICE_TYPE_TAG] = label
            parts.append(wire)

    return StoredServiceRecord(
        service_type=LABEL_SEPARATOR.join(labels),
        parts_used=parts,
        technician_notes=encode_notes(record.next_oil_change_mileage, record.technician_notes),
        description=record.description,
        mileage=record.mileage,
    )
