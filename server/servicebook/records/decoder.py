"""Flat storage fields -> structured record.

Decoding is a display/editing path: malformed input degrades to blank
pieces instead of raising.
"""

import logging
from typing import Dict, List

from servicebook.records.notes import decode_notes
from servicebook.records.parts import PartRecord, TaggedItem, all_tagged, narrow_parts
from servicebook.records.types import (
    LineItem,
    ServiceEntry,
    StoredServiceRecord,
    StructuredServiceRecord,
)

logger = logging.getLogger(__name__)


def split_labels(service_type) -> List[str]:
    """Ordered labels from the stored string, keeping empty segments."""
    if not service_type:
        return [""]
    if not isinstance(service_type, str):
        service_type = str(service_type)
    return [segment.strip() for segment in service_type.split(",")]


def group_items(labels: List[str], parts: List[PartRecord]) -> List[List[LineItem]]:
    """Assign stored items to label positions.

    Fully tagged lists are grouped by exact tag. Anything else is legacy
    data: every item goes to the first service and the rest stay empty.
    """
    if all_tagged(parts):
        groups: Dict[str, List[LineItem]] = {}
        for part in parts:
            groups.setdefault(part.service_type, []).append(part.to_line_item())

        unmatched = set(groups) - set(labels)
        if unmatched:
            logger.warning(f"Dropping items tagged with unknown service types: {sorted(unmatched)}")

        return [list(groups.get(label, [])) for label in labels]

    if parts and any(isinstance(part, TaggedItem) for part in parts):
        logger.debug("Partially tagged parts_used, using legacy grouping")
    if len(labels) > 1 and parts:
        logger.debug(f"Untagged items assigned to first of {len(labels)} services")

    first = [part.to_line_item() for part in parts]
    return [first] + [[] for _ in labels[1:]]


def _mileage(value):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def decode(stored: StoredServiceRecord) -> StructuredServiceRecord:
    labels = split_labels(stored.service_type)
    grouped = group_items(labels, narrow_parts(stored.parts_used))
    next_oil_change, plain_notes = decode_notes(stored.technician_notes)

    return StructuredServiceRecord(
        services=[
            ServiceEntry(service_type_label=label, items=items)
            for label, items in zip(labels, grouped)
        ],
        description=stored.description or "",
        technician_notes=plain_notes,
        next_oil_change_mileage=next_oil_change,
        mileage=_mileage(stored.mileage),
    )
