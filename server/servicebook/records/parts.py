"""Narrowing of the loosely typed ``parts_used`` column.

Rows written before items carried a ``serviceType`` tag hold plain
``{name, quantity, price}`` objects; newer rows tag every item with the
label of the service it belongs to. Some report screens also stored the
array as a JSON string.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Union

from servicebook.records.types import LineItem

logger = logging.getLogger(__name__)

SERVICE_TYPE_TAG = "serviceType"


@dataclass(frozen=True)
class LegacyItem:
    """Stored item without a usable service type tag."""

    data: Mapping[str, Any]

    def to_line_item(self) -> LineItem:
        return LineItem.from_wire(self.data)


@dataclass(frozen=True)
class TaggedItem:
    """Stored item tagged with the label of its owning service."""

    data: Mapping[str, Any]
    service_type: str

    def to_line_item(self) -> LineItem:
        return LineItem.from_wire(self.data)


PartRecord = Union[LegacyItem, TaggedItem]


def normalize_parts(value: Any) -> List[Dict[str, Any]]:
    """Return the stored items as a list of dicts, never raising.

    Accepts a list, or a string holding a JSON array. Anything else, and any
    element that is not an object, is dropped.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value) if value.strip() else []
        except ValueError:
            logger.warning("parts_used is not valid JSON, treating as empty")
            return []

    if not isinstance(value, (list, tuple)):
        if value is not None:
            logger.warning(f"parts_used has unexpected type {type(value).__name__}, treating as empty")
        return []

    return [dict(item) for item in value if isinstance(item, Mapping)]


def classify_part(obj: Mapping[str, Any]) -> PartRecord:
    tag = obj.get(SERVICE_TYPE_TAG)
    if isinstance(tag, str) and tag.strip():
        return TaggedItem(data=obj, service_type=tag.strip())
    return LegacyItem(data=obj)


def narrow_parts(value: Any) -> List[PartRecord]:
    return [classify_part(obj) for obj in normalize_parts(value)]


def all_tagged(parts: List[PartRecord]) -> bool:
    """True only for a non-empty list in which every item is tagged."""
    return bool(parts) and all(isinstance(part, TaggedItem) for part in parts)
