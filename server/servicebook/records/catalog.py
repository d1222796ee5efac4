"""Service type catalog shared by forms, cards and the record codec."""

import enum
from typing import Tuple


class ServiceType(str, enum.Enum):
    """Selectable service types, valued by their display label."""

    OIL_CHANGE = "Oil Change"
    BRAKE_SERVICE = "Brake Service"
    TIRE_ROTATION = "Tire Rotation"
    GENERAL_MAINTENANCE = "General Maintenance"
    REPAIR = "Repair"
    INSPECTION = "Inspection"
    TRANSMISSION_SERVICE = "Transmission Service"
    ENGINE_SERVICE = "Engine Service"
    ELECTRICAL_SERVICE = "Electrical Service"
    AIR_CONDITIONING = "Air Conditioning"
    OTHER = "Other"


OTHER_SENTINEL = ServiceType.OTHER.value

CATALOG_LABELS = tuple(member.value for member in ServiceType)

# Older rows stored snake_case keys instead of labels
_LEGACY_KEYS = {member.name.lower(): member.value for member in ServiceType}


def is_catalog_label(label: str) -> bool:
    return label in CATALOG_LABELS


def display_label(value: str) -> str:
    """Map a stored service type (label or legacy key) to its display label.

    Unknown values are returned unchanged so free-text labels survive.
    """
    if not value:
        return value
    return _LEGACY_KEYS.get(value.strip().lower(), value)


def to_form_selection(label: str) -> Tuple[str, str]:
    """Split a decoded label into (catalog selection, custom label)."""
    label = display_label(label)
    if not label:
        return "", ""
    if is_catalog_label(label):
        return label, ""
    return OTHER_SENTINEL, label


def is_oil_change(label: str) -> bool:
    lowered = (label or "").lower()
    return "oil" in lowered and "change" in lowered
