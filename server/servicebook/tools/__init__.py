"""Storage tools for service records."""

from servicebook.tools.service_record_tools import (
    create_service_record,
    get_service_record,
    retag_legacy_records,
    save_service_record,
    serialize_record,
)

__all__ = [
    "get_service_record",
    "create_service_record",
    "save_service_record",
    "retag_legacy_records",
    "serialize_record",
]
