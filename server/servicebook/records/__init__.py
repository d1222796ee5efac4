"""Service record codec: structured services and items <-> flat storage fields."""

from servicebook.records.cost import line_total, subtotal, total_cost
from servicebook.records.decoder import decode
from servicebook.records.encoder import encode
from servicebook.records.notes import decode_notes, encode_notes
from servicebook.records.types import (
    LineItem,
    ServiceEntry,
    StoredServiceRecord,
    StructuredServiceRecord,
    has_oil_change,
    new_service_entry,
)
from servicebook.records.validation import (
    ServiceRecordValidationError,
    ensure_valid,
    validate_record,
)

__all__ = [
    "LineItem",
    "ServiceEntry",
    "StructuredServiceRecord",
    "StoredServiceRecord",
    "new_service_entry",
    "encode",
    "decode",
    "encode_notes",
    "decode_notes",
    "line_total",
    "subtotal",
    "total_cost",
    "has_oil_change",
    "validate_record",
    "ensure_valid",
    "ServiceRecordValidationError",
]
