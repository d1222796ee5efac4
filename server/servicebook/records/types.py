"""In-memory and stored shapes of a service record.

A job is described in memory as several services, each holding its own
priced line items. Storage only keeps three flat fields (a comma-joined
service type string, one JSON array of items and a notes string), so the
codec in this package translates between the two shapes.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from servicebook.records.catalog import OTHER_SENTINEL, is_oil_change

DEFAULT_QUANTITY = 1
DEFAULT_PRICE = Decimal("0")


def to_decimal(value: Any) -> Optional[Decimal]:
    """Best-effort numeric conversion; None when the value is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def coerce_quantity(value: Any) -> int:
    number = to_decimal(value)
    if number is None or number < 1:
        return DEFAULT_QUANTITY
    return int(number)


def stored_quantity(value: Any) -> Optional[Any]:
    """Quantity as read from storage; None when missing or not a number."""
    number = to_decimal(value)
    if number is None:
        return None
    if number == number.to_integral_value():
        return int(number)
    return number


def price_to_wire(value: Any) -> Any:
    """JSON number for a price.

    Whole amounts are written as exact ints. Fractional amounts go through
    float, which keeps about 15 significant digits.
    """
    price = to_decimal(value)
    if price is None:
        return 0.0
    if price == price.to_integral_value():
        return int(price)
    return float(price)


def coerce_price(value: Any) -> Decimal:
    number = to_decimal(value)
    if number is None or number < 0:
        return DEFAULT_PRICE
    return number


@dataclass
class LineItem:
    """One billable part or labor item; price is the unit price.

    New items start with quantity 1. Items read from storage keep the stored
    quantity, or None when it is missing or not a number, so cost totals
    count it as 0. The 1 default is applied again when the item is written.
    """

    name: str = ""
    quantity: Optional[int] = DEFAULT_QUANTITY
    price: Decimal = DEFAULT_PRICE

    @classmethod
    def from_wire(cls, obj: Mapping[str, Any]) -> "LineItem":
        """Build an item from a stored ``parts_used`` element.

        Missing or invalid quantity is kept as None and missing or invalid
        price falls back to 0. A missing name is kept as an empty string.
        """
        name = obj.get("name")
        return cls(
            name=name if isinstance(name, str) else ("" if name is None else str(name)),
            quantity=stored_quantity(obj.get("quantity")),
            price=coerce_price(obj.get("price")),
        )

    def to_wire(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": coerce_quantity(self.quantity),
            "price": price_to_wire(self.price),
        }


@dataclass
class ServiceEntry:
    """One labeled group of items on a job.

    ``service_type_label`` is a catalog selection. When it is the "Other"
    sentinel, ``custom_label`` carries the free-text label typed by the user.
    """

    service_type_label: str = ""
    items: List[LineItem] = field(default_factory=list)
    custom_label: str = ""

    @property
    def resolved_label(self) -> str:
        custom = (self.custom_label or "").strip()
        if self.service_type_label == OTHER_SENTINEL and custom:
            return custom
        return (self.service_type_label or "").strip()


def new_service_entry() -> ServiceEntry:
    """Blank service as added by the form: no type, one default item."""
    return ServiceEntry(items=[LineItem()])


@dataclass
class StructuredServiceRecord:
    services: List[ServiceEntry] = field(default_factory=list)
    description: str = ""
    technician_notes: str = ""
    next_oil_change_mileage: str = ""
    mileage: Optional[int] = None


@dataclass
class StoredServiceRecord:
    """Flat persisted shape, mirroring the ``service_records`` columns."""

    service_type: str = ""
    parts_used: Any = field(default_factory=list)
    technician_notes: Optional[str] = None
    description: Optional[str] = None
    mileage: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "StoredServiceRecord":
        return cls(
            service_type=row.get("service_type") or "",
            parts_used=row.get("parts_used"),
            technician_notes=row.get("technician_notes"),
            description=row.get("description"),
            mileage=row.get("mileage"),
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "service_type": self.service_type,
            "parts_used": self.parts_used,
            "technician_notes": self.technician_notes,
            "description": self.description,
            "mileage": self.mileage,
        }


def has_oil_change(record: StructuredServiceRecord) -> bool:
    """Whether the next-oil-change field applies to this record."""
    return any(is_oil_change(entry.resolved_label) for entry in record.services)
