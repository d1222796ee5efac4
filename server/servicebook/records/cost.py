"""Cost totals derived from line items.

Totals are never stored; they are recomputed whenever a record is shown.
A missing or non-numeric quantity or price counts as 0 here, even though a
new item starts with quantity 1.
"""

from decimal import Decimal
from typing import Iterable

from servicebook.records.types import LineItem, ServiceEntry, to_decimal

ZERO = Decimal("0")


def line_total(item: LineItem) -> Decimal:
    quantity = to_decimal(getattr(item, "quantity", None)) or ZERO
    price = to_decimal(getattr(item, "price", None)) or ZERO
    return quantity * price


def subtotal(entry: ServiceEntry) -> Decimal:
    return sum((line_total(item) for item in entry.items), ZERO)


def total_cost(services: Iterable[ServiceEntry]) -> Decimal:
    return sum((subtotal(entry) for entry in services), ZERO)
