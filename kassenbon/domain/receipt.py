"""Data models for receipt parsing."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from kassenbon.domain.rows import RowTable

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass
class ReceiptItem:
    """A single line item on a receipt."""

    source_row_index: int
    name: str
    unit_price: Decimal
    quantity: Decimal = Decimal("1")
    category: str | None = None

    @property
    def total(self) -> Decimal:
        """Contribution of this item to the declared receipt sum."""
        return round_money(self.unit_price * self.quantity)

    def apply_discount(self, discount_total: Decimal) -> None:
        """Spread a (negative) row discount over the item's units."""
        divisor = self.quantity if self.quantity else Decimal("1")
        self.unit_price = round_money(self.unit_price + discount_total / divisor)

    def to_record(self) -> dict[str, object]:
        """Flat export form consumed by reporting collaborators."""
        return {
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "category": self.category,
        }


@dataclass
class ReceiptWarning:
    """Non-fatal parser anomaly, anchored at the source row that caused it."""

    message: str
    row_index: int | None = None


@dataclass(frozen=True)
class Receipt:
    """Parsed receipt data.

    The header fields are fixed once the document has been located; only the
    item list and the warnings grow afterwards.
    """

    id: int
    store: str
    date: date
    declared_sum: Decimal | None
    raw_item_rows: RowTable
    store_is_fallback: bool = False
    date_is_placeholder: bool = False
    items: list[ReceiptItem] = field(default_factory=list)
    warnings: list[ReceiptWarning] = field(default_factory=list)

    def attach_items(self, items: list[ReceiptItem]) -> None:
        self.items[:] = items

    @property
    def items_total(self) -> Decimal:
        return sum((item.total for item in self.items), Decimal("0.00"))


class TimestampIdSource:
    """Monotonically increasing receipt identifiers derived from wall-clock milliseconds.

    Two receipts created within the same millisecond still get distinct ids.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            candidate = time.time_ns() // 1_000_000
            self._last = max(candidate, self._last + 1)
            return self._last
