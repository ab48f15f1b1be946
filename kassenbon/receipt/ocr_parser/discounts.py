"""Discount row extraction and reconciliation against parsed items."""

from dataclasses import dataclass
from decimal import Decimal

from kassenbon.domain.receipt import ReceiptItem, ReceiptWarning
from kassenbon.domain.rows import RowTable
from kassenbon.runtime.logging import get_logger

from ..vendors import ReceiptKeywords
from .common import parse_decimal, row_contains_keyword

logger = get_logger(__name__)


@dataclass(frozen=True)
class DiscountRow:
    """A discount row, keyed by its original row index."""

    row_index: int
    raw_total: str
    total: Decimal | None


def _extract_discount_rows(rows: RowTable, keywords: ReceiptKeywords) -> list[DiscountRow]:
    """Collect every row containing a discount keyword, with the amount from its last token."""
    discounts = []
    for index in rows:
        row = rows[index]
        if row and row_contains_keyword(row, keywords.discount):
            discounts.append(DiscountRow(row_index=index, raw_total=row[-1], total=parse_decimal(row[-1])))
    return discounts


def _nearest_preceding_item(items: list[ReceiptItem], row_index: int) -> ReceiptItem | None:
    candidate: ReceiptItem | None = None
    for item in items:
        if item.source_row_index < row_index:
            if candidate is None or item.source_row_index > candidate.source_row_index:
                candidate = item
    return candidate


def _apply_discounts(
    items: list[ReceiptItem],
    discounts: list[DiscountRow],
    warning_sink: list[ReceiptWarning] | None = None,
) -> list[ReceiptItem]:
    """
    Apply each discount to the item printed closest above it.

    The discount total is spread over the item's quantity and reduces its unit
    price. Discounts without a preceding item, or with an unreadable amount,
    are dropped and reported through warning_sink.
    """
    for discount in discounts:
        if discount.total is None:
            logger.warning("Unreadable discount amount %r in row %d", discount.raw_total, discount.row_index)
            if warning_sink is not None:
                warning_sink.append(
                    ReceiptWarning(
                        message=f'discount dropped: unreadable amount "{discount.raw_total}"',
                        row_index=discount.row_index,
                    )
                )
            continue

        item = _nearest_preceding_item(items, discount.row_index)
        if item is None:
            logger.warning("No item precedes discount row %d, discount dropped", discount.row_index)
            if warning_sink is not None:
                warning_sink.append(
                    ReceiptWarning(
                        message=f"discount dropped: no item before discount of {discount.total:.2f}",
                        row_index=discount.row_index,
                    )
                )
            continue

        if discount.total > 0:
            logger.warning("Positive discount %s in row %d applied to %r", discount.total, discount.row_index, item.name)
        item.apply_discount(discount.total)
        logger.debug("Applied discount %s to %r (row %d)", discount.total, item.name, item.source_row_index)

    return items
