"""Format parsed receipts for the console and for JSON export."""

from decimal import Decimal
from typing import Any

from kassenbon.domain.receipt import Receipt, ReceiptItem, ReceiptWarning

from .ocr_parser.common import format_decimal


def _format_item_lines_aligned(
    rows: list[tuple[str, str, str | None]],
    indent: str = "  ",
) -> list[str]:
    """
    Format item lines with aligned amounts and comments.

    Args:
        rows: List of (name, amount, comment_or_none) tuples
        indent: Indentation prefix for each line

    Returns:
        List of formatted lines, names left-aligned and amounts right-aligned
    """
    if not rows:
        return []

    max_name_len = max(len(name) for name, _, _ in rows)
    max_amount_len = max(len(amount) for _, amount, _ in rows)

    lines = []
    for name, amount, comment in rows:
        base = f"{indent}{name.ljust(max_name_len)}  {amount.rjust(max_amount_len)}"
        if comment:
            lines.append(f"{base}  ; {comment}")
        else:
            lines.append(base)
    return lines


def _build_item_warning_map(warnings: list[ReceiptWarning], items: list[ReceiptItem]) -> dict[int, list[str]]:
    """Map item positions to the warnings anchored at or before their source row.

    Warnings without a row, or after the last item, land on the last item;
    key -1 collects warnings printed before any item.
    """
    item_warnings: dict[int, list[str]] = {}
    for warning in warnings:
        if not warning.message:
            continue
        if not items or warning.row_index is None:
            position = len(items) - 1 if items else -1
        else:
            position = -1
            for item_position, item in enumerate(items):
                if item.source_row_index <= warning.row_index:
                    position = item_position
        item_warnings.setdefault(position, []).append(warning.message)
    return item_warnings


def _format_item_comment(item: ReceiptItem) -> str:
    parts = []
    if item.quantity != 1:
        parts.append(f"{format_decimal(item.quantity)} x {format_decimal(item.unit_price)}")
    parts.append(item.category or "uncategorized")
    return ", ".join(parts)


def format_receipt(receipt: Receipt) -> str:
    """Render a receipt as a human-readable summary with inline parser warnings."""
    lines = []
    store = f"{receipt.store} (fallback, please confirm)" if receipt.store_is_fallback else receipt.store
    lines.append(f"Store: {store}")
    if receipt.date_is_placeholder:
        lines.append(f"Date: UNKNOWN (placeholder {receipt.date.isoformat()})")
    else:
        lines.append(f"Date: {receipt.date.isoformat()}")
    lines.append("")

    item_warnings = _build_item_warning_map(receipt.warnings, receipt.items)
    for message in item_warnings.get(-1, []):
        lines.append(f"; WARN {message}")

    item_rows = [(item.name, format_decimal(item.total), _format_item_comment(item)) for item in receipt.items]
    for position, line in enumerate(_format_item_lines_aligned(item_rows)):
        lines.append(line)
        for message in item_warnings.get(position, []):
            lines.append(f"; WARN {message}")

    lines.append("")
    lines.append(f"Items total: {format_decimal(receipt.items_total)}")
    if receipt.declared_sum is None:
        lines.append("Declared total: UNKNOWN")
    else:
        lines.append(f"Declared total: {format_decimal(receipt.declared_sum)}")
        difference = receipt.declared_sum - receipt.items_total
        if difference != Decimal("0"):
            lines.append(f"; WARN items differ from declared total by {format_decimal(difference)}")

    return "\n".join(lines) + "\n"


def receipt_to_records(receipt: Receipt) -> list[dict[str, Any]]:
    """Flat export form {name, unit_price, quantity, category}, numbers as strings."""
    records = []
    for item in receipt.items:
        record = item.to_record()
        record["unit_price"] = format_decimal(item.unit_price)
        record["quantity"] = format_decimal(item.quantity)
        records.append(record)
    return records


def receipt_to_dict(receipt: Receipt) -> dict[str, Any]:
    """JSON-ready representation of a parsed receipt."""
    return {
        "id": receipt.id,
        "store": receipt.store,
        "store_is_fallback": receipt.store_is_fallback,
        "date": receipt.date.isoformat(),
        "date_is_placeholder": receipt.date_is_placeholder,
        "declared_sum": None if receipt.declared_sum is None else format_decimal(receipt.declared_sum),
        "items_total": format_decimal(receipt.items_total),
        "items": receipt_to_records(receipt),
        "warnings": [{"message": warning.message, "row_index": warning.row_index} for warning in receipt.warnings],
    }
