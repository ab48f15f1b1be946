"""Tests for console and JSON receipt output."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from kassenbon.domain.receipt import Receipt, ReceiptItem, ReceiptWarning
from kassenbon.domain.rows import RowTable
from kassenbon.receipt.formatter import format_receipt, receipt_to_dict, receipt_to_records


def _receipt(**overrides) -> Receipt:
    fields = {
        "id": 42,
        "store": "Lidl",
        "date": date(2024, 3, 12),
        "declared_sum": Decimal("4.39"),
        "raw_item_rows": RowTable({3: ["Butter", "1,99"], 4: ["Apfel", "3", "2,40"]}),
        "items": [
            ReceiptItem(source_row_index=3, name="Butter", unit_price=Decimal("1.99")),
            ReceiptItem(
                source_row_index=4,
                name="Apfel",
                unit_price=Decimal("0.80"),
                quantity=Decimal("3.00"),
                category="Obst",
            ),
        ],
    }
    fields.update(overrides)
    return Receipt(**fields)


def test_records_use_flat_export_form() -> None:
    assert receipt_to_records(_receipt()) == [
        {"name": "Butter", "unit_price": "1.99", "quantity": "1.00", "category": None},
        {"name": "Apfel", "unit_price": "0.80", "quantity": "3.00", "category": "Obst"},
    ]


def test_receipt_to_dict() -> None:
    data = receipt_to_dict(_receipt(warnings=[ReceiptWarning(message="discount dropped", row_index=2)]))

    assert data["id"] == 42
    assert data["store"] == "Lidl"
    assert data["date"] == "2024-03-12"
    assert data["declared_sum"] == "4.39"
    assert data["items_total"] == "4.39"
    assert data["warnings"] == [{"message": "discount dropped", "row_index": 2}]


def test_receipt_to_dict_unknown_total() -> None:
    assert receipt_to_dict(_receipt(declared_sum=None))["declared_sum"] is None


def test_format_receipt_lists_items_and_anchored_warnings() -> None:
    receipt = _receipt(
        store_is_fallback=True,
        warnings=[ReceiptWarning(message="quantity not confirmed", row_index=4)],
    )

    text = format_receipt(receipt)
    lines = text.splitlines()

    assert lines[0] == "Store: Lidl (fallback, please confirm)"
    assert lines[1] == "Date: 2024-03-12"
    assert "Butter  1.99  ; uncategorized" in text
    assert "Apfel   2.40  ; 3.00 x 0.80, Obst" in text
    apple_line = next(index for index, line in enumerate(lines) if line.lstrip().startswith("Apfel"))
    assert lines[apple_line + 1] == "; WARN quantity not confirmed"
    assert "Declared total: 4.39" in text


def test_format_receipt_flags_placeholder_date_and_difference() -> None:
    text = format_receipt(_receipt(date_is_placeholder=True, declared_sum=Decimal("5.00")))

    assert "Date: UNKNOWN (placeholder 2024-03-12)" in text
    assert "; WARN items differ from declared total by 0.61" in text
