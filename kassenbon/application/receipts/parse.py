"""Receipt parse workflow orchestration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Literal

from kassenbon.domain.errors import EmptyInput, NoItemsFound, UnprocessableDocument
from kassenbon.receipt.ocr_result_parser import extract_items, parse_receipt
from kassenbon.runtime import get_logger, load_category_table, load_vendor_registry

if TYPE_CHECKING:
    from kassenbon.domain.receipt import Receipt
    from kassenbon.domain.rows import RowTable
    from kassenbon.receipt.item_categories import CategoryTable
    from kassenbon.receipt.vendors import VendorRegistry

logger = get_logger(__name__)

ParseStatus = Literal[
    "parsed",
    "empty_input",
    "unprocessable",
    "no_items",
]


@dataclass(frozen=True)
class ReceiptParseRequest:
    """Inputs for running the receipt parse workflow."""

    row_table: RowTable | None
    vendor_override: str | None = None
    registry: VendorRegistry | None = None
    category_table: CategoryTable | None = None
    id_source: Callable[[], int] | None = None
    today: date | None = None


@dataclass(frozen=True)
class ReceiptParseResult:
    """Outcome from the receipt parse workflow."""

    status: ParseStatus
    receipt: Receipt | None = None
    store: str | None = None
    store_is_fallback: bool = False
    error: str | None = None
    warnings: list[str] = field(default_factory=list)


def run_receipt_parse(request: ReceiptParseRequest) -> ReceiptParseResult:
    """Run parse flow: locate document -> item grammar -> discounts -> categories."""
    registry = request.registry or load_vendor_registry()
    category_table = request.category_table or load_category_table()

    if request.vendor_override is not None and not registry.is_known(request.vendor_override):
        logger.warning("Vendor %r is not registered, using the default grammar", request.vendor_override)

    try:
        receipt = parse_receipt(
            request.row_table,
            registry=registry,
            id_source=request.id_source,
            today=request.today,
            vendor_override=request.vendor_override,
        )
    except EmptyInput as exc:
        return ReceiptParseResult(status="empty_input", error=str(exc))
    except UnprocessableDocument as exc:
        return ReceiptParseResult(status="unprocessable", error=str(exc))

    try:
        extract_items(receipt, registry=registry, category_table=category_table)
    except NoItemsFound as exc:
        return ReceiptParseResult(
            status="no_items",
            receipt=receipt,
            store=exc.store,
            store_is_fallback=exc.store_is_fallback,
            error=str(exc),
            warnings=[warning.message for warning in receipt.warnings],
        )

    return ReceiptParseResult(
        status="parsed",
        receipt=receipt,
        store=receipt.store,
        store_is_fallback=receipt.store_is_fallback,
        warnings=[warning.message for warning in receipt.warnings],
    )
