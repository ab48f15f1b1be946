"""Parse a receipt row table into a structured Receipt."""

from collections.abc import Callable, Mapping, Sequence
from datetime import date

from kassenbon.domain.errors import EmptyInput, NoItemsFound, UnprocessableDocument
from kassenbon.domain.receipt import Receipt, ReceiptItem, ReceiptWarning, TimestampIdSource
from kassenbon.domain.rows import RowTable
from kassenbon.runtime.logging import get_logger

from .item_categories import CategoryTable, categorize_items
from .ocr_parser import (
    _apply_discounts,
    _extract_date,
    _extract_declared_sum,
    _extract_discount_rows,
    _extract_vendor,
    _filter_item_rows,
    _locate_item_range,
    _remove_weight_price_rows,
    get_item_grammar,
)
from .row_normalization import normalize_rows
from .vendors import VendorRegistry

logger = get_logger(__name__)

_default_id_source = TimestampIdSource()


def parse_receipt(
    row_table: RowTable | Mapping[int, Sequence[str]] | None,
    *,
    registry: VendorRegistry,
    id_source: Callable[[], int] | None = None,
    today: date | None = None,
    vendor_override: str | None = None,
) -> Receipt:
    """
    Normalize rows, identify the document and cut it down to its item range.

    The caller's table is not modified.

    Args:
        row_table: Row index -> tokens, as produced by a row source.
        registry: Vendor keyword/grammar registry.
        id_source: Receipt id generator; defaults to millisecond timestamps.
        today: Reference date for placeholder dates and two-digit years.
        vendor_override: Use this vendor instead of keyword identification.

    Returns:
        Receipt without items; call extract_items() next.

    Raises:
        EmptyInput: No rows were supplied.
        UnprocessableDocument: Nothing is left between the start and end anchors.
    """
    if not row_table:
        raise EmptyInput("receipt has no rows")

    rows = RowTable(row_table) if not isinstance(row_table, RowTable) else row_table.copy()
    normalize_rows(rows)

    warnings: list[ReceiptWarning] = []
    if vendor_override is not None:
        store, store_is_fallback = vendor_override, False
    else:
        store, store_is_fallback = _extract_vendor(rows, registry)
        if store_is_fallback:
            warnings.append(ReceiptWarning(message=f"no vendor keyword found, assuming {store}"))

    receipt_date, date_is_placeholder = _extract_date(rows, today)
    if date_is_placeholder:
        warnings.append(ReceiptWarning(message="no purchase date found, using today's date"))

    _locate_item_range(rows, registry.keywords)
    if not rows:
        raise UnprocessableDocument("no rows left between the start and end anchors")

    declared_sum = _extract_declared_sum(rows, registry.keywords)
    if declared_sum is None:
        warnings.append(ReceiptWarning(message="declared total not found", row_index=rows.max_index()))

    receipt = Receipt(
        id=(id_source or _default_id_source)(),
        store=store,
        date=receipt_date,
        declared_sum=declared_sum,
        raw_item_rows=rows,
        store_is_fallback=store_is_fallback,
        date_is_placeholder=date_is_placeholder,
        warnings=warnings,
    )
    logger.debug(
        "Located receipt %d: store=%s date=%s rows=%d declared_sum=%s",
        receipt.id,
        store,
        receipt_date,
        len(rows),
        declared_sum,
    )
    return receipt


def extract_items(
    receipt: Receipt,
    *,
    registry: VendorRegistry,
    category_table: CategoryTable,
) -> list[ReceiptItem]:
    """
    Run the vendor grammar, reconcile discounts and assign categories.

    The resulting items are attached to the receipt; anomalies are appended to
    receipt.warnings.

    Raises:
        NoItemsFound: The grammar produced no items.
    """
    entry = registry.entry_for(receipt.store)
    keywords = registry.keywords

    rows = _filter_item_rows(receipt.raw_item_rows, keywords)
    if entry.drop_weight_price_rows:
        rows = _remove_weight_price_rows(rows, keywords)

    grammar = get_item_grammar(entry.grammar, keywords)
    logger.debug("Parsing %d item rows of %s with %s grammar", len(rows), receipt.store, grammar.kind)
    items = grammar.parse(rows, warning_sink=receipt.warnings)
    if not items:
        raise NoItemsFound(
            f"no items recognized for {receipt.store}",
            store=receipt.store,
            store_is_fallback=receipt.store_is_fallback,
        )

    discounts = _extract_discount_rows(receipt.raw_item_rows, keywords)
    _apply_discounts(items, discounts, warning_sink=receipt.warnings)
    categorize_items(items, category_table, name_prefixes=keywords.name_prefixes)

    receipt.attach_items(items)
    if receipt.declared_sum is not None and receipt.items_total != receipt.declared_sum:
        logger.info(
            "Items of receipt %d sum to %s, declared total is %s",
            receipt.id,
            receipt.items_total,
            receipt.declared_sum,
        )
    return items
