"""Row filters that reduce the located item range to item rows only."""

from collections.abc import Iterable

from kassenbon.domain.rows import RowTable

from ..vendors import ReceiptKeywords
from .common import row_contains_keyword


def _remove_rows_matching(rows: RowTable, keywords: Iterable[str]) -> RowTable:
    """Return a copy without the rows that contain any keyword in any token."""
    keywords = tuple(keywords)
    return rows.without(index for index in rows if row_contains_keyword(rows[index], keywords))


def _remove_discount_rows(rows: RowTable, keywords: ReceiptKeywords) -> RowTable:
    return _remove_rows_matching(rows, keywords.discount)


def _remove_info_rows(rows: RowTable, keywords: ReceiptKeywords) -> RowTable:
    """Drop loyalty/info rows like "Zusatzpunkte" or "Sie sparen"."""
    return _remove_rows_matching(rows, keywords.info)


def _remove_total_row(rows: RowTable, keywords: ReceiptKeywords) -> RowTable:
    """Drop the terminal row if it is the total ("SUMME") row."""
    last_index = rows.max_index()
    if last_index is None or not row_contains_keyword(rows[last_index], keywords.end):
        return rows.copy()
    return rows.without([last_index])


def _remove_weight_price_rows(rows: RowTable, keywords: ReceiptKeywords) -> RowTable:
    """Drop per-kilogram unit-price rows ("1,234 kg x 2,99 EUR/kg")."""
    return _remove_rows_matching(rows, (keywords.weight_price_marker,))


def _filter_item_rows(rows: RowTable, keywords: ReceiptKeywords) -> RowTable:
    """Vendor-independent filtering: discount rows, info rows and the total row.

    The input table is left untouched; discount reconciliation still needs
    the discount rows at their original indices.
    """
    filtered = _remove_discount_rows(rows, keywords)
    filtered = _remove_info_rows(filtered, keywords)
    return _remove_total_row(filtered, keywords)
