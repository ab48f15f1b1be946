"""Vendor/date/item-range/declared-sum extraction helpers."""

import re
from datetime import date
from decimal import Decimal

from kassenbon.domain.rows import RowTable
from kassenbon.runtime.logging import get_logger

from ..date_utils import expand_two_digit_year, placeholder_receipt_date
from ..vendors import ReceiptKeywords, VendorRegistry
from .common import is_boundary_candidate, parse_decimal, row_contains_keyword, token_contains_keyword

logger = get_logger(__name__)

# DD.MM.YY or DD.MM.YYYY, also with "-" or "/" separators
DATE_PATTERN = re.compile(r"\b(\d{2})[.\-/](\d{2})[.\-/](\d{2}|\d{4})\b")


def _extract_vendor(rows: RowTable, registry: VendorRegistry) -> tuple[str, bool]:
    """
    Identify the vendor from its keyword table.

    Tokens are scanned in row order then token order; the first vendor (in
    registry order) with a keyword contained in the token wins.

    Returns:
        (vendor_id, is_fallback). Without any match the registry's fallback
        vendor is returned with is_fallback=True so callers can ask for
        confirmation instead of failing.
    """
    for index in rows:
        for token in rows[index]:
            for entry in registry.vendors:
                if token_contains_keyword(token, entry.keywords):
                    logger.debug("Vendor %s identified by token %r in row %d", entry.vendor_id, token, index)
                    return entry.vendor_id, False

    logger.warning("No vendor keyword found, falling back to %s", registry.fallback_vendor)
    return registry.fallback_vendor, True


def _extract_date(rows: RowTable, today: date | None = None) -> tuple[date, bool]:
    """
    Extract the purchase date (first matching token wins).

    Two-digit years are expanded with the current century. Matches whose
    digits do not form a calendar date (e.g. "45.13.24") are skipped.

    Returns:
        (date, is_placeholder). Without any date the current date is returned
        with is_placeholder=True.
    """
    today = today or date.today()
    for index in rows:
        for token in rows[index]:
            match = DATE_PATTERN.search(token)
            if not match:
                continue
            day, month, year = (int(group) for group in match.groups())
            if len(match.group(3)) == 2:
                year = expand_two_digit_year(year, today)
            try:
                return date(year, month, day), False
            except ValueError:
                logger.debug("Skipping implausible date %r in row %d", match.group(0), index)
                continue

    return placeholder_receipt_date(today), True


def _find_boundary(rows: RowTable, keywords: tuple[str, ...]) -> int | None:
    """Return the index of the first row holding a letters-only token that contains a keyword."""
    for index in rows:
        for token in rows[index]:
            if not is_boundary_candidate(token):
                continue
            if token_contains_keyword(token, keywords):
                return index
    return None


def _locate_item_range(rows: RowTable, keywords: ReceiptKeywords) -> RowTable:
    """
    Cut header and footer boilerplate, in place.

    Rows after the end boundary are deleted (the end row itself carries the
    total and is kept); rows up to and including the start boundary are
    deleted. A missing boundary leaves that side untouched.
    """
    start_index = _find_boundary(rows, keywords.start)
    end_index = _find_boundary(rows, keywords.end)
    logger.debug("Item range boundaries: start=%s end=%s", start_index, end_index)

    if end_index is not None:
        for index in rows:
            if index > end_index:
                del rows[index]

    if start_index is not None:
        for index in rows:
            if index <= start_index:
                del rows[index]

    return rows


def _extract_declared_sum(rows: RowTable, keywords: ReceiptKeywords) -> Decimal | None:
    """Read the grand total from the terminal row, or None if it is not a total row."""
    last_index = rows.max_index()
    if last_index is None:
        return None

    last_row = rows[last_index]
    if not last_row or not row_contains_keyword(last_row, keywords.end):
        return None
    return parse_decimal(last_row[-1])
