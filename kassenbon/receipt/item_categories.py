"""Category assignment for receipt line items.

This module maps receipt item names to product categories.
Uses edit distance (Levenshtein, unit cost) against a table of
representative terms to tolerate OCR errors and abbreviations.
Every item gets the category of the globally closest term; there is no
distance threshold, so callers that need a "no match" signal must impose one.

To add new terms:
1. Find the category in receipt/rules/default_categories.toml
2. Append the term (as printed on receipts, case does not matter)
3. Category order is the tie-break order, keep specific categories first
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from rapidfuzz.distance import Levenshtein

from kassenbon.domain.receipt import ReceiptItem


@dataclass(frozen=True)
class CategoryTable:
    """Read-only category -> terms table, in tie-break order."""

    categories: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.categories)

    def terms(self, category: str) -> tuple[str, ...]:
        for name, terms in self.categories:
            if name == category:
                return terms
        return tuple()


@dataclass(frozen=True)
class CategoryMatch:
    """Best term found for an item name."""

    category: str
    term: str
    distance: int


def build_category_table(category_configs: Sequence[Mapping[str, Any]] | None = None) -> CategoryTable:
    """Build the merged category table from in-memory TOML-shaped configs.

    Later configs append terms to existing categories; new categories are
    appended after all existing ones so the built-in tie-break order holds.
    """
    merged: dict[str, list[str]] = {}
    for config in category_configs or ():
        categories = config.get("categories", {})
        if not isinstance(categories, Mapping):
            continue
        for raw_name, raw_terms in categories.items():
            name = str(raw_name).strip()
            if not name:
                continue
            if isinstance(raw_terms, str):
                raw_terms = [raw_terms]
            if not isinstance(raw_terms, list):
                continue
            terms = merged.setdefault(name, [])
            for raw_term in raw_terms:
                term = str(raw_term).strip()
                if term and term not in terms:
                    terms.append(term)

    return CategoryTable(categories=tuple((name, tuple(terms)) for name, terms in merged.items()))


def strip_name_prefixes(name: str, prefixes: Iterable[str]) -> str:
    """Remove vendor-specific name artifacts like "KLC." or "G&G_" (first occurrence each)."""
    for prefix in prefixes:
        name = name.replace(prefix, "", 1)
    return name


def find_best_match(name: str, table: CategoryTable, name_prefixes: Iterable[str] = ()) -> CategoryMatch | None:
    """Return the closest term over the whole table, or None for an empty table.

    Ties keep the first term encountered in table order; an exact match ends
    the search early.
    """
    normalized = strip_name_prefixes(name, name_prefixes).lower()

    best: CategoryMatch | None = None
    for category, terms in table.categories:
        for term in terms:
            distance = Levenshtein.distance(normalized, term.lower())
            if best is None or distance < best.distance:
                best = CategoryMatch(category=category, term=term, distance=distance)
                if distance == 0:
                    return best
    return best


def categorize_item(name: str, table: CategoryTable, name_prefixes: Iterable[str] = ()) -> str | None:
    """
    Return the category for an item name.

    Args:
        name: Item name from the receipt (e.g., "KLC.Bananen")
        table: Category table (typically from the runtime loader)
        name_prefixes: Vendor-specific artifacts stripped before matching

    Returns:
        Category name (e.g., "Obst"), or None if the table has no terms
    """
    match = find_best_match(name, table, name_prefixes)
    return match.category if match else None


def categorize_items(
    items: list[ReceiptItem],
    table: CategoryTable,
    name_prefixes: Iterable[str] = (),
) -> list[ReceiptItem]:
    """Set the category of every item in place and return the list."""
    prefixes = tuple(name_prefixes)
    for item in items:
        item.category = categorize_item(item.name, table, prefixes)
    return items


def categorize_item_debug(
    name: str,
    table: CategoryTable,
    name_prefixes: Iterable[str] = (),
    limit: int = 5,
) -> list[tuple[str, str, int]]:
    """Debug version that returns the closest terms with their distances.

    Useful for understanding why a particular category was chosen.

    Returns:
        List of (category, term, distance) tuples, closest first, table order on ties
    """
    normalized = strip_name_prefixes(name, name_prefixes).lower()
    scored = [
        (category, term, Levenshtein.distance(normalized, term.lower()))
        for category, terms in table.categories
        for term in terms
    ]
    # sorted() is stable, so equal distances keep table order
    scored = sorted(scored, key=lambda entry: entry[2])
    return scored[:limit]
