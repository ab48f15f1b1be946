"""Vendor registry and lexical keyword tables for receipt parsing.

The registry maps a vendor id to the keywords that identify it on a receipt
and to the line-item grammar that understands its layout. Built-in defaults
for the boundary/discount/info keyword tables live here; vendor entries ship
in receipt/rules/default_vendors.toml and can be extended per project.

To add a new vendor:
1. Add a [[vendors]] entry with an id, keywords and a grammar kind
2. Pick one of GRAMMAR_KINDS (or add a grammar in ocr_parser/)
3. Keywords are case-sensitive and matched as substrings of single tokens
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

# Grammar kinds understood by ocr_parser.items_grammar.get_item_grammar()
GRAMMAR_TWO_COLUMN = "two_column"
GRAMMAR_QUANTITY_MARKER = "quantity_marker"
GRAMMAR_NAME_DETAIL = "name_detail"
GRAMMAR_KINDS = frozenset({GRAMMAR_TWO_COLUMN, GRAMMAR_QUANTITY_MARKER, GRAMMAR_NAME_DETAIL})

# Vendors without a registry entry are parsed with this grammar
DEFAULT_GRAMMAR = GRAMMAR_TWO_COLUMN
DEFAULT_FALLBACK_VENDOR = "Kaufland"

# Item section boundaries. "Preis EUR" and "zu zahlen" never match a single
# letters-only token, they are kept for layouts that merge tokens.
DEFAULT_START_KEYWORDS = ("EUR", "Preis EUR", "PREIS", "Preis")
DEFAULT_END_KEYWORDS = ("SUMME", "Summe", "zu zahlen", "Zu Zahlen", "Zahlen", "zahlen", "zahlen.", "SUNNE")

DEFAULT_DISCOUNT_KEYWORDS = ("Rabatt", "RABATT", "Rebatt", "Wıllkommensrabatt", "Willkommensrabatt")
DEFAULT_INFO_KEYWORDS = ("Zusatzpunkte", "sparen", "Posten:")
DEFAULT_DEPOSIT_KEYWORDS = ("Pfand",)
DEFAULT_WEIGHT_PRICE_MARKER = "/kg"

# Order matters: prefixes are removed one after another, first occurrence only
DEFAULT_NAME_PREFIXES = ("KLC.", "KLC ", "KLC", "G&G_", "G&G")


@dataclass(frozen=True)
class ReceiptKeywords:
    """Lexical tables shared by the locator, the row filters and the grammars."""

    start: tuple[str, ...] = DEFAULT_START_KEYWORDS
    end: tuple[str, ...] = DEFAULT_END_KEYWORDS
    discount: tuple[str, ...] = DEFAULT_DISCOUNT_KEYWORDS
    info: tuple[str, ...] = DEFAULT_INFO_KEYWORDS
    deposit: tuple[str, ...] = DEFAULT_DEPOSIT_KEYWORDS
    weight_price_marker: str = DEFAULT_WEIGHT_PRICE_MARKER
    name_prefixes: tuple[str, ...] = DEFAULT_NAME_PREFIXES


@dataclass(frozen=True)
class VendorEntry:
    """How one retailer is recognised and which grammar reads its item rows."""

    vendor_id: str
    keywords: tuple[str, ...]
    grammar: str = DEFAULT_GRAMMAR
    # Per-kilogram unit-price rows carry no item of their own for most layouts
    drop_weight_price_rows: bool = True


@dataclass(frozen=True)
class VendorRegistry:
    """Read-only vendor table, fallback vendor and keyword tables."""

    vendors: tuple[VendorEntry, ...]
    fallback_vendor: str
    keywords: ReceiptKeywords

    def entry_for(self, vendor_id: str) -> VendorEntry:
        """Return the registry entry for vendor_id, or a default-grammar entry."""
        for entry in self.vendors:
            if entry.vendor_id == vendor_id:
                return entry
        return VendorEntry(vendor_id=vendor_id, keywords=tuple())

    def is_known(self, vendor_id: str) -> bool:
        return any(entry.vendor_id == vendor_id for entry in self.vendors)

    @property
    def vendor_ids(self) -> tuple[str, ...]:
        return tuple(entry.vendor_id for entry in self.vendors)


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize a keywords value from TOML into a tuple, dropping blanks."""
    if isinstance(raw, str):
        return (raw,) if raw.strip() else tuple()
    if isinstance(raw, list):
        return tuple(str(v) for v in raw if str(v).strip())
    return tuple()


def _merge_keywords(existing: tuple[str, ...], extra: tuple[str, ...]) -> tuple[str, ...]:
    merged = list(existing)
    for keyword in extra:
        if keyword not in merged:
            merged.append(keyword)
    return tuple(merged)


def _merge_keyword_tables(base: ReceiptKeywords, raw: Mapping[str, Any]) -> ReceiptKeywords:
    marker = raw.get("weight_price_marker")
    return ReceiptKeywords(
        start=_merge_keywords(base.start, _normalize_keywords(raw.get("start"))),
        end=_merge_keywords(base.end, _normalize_keywords(raw.get("end"))),
        discount=_merge_keywords(base.discount, _normalize_keywords(raw.get("discount"))),
        info=_merge_keywords(base.info, _normalize_keywords(raw.get("info"))),
        deposit=_merge_keywords(base.deposit, _normalize_keywords(raw.get("deposit"))),
        weight_price_marker=str(marker) if marker else base.weight_price_marker,
        name_prefixes=_merge_keywords(base.name_prefixes, _normalize_keywords(raw.get("name_prefixes"))),
    )


def build_vendor_registry(vendor_configs: Sequence[Mapping[str, Any]] | None = None) -> VendorRegistry:
    """Build the merged vendor registry from in-memory TOML-shaped configs.

    Later configs extend earlier ones: keyword lists are appended, vendors with
    an existing id gain keywords and may switch grammar, new vendors are
    appended in file order (which is also the identification order).

    Raises:
        ValueError: If a vendor names a grammar kind that does not exist.
    """
    vendors: dict[str, VendorEntry] = {}
    keywords = ReceiptKeywords()
    fallback_vendor = DEFAULT_FALLBACK_VENDOR

    for config in vendor_configs or ():
        fallback = str(config.get("fallback_vendor", "")).strip()
        if fallback:
            fallback_vendor = fallback

        keyword_tables = config.get("keywords", {})
        if isinstance(keyword_tables, Mapping):
            keywords = _merge_keyword_tables(keywords, keyword_tables)

        for raw_vendor in config.get("vendors", []):
            if not isinstance(raw_vendor, Mapping):
                continue
            vendor_id = str(raw_vendor.get("id") or "").strip()
            if not vendor_id:
                continue

            existing = vendors.get(vendor_id)
            grammar = str(raw_vendor.get("grammar") or (existing.grammar if existing else DEFAULT_GRAMMAR))
            if grammar not in GRAMMAR_KINDS:
                raise ValueError(f"Unknown grammar {grammar!r} for vendor {vendor_id!r}")

            vendor_keywords = _normalize_keywords(raw_vendor.get("keywords"))
            if existing is not None:
                vendor_keywords = _merge_keywords(existing.keywords, vendor_keywords)
                drop_default = existing.drop_weight_price_rows
            else:
                drop_default = True

            vendors[vendor_id] = VendorEntry(
                vendor_id=vendor_id,
                keywords=vendor_keywords,
                grammar=grammar,
                drop_weight_price_rows=bool(raw_vendor.get("drop_weight_price_rows", drop_default)),
            )

    return VendorRegistry(
        vendors=tuple(vendors.values()),
        fallback_vendor=fallback_vendor,
        keywords=keywords,
    )

