"""Composable receipt row parser components."""

from .discounts import DiscountRow, _apply_discounts, _extract_discount_rows
from .fields_parser import (
    _extract_date,
    _extract_declared_sum,
    _extract_vendor,
    _find_boundary,
    _locate_item_range,
)
from .items_grammar import ItemGrammar, get_item_grammar
from .row_filters import (
    _filter_item_rows,
    _remove_discount_rows,
    _remove_info_rows,
    _remove_total_row,
    _remove_weight_price_rows,
)

__all__ = [
    "DiscountRow",
    "ItemGrammar",
    "_apply_discounts",
    "_extract_date",
    "_extract_declared_sum",
    "_extract_discount_rows",
    "_extract_vendor",
    "_filter_item_rows",
    "_find_boundary",
    "_locate_item_range",
    "_remove_discount_rows",
    "_remove_info_rows",
    "_remove_total_row",
    "_remove_weight_price_rows",
    "get_item_grammar",
]
