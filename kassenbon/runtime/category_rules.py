"""Runtime loader for the item category table."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from kassenbon.receipt.item_categories import CategoryTable, build_category_table
from kassenbon.runtime.paths import get_paths
from kassenbon.runtime.vendor_rules import _default_layer_files, _load_toml


@lru_cache(maxsize=8)
def load_category_table(config_paths: tuple[str, ...] | None = None) -> CategoryTable:
    """
    Load the category table from TOML layers.

    Args:
        config_paths: Explicit layer files, applied in order. If None, the
            built-in default_categories.toml is extended by config/categories.toml.
    """
    if config_paths is None:
        p = get_paths()
        files = _default_layer_files(p.default_category_rules, p.category_rules)
    else:
        files = [Path(path) for path in config_paths]

    return build_category_table(tuple(_load_toml(path) for path in files))
