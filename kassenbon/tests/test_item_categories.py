"""Tests for receipt item category matching."""

from __future__ import annotations

from decimal import Decimal

import pytest

from kassenbon.domain.receipt import ReceiptItem
from kassenbon.receipt.item_categories import (
    build_category_table,
    categorize_item,
    categorize_item_debug,
    categorize_items,
    find_best_match,
    strip_name_prefixes,
)
from kassenbon.runtime.category_rules import load_category_table


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Bananen", "Obst"),
        ("Banamen", "Obst"),
        ("Zucchini", "Gemüse"),
        ("KLC.Weizensandwich", "Backwaren"),
        ("deposit-return", "Leergut"),
        ("Coca Cola Zero", "Getränke"),
    ],
)
def test_default_table_examples(name: str, expected: str, category_table) -> None:
    prefixes = ("KLC.", "KLC ", "KLC", "G&G_", "G&G")
    assert categorize_item(name, category_table, name_prefixes=prefixes) == expected


def test_tie_goes_to_first_category_in_table_order() -> None:
    table = build_category_table([{"categories": {"Erste": ["abc"], "Zweite": ["abd"]}}])

    # "abx" is one edit away from both terms
    assert categorize_item("abx", table) == "Erste"
    assert categorize_item("abx", table) == "Erste"


def test_exact_match_wins_case_insensitively() -> None:
    table = build_category_table([{"categories": {"Obst": ["Apfel"], "Gemüse": ["apfe"]}}])

    match = find_best_match("APFEL", table)

    assert match is not None
    assert (match.category, match.distance) == ("Obst", 0)


def test_empty_table_leaves_category_unset() -> None:
    assert categorize_item("Butter", build_category_table([])) is None


def test_strip_name_prefixes_removes_first_occurrence_in_order() -> None:
    assert strip_name_prefixes("KLC.KLC Milch", ("KLC.", "KLC ")) == "Milch"
    assert strip_name_prefixes("G&G_Salami G&G", ("G&G_", "G&G")) == "Salami "


def test_categorize_items_sets_every_category() -> None:
    table = build_category_table([{"categories": {"Obst": ["Apfel"], "Backwaren": ["Brezel"]}}])
    items = [
        ReceiptItem(source_row_index=1, name="Apfel", unit_price=Decimal("0.80")),
        ReceiptItem(source_row_index=2, name="Breze", unit_price=Decimal("0.49")),
    ]

    categorize_items(items, table)

    assert [item.category for item in items] == ["Obst", "Backwaren"]


def test_later_configs_extend_categories_in_order() -> None:
    table = build_category_table(
        [
            {"categories": {"Obst": ["Apfel"], "Gemüse": ["Gurke"]}},
            {"categories": {"Obst": ["Birne", "Apfel"], "Drogerie": ["Seife"]}},
        ]
    )

    assert table.names == ("Obst", "Gemüse", "Drogerie")
    assert table.terms("Obst") == ("Apfel", "Birne")


def test_debug_lists_closest_terms_first() -> None:
    table = build_category_table([{"categories": {"Obst": ["Apfel", "Kiwi"], "Backwaren": ["Brezel"]}}])

    scored = categorize_item_debug("Apfel", table, limit=2)

    assert scored[0] == ("Obst", "Apfel", 0)
    assert len(scored) == 2


def test_load_category_table_from_toml(tmp_path) -> None:
    rules_path = tmp_path / "categories.toml"
    rules_path.write_text(
        """
[categories]
Drogerie = ["Seife", "Zahnpasta"]
""",
        encoding="utf-8",
    )

    load_category_table.cache_clear()
    table = load_category_table((str(rules_path),))

    assert table.names == ("Drogerie",)
    assert categorize_item("Zahnposta", table) == "Drogerie"


def test_project_config_extends_default_categories(project_config) -> None:
    (project_config / "categories.toml").write_text(
        '[categories]\nObst = ["Drachenfrucht"]\nDrogerie = ["Zahnpasta"]\n',
        encoding="utf-8",
    )

    load_category_table.cache_clear()
    table = load_category_table()

    assert table.names[0] == "Obst"
    assert table.names[-1] == "Drogerie"
    assert "Drachenfrucht" in table.terms("Obst")


def test_missing_config_files_are_ignored(tmp_path) -> None:
    load_category_table.cache_clear()
    table = load_category_table((str(tmp_path / "missing.toml"),))

    assert table.categories == ()
