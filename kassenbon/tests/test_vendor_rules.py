"""Tests for the vendor registry builder and its runtime loader."""

from __future__ import annotations

import pytest

from kassenbon.receipt.vendors import (
    DEFAULT_GRAMMAR,
    GRAMMAR_NAME_DETAIL,
    GRAMMAR_QUANTITY_MARKER,
    build_vendor_registry,
)
from kassenbon.runtime.vendor_rules import load_vendor_registry


def test_default_registry_layout(registry) -> None:
    assert registry.fallback_vendor == "Kaufland"
    assert registry.vendor_ids[:4] == ("Kaufland", "Lidl", "Netto", "Edeka")
    assert registry.entry_for("Kaufland").grammar == GRAMMAR_NAME_DETAIL
    assert registry.entry_for("Kaufland").drop_weight_price_rows is False
    assert registry.entry_for("Netto").grammar == GRAMMAR_QUANTITY_MARKER
    assert registry.entry_for("Lidl").drop_weight_price_rows is True


def test_default_keyword_tables(registry) -> None:
    keywords = registry.keywords

    assert "SUMME" in keywords.end
    assert "Preis" in keywords.start
    assert "Rabatt" in keywords.discount
    assert "Posten:" in keywords.info
    assert keywords.deposit == ("Pfand",)
    assert keywords.weight_price_marker == "/kg"
    assert keywords.name_prefixes[:2] == ("KLC.", "KLC ")


def test_unregistered_vendor_gets_default_grammar(registry) -> None:
    entry = registry.entry_for("Penny")

    assert not registry.is_known("Penny")
    assert entry.grammar == DEFAULT_GRAMMAR


def test_later_layers_extend_vendors_and_keywords() -> None:
    registry = build_vendor_registry(
        [
            {"vendors": [{"id": "Lidl", "keywords": ["LIDL"]}]},
            {
                "fallback_vendor": "Lidl",
                "keywords": {"end": ["GESAMT"], "weight_price_marker": "EUR/kg"},
                "vendors": [
                    {"id": "Lidl", "keywords": ["Lidl Dienstleistung"]},
                    {"id": "Penny", "keywords": ["PENNY"], "grammar": "quantity_marker"},
                ],
            },
        ]
    )

    assert registry.fallback_vendor == "Lidl"
    assert registry.vendor_ids == ("Lidl", "Penny")
    assert registry.entry_for("Lidl").keywords == ("LIDL", "Lidl Dienstleistung")
    assert registry.entry_for("Penny").grammar == GRAMMAR_QUANTITY_MARKER
    assert registry.keywords.end[-1] == "GESAMT"
    assert registry.keywords.weight_price_marker == "EUR/kg"


def test_unknown_grammar_is_rejected() -> None:
    with pytest.raises(ValueError, match="grammar"):
        build_vendor_registry([{"vendors": [{"id": "Penny", "grammar": "spatial"}]}])


def test_load_vendor_registry_from_toml(tmp_path) -> None:
    rules_path = tmp_path / "vendors.toml"
    rules_path.write_text(
        """
fallback_vendor = "Penny"

[[vendors]]
id = "Penny"
keywords = ["PENNY", "Penny Markt"]
grammar = "quantity_marker"
""",
        encoding="utf-8",
    )

    load_vendor_registry.cache_clear()
    registry = load_vendor_registry((str(rules_path),))

    assert registry.vendor_ids == ("Penny",)
    assert registry.fallback_vendor == "Penny"


def test_project_config_adds_vendor_after_defaults(project_config) -> None:
    (project_config / "vendors.toml").write_text(
        '[[vendors]]\nid = "Penny"\nkeywords = ["PENNY"]\n',
        encoding="utf-8",
    )

    load_vendor_registry.cache_clear()
    registry = load_vendor_registry()

    assert registry.vendor_ids[0] == "Kaufland"
    assert registry.vendor_ids[-1] == "Penny"
    assert registry.entry_for("Penny").grammar == DEFAULT_GRAMMAR
