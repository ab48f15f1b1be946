"""Tests for the row normalization pipeline."""

from __future__ import annotations

import pytest

from kassenbon.domain.rows import RowTable
from kassenbon.receipt.row_normalization import (
    normalize_row,
    normalize_rows,
    repair_price_token,
    strip_blank_tokens,
    strip_trailing_tax_codes,
)


def test_strip_blank_tokens_only_trims_the_ends() -> None:
    assert strip_blank_tokens(["", " ", "Butter", "", "1,99", " "]) == ["Butter", "", "1,99"]


def test_normalize_row_keeps_interior_blank_tokens() -> None:
    assert normalize_row(["", "Butter", " ", "1,99", "A", ""]) == ["Butter", " ", "1,99"]


@pytest.mark.parametrize(
    ("tokens", "expected"),
    [
        (["Butter", "1,99", "A"], ["Butter", "1,99"]),
        (["Butter", "1,99", "B", "D"], ["Butter", "1,99"]),
        (["Butter", "1,99", "*"], ["Butter", "1,99"]),
        (["Bananen"], ["Bananen"]),
        (["A"], ["A"]),
    ],
)
def test_strip_trailing_tax_codes(tokens: list[str], expected: list[str]) -> None:
    assert strip_trailing_tax_codes(tokens) == expected


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("1,99+*A", "1,99"),
        ("1,99'B", "1,99"),
        ("1,99*A", "1,99"),
        ("2,49+B", "2,49"),
        ("5A", "5"),
        ("0,99B", "0,99"),
        ("KLASSE", "KLASSE"),
    ],
)
def test_repair_price_token(token: str, expected: str) -> None:
    assert repair_price_token(["Butter", token]) == ["Butter", expected]


def test_normalize_rows_keeps_every_row_index() -> None:
    rows = RowTable({0: ["", "LIDL", " "], 3: ["Butter", "1,99*A", "A"], 4: []})

    normalize_rows(rows)

    assert list(rows) == [0, 3, 4]
    assert rows[0] == ["LIDL"]
    assert rows[3] == ["Butter", "1,99"]
    assert rows[4] == []


@pytest.mark.parametrize(
    "tokens",
    [
        ["", "Milch", "1,19", "B", " "],
        ["Apfel", "0,80", "x", "3", "2,40*A"],
        ["Wurst", "ab*A"],
        ["Pfand", "-0,25+B", "D"],
        [" "],
    ],
)
def test_normalization_is_idempotent(tokens: list[str]) -> None:
    once = normalize_row(tokens)

    assert normalize_row(once) == once
