"""Tests for receipt number parsing and serialization."""

from __future__ import annotations

from decimal import Decimal

import pytest

from kassenbon.receipt.ocr_parser.common import format_decimal, parse_decimal


def test_decimal_comma_round_trips_to_point_notation() -> None:
    value = parse_decimal("12,34")

    assert value == Decimal("12.34")
    assert format_decimal(value) == "12.34"


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("1,99", Decimal("1.99")),
        ("-0,50", Decimal("-0.50")),
        ("3", Decimal("3.00")),
        ("2.5", Decimal("2.50")),
        ("0,005", Decimal("0.01")),
        (" 4,20 ", Decimal("4.20")),
        ("0,00", Decimal("0.00")),
    ],
)
def test_parse_decimal(token: str, expected: Decimal) -> None:
    assert parse_decimal(token) == expected


@pytest.mark.parametrize("token", ["", "EUR", "1,99A", "1,2,3", "kg", "-", None])
def test_parse_decimal_failures_are_none(token) -> None:
    assert parse_decimal(token) is None


def test_zero_is_not_a_parse_failure() -> None:
    assert parse_decimal("0") is not None
