"""Shared constants and helpers for receipt row parsing."""

import re
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation

from kassenbon.domain.receipt import round_money

# Plain decimal after the first comma became a point: "1,99", "-0,50", "3", ".5"
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

# Boundary keywords only count on tokens made of letters, so prices or codes
# that happen to contain "EUR" never cut the receipt
BOUNDARY_CANDIDATE_PATTERN = re.compile(r"[a-zA-Z]+")


def parse_decimal(token: str | None) -> Decimal | None:
    """
    Parse a receipt number, using a decimal comma or point.

    Returns the value rounded to two places, or None if the token is not a
    number. None is deliberately distinct from a legitimate zero.
    """
    if token is None:
        return None
    normalized = token.strip().replace(",", ".", 1)
    if not NUMBER_PATTERN.fullmatch(normalized):
        return None
    try:
        return round_money(Decimal(normalized))
    except InvalidOperation:
        return None


def format_decimal(value: Decimal) -> str:
    """Serialize a money/quantity value with two decimal places."""
    return f"{round_money(value):.2f}"


def content_tokens(row: Sequence[str]) -> list[str]:
    """Row tokens without blank spacer tokens (PDF rows carry " " fragments)."""
    return [token for token in row if token.strip()]


def join_name(tokens: Sequence[str], drop_last: int = 0) -> str:
    """Join item-name tokens, leaving out the last drop_last tokens.

    A row that would lose every token keeps its first one, so a lone price
    row is still named by what was printed.
    """
    keep = max(len(tokens) - drop_last, 0)
    if keep == 0 and tokens:
        return tokens[0].strip()
    return " ".join(tokens[:keep]).strip()


def token_contains_keyword(token: str, keywords: Iterable[str]) -> bool:
    return any(keyword in token for keyword in keywords)


def row_contains_keyword(row: Sequence[str], keywords: Iterable[str]) -> bool:
    """Return True if any token of the row contains any keyword as a substring."""
    keywords = tuple(keywords)
    return any(token_contains_keyword(token, keywords) for token in row)


def is_boundary_candidate(token: str) -> bool:
    return BOUNDARY_CANDIDATE_PATTERN.fullmatch(token) is not None
