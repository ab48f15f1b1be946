"""Row normalization pipeline for extracted receipt rows.

This stage sits between the row source (OCR lines or PDF text fragments)
and document location. Each operation rewrites the token list of a single
row; rows are never added or removed, only their tokens change.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from kassenbon.domain.rows import RowTable

RowNormalizationOp = Callable[[list[str]], list[str]]

# Tax-rate markers printed after the price column
TAX_CODE_MARKERS = frozenset({"A", "B", "D"})
MIN_TRAILING_TOKEN_LENGTH = 3

# Recognizer misreads of tax markers glued onto the price, longest first
OCR_CORRUPTION_SUFFIXES = ("+*A", "+*B", "'A", "'B", "*A", "*B", "+A", "+B")
DIGIT_TAX_SUFFIX = re.compile(r"(?<=\d)[AB]$")


def strip_blank_tokens(tokens: list[str]) -> list[str]:
    """Remove blank tokens from both ends of the row."""
    start = 0
    end = len(tokens)
    while start < end and not tokens[start].strip():
        start += 1
    while end > start and not tokens[end - 1].strip():
        end -= 1
    return tokens[start:end]


def strip_trailing_tax_codes(tokens: list[str]) -> list[str]:
    """Drop trailing tax markers and short fragments, never the last remaining token."""
    result = list(tokens)
    while len(result) > 1 and (result[-1] in TAX_CODE_MARKERS or len(result[-1]) < MIN_TRAILING_TOKEN_LENGTH):
        result.pop()
    return result


def repair_price_token(tokens: list[str]) -> list[str]:
    """Strip tax-marker corruption from the last token ("1,99*A" -> "1,99", "5A" -> "5")."""
    if not tokens:
        return tokens
    last = tokens[-1]
    for suffix in OCR_CORRUPTION_SUFFIXES:
        if last.endswith(suffix):
            last = last[: -len(suffix)]
            break
    last = DIGIT_TAX_SUFFIX.sub("", last)
    return tokens[:-1] + [last]


DEFAULT_ROW_OPERATIONS: tuple[RowNormalizationOp, ...] = (
    strip_blank_tokens,
    strip_trailing_tax_codes,
    repair_price_token,
)


def normalize_row(
    tokens: Sequence[str],
    operations: Sequence[RowNormalizationOp] = DEFAULT_ROW_OPERATIONS,
) -> list[str]:
    """Run the operations in sequence until the row stops changing.

    A repair can expose new trailing artifacts ("ab*A" -> "ab"), so one pass
    is not enough for normalization to be idempotent.
    """
    current = list(tokens)
    while True:
        updated = current
        for operation in operations:
            updated = operation(updated)
        if updated == current:
            return updated
        current = updated


def normalize_rows(
    rows: RowTable,
    *,
    operations: Sequence[RowNormalizationOp] = DEFAULT_ROW_OPERATIONS,
) -> RowTable:
    """Normalize every row in place and return the same table."""
    for index in rows:
        rows[index] = normalize_row(rows[index], operations)
    return rows
