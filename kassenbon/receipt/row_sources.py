"""Pure adapters that turn extracted receipt text into a RowTable."""

from collections.abc import Iterable, Mapping
from typing import Any

from kassenbon.domain.rows import RowTable

# OCR reads a lowercase "l" as "]" or ")"; only the first occurrence per line is repaired
OCR_BRACKET_REPAIRS = (("]", "l"), (")", "l"))


def _clean_ocr_line(line: str) -> str:
    cleaned = line.replace("\n", "")
    for wrong, right in OCR_BRACKET_REPAIRS:
        cleaned = cleaned.replace(wrong, right, 1)
    return cleaned


def rows_from_lines(lines: Iterable[str]) -> RowTable:
    """
    One row per OCR text line, indexed from 0.

    Lines are split on single spaces, so runs of spaces leave blank tokens
    behind; the row normalizer strips them.
    """
    return RowTable((index, _clean_ocr_line(line).split(" ")) for index, line in enumerate(lines))


def rows_from_positioned_text(fragments: Iterable[tuple[str, float]]) -> RowTable:
    """
    Group PDF text fragments into rows.

    Fragments arrive in reading order as (text, y) pairs; a new row starts
    whenever the vertical position changes.
    """
    rows = RowTable()
    current: list[str] = []
    current_y: float | None = None

    for text, y in fragments:
        if current and y != current_y:
            rows[len(rows)] = current
            current = []
        current_y = y
        current.append(text)

    if current:
        rows[len(rows)] = current
    return rows


def rows_from_mapping(mapping: Mapping[Any, Any]) -> RowTable:
    """
    Build a RowTable from a JSON-style payload like {"0": ["Butter", "1,99"]}.

    Raises:
        ValueError: If the payload is not a mapping, a key is not a non-negative
            integer, or a row is not a list of strings.
    """
    if not isinstance(mapping, Mapping):
        raise ValueError("Row table must be an object keyed by row index")
    rows = RowTable()
    for key, tokens in mapping.items():
        try:
            index = int(key)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Row key must be an integer, got {key!r}") from exc
        if index < 0:
            raise ValueError(f"Row key must be non-negative, got {key!r}")
        if not isinstance(tokens, list) or not all(isinstance(token, str) for token in tokens):
            raise ValueError(f"Row {key!r} must be a list of strings")
        rows[index] = list(tokens)
    return rows
