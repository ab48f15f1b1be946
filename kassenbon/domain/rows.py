"""Sparse row table produced by a receipt row source."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping, Sequence


class RowTable(MutableMapping[int, list[str]]):
    """Ordered mapping of receipt row index -> tokens.

    Row indices are stable identifiers: deleting a row never renumbers the
    remaining rows, so later stages can correlate discount rows with the item
    rows they modify. Iteration always yields indices in ascending order and
    works on a snapshot, so rows may be deleted while iterating.
    """

    def __init__(self, rows: Mapping[int, Sequence[str]] | Iterable[tuple[int, Sequence[str]]] | None = None) -> None:
        self._rows: dict[int, list[str]] = {}
        if rows is None:
            return
        pairs = rows.items() if isinstance(rows, Mapping) else rows
        for index, tokens in pairs:
            self[index] = list(tokens)

    def __getitem__(self, index: int) -> list[str]:
        return self._rows[index]

    def __setitem__(self, index: int, tokens: list[str]) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise KeyError(f"Row index must be a non-negative integer, got {index!r}")
        self._rows[index] = list(tokens)

    def __delitem__(self, index: int) -> None:
        del self._rows[index]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._rows))

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        body = ", ".join(f"{index}: {self._rows[index]!r}" for index in self)
        return f"RowTable({{{body}}})"

    def copy(self) -> RowTable:
        """Return an independent copy (token lists are copied too)."""
        return RowTable((index, list(tokens)) for index, tokens in self._rows.items())

    def max_index(self) -> int | None:
        """Highest surviving row index, or None for an empty table."""
        return max(self._rows) if self._rows else None

    def without(self, indices: Iterable[int]) -> RowTable:
        """Return a copy with the given row indices removed."""
        result = self.copy()
        for index in indices:
            result.pop(index, None)
        return result

    def to_dict(self) -> dict[int, list[str]]:
        return {index: list(self._rows[index]) for index in self}
