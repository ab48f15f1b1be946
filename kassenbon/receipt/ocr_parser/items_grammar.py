"""Line-item grammar interface and grammar lookup.

Each grammar is a small finite-state machine over the filtered item rows of
one receipt layout. Grammars hold no per-receipt state between calls, so a
single instance can be shared by concurrent parses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from kassenbon.domain.receipt import ReceiptItem, ReceiptWarning
from kassenbon.domain.rows import RowTable

from ..vendors import ReceiptKeywords


class ItemGrammar(ABC):
    """Consumes filtered rows in index order and produces receipt items."""

    kind: ClassVar[str]

    def __init__(self, keywords: ReceiptKeywords) -> None:
        self.keywords = keywords

    @abstractmethod
    def parse(self, rows: RowTable, warning_sink: list[ReceiptWarning] | None = None) -> list[ReceiptItem]:
        """Return the items found in rows; anomalies go to warning_sink."""

    @staticmethod
    def _warn(warning_sink: list[ReceiptWarning] | None, message: str, row_index: int) -> None:
        if warning_sink is not None:
            warning_sink.append(ReceiptWarning(message=message, row_index=row_index))


def get_item_grammar(kind: str, keywords: ReceiptKeywords) -> ItemGrammar:
    """Instantiate the grammar registered under kind.

    Raises:
        KeyError: If no grammar is registered for kind.
    """
    from .items_name_detail import NameDetailGrammar
    from .items_quantity_marker import QuantityMarkerGrammar
    from .items_two_column import TwoColumnGrammar

    grammars: dict[str, type[ItemGrammar]] = {
        grammar.kind: grammar for grammar in (TwoColumnGrammar, QuantityMarkerGrammar, NameDetailGrammar)
    }
    return grammars[kind](keywords)
