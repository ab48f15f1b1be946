"""Quantity-marker item grammar (Netto).

Multi-unit purchases are printed as a marker row with the unit price,
followed by the item row with the line total:

    2 x 0,99
    Cola Zero 1,98
"""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum, auto

from kassenbon.domain.receipt import ReceiptItem, ReceiptWarning, round_money
from kassenbon.domain.rows import RowTable
from kassenbon.runtime.logging import get_logger

from ..vendors import GRAMMAR_QUANTITY_MARKER
from .common import content_tokens, join_name, parse_decimal
from .items_grammar import ItemGrammar

logger = get_logger(__name__)

# "3x", "12X" or a bare "x"
QUANTITY_MARKER_PATTERN = re.compile(r"\d*[xX]")
MAX_QUANTITY_MARKER_LENGTH = 3


class _State(Enum):
    IDLE = auto()
    AWAIT_TOTAL = auto()


def is_quantity_marker(token: str) -> bool:
    return len(token) <= MAX_QUANTITY_MARKER_LENGTH and QUANTITY_MARKER_PATTERN.fullmatch(token) is not None


def _marker_count(token: str) -> Decimal | None:
    digits = token.rstrip("xX")
    return Decimal(digits) if digits else None


class QuantityMarkerGrammar(ItemGrammar):
    """States: IDLE, AWAIT_TOTAL."""

    kind = GRAMMAR_QUANTITY_MARKER

    def parse(self, rows: RowTable, warning_sink: list[ReceiptWarning] | None = None) -> list[ReceiptItem]:
        items: list[ReceiptItem] = []
        state = _State.IDLE
        unit_price = Decimal("0")
        marker_count: Decimal | None = None

        for index in rows:
            tokens = content_tokens(rows[index])
            if len(tokens) < 2:
                continue

            last = parse_decimal(tokens[-1])
            if last is None:
                # Non-price rows never change state
                continue

            if state is _State.AWAIT_TOTAL:
                if unit_price:
                    quantity = round_money(last / unit_price)
                else:
                    quantity = marker_count or Decimal("1")
                    logger.warning("Zero unit price before row %d, using printed count %s", index, quantity)
                    self._warn(warning_sink, f"quantity taken from marker ({quantity}), unit price was zero", index)
                items.append(
                    ReceiptItem(
                        source_row_index=index,
                        name=join_name(tokens, 1),
                        unit_price=unit_price,
                        quantity=quantity,
                    )
                )
                state = _State.IDLE
                continue

            if is_quantity_marker(tokens[-2]):
                unit_price = last
                marker_count = _marker_count(tokens[-2])
                state = _State.AWAIT_TOTAL
                continue

            items.append(ReceiptItem(source_row_index=index, name=join_name(tokens, 1), unit_price=last))

        if state is _State.AWAIT_TOTAL:
            logger.warning("Receipt ends after a quantity marker without its item row")

        return items
