"""Two-column item grammar (Lidl, Edeka and unknown vendors).

Item rows carry the name on the left and the line total on the right:

    Butter 1,99                 single unit
    Apfel 0,80 x 3 2,40         multi-unit, with or without the "x" separator
    Pfandrückgabe -0,75         deposit return, the next row holds the unit price
    3 x 0,25 0,25
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum, auto

from kassenbon.domain.receipt import ReceiptItem, ReceiptWarning, round_money
from kassenbon.domain.rows import RowTable
from kassenbon.runtime.logging import get_logger

from ..vendors import GRAMMAR_TWO_COLUMN
from .common import content_tokens, join_name, parse_decimal, token_contains_keyword
from .items_grammar import ItemGrammar

logger = get_logger(__name__)

DEPOSIT_RETURN_NAME = "deposit-return"
QUANTITY_SEPARATORS = frozenset({"x", "X"})


class _State(Enum):
    IDLE = auto()
    AWAIT_DEPOSIT_TOTAL = auto()


def _multi_unit_name(tokens: list[str]) -> str:
    """Name tokens of a multi-unit row: drop total, quantity, separator and unit price."""
    name_tokens = tokens[:-2]
    if name_tokens and name_tokens[-1] in QUANTITY_SEPARATORS:
        name_tokens = name_tokens[:-1]
    # Keep at least one token so "Apfel 3 2,40" still has a name
    if len(name_tokens) > 1 and parse_decimal(name_tokens[-1]) is not None:
        name_tokens = name_tokens[:-1]
    return join_name(name_tokens)


class TwoColumnGrammar(ItemGrammar):
    """States: IDLE, AWAIT_DEPOSIT_TOTAL."""

    kind = GRAMMAR_TWO_COLUMN

    def parse(self, rows: RowTable, warning_sink: list[ReceiptWarning] | None = None) -> list[ReceiptItem]:
        items: list[ReceiptItem] = []
        state = _State.IDLE
        deposit_total = Decimal("0")
        deposit_row = -1

        for index in rows:
            tokens = content_tokens(rows[index])
            if len(tokens) < 2:
                # Can't hold both a name and a price
                continue

            last = parse_decimal(tokens[-1])

            if state is _State.AWAIT_DEPOSIT_TOTAL:
                state = _State.IDLE
                if last is None or last == 0:
                    logger.warning("Deposit return in row %d has no unit price row, dropped", deposit_row)
                    self._warn(warning_sink, "deposit return dropped: missing unit price row", deposit_row)
                    continue
                unit_price = abs(last)
                items.append(
                    ReceiptItem(
                        source_row_index=deposit_row,
                        name=DEPOSIT_RETURN_NAME,
                        unit_price=-unit_price,
                        quantity=round_money(deposit_total / unit_price),
                    )
                )
                continue

            if last is None:
                continue

            second_last = parse_decimal(tokens[-2])
            if second_last is not None and second_last != 0:
                items.append(
                    ReceiptItem(
                        source_row_index=index,
                        name=_multi_unit_name(tokens),
                        unit_price=round_money(last / second_last),
                        quantity=second_last,
                    )
                )
            elif last < 0 and token_contains_keyword(tokens[-2], self.keywords.deposit):
                state = _State.AWAIT_DEPOSIT_TOTAL
                deposit_total = abs(last)
                deposit_row = index
            else:
                items.append(ReceiptItem(source_row_index=index, name=join_name(tokens, 1), unit_price=last))

        if state is _State.AWAIT_DEPOSIT_TOTAL:
            logger.warning("Receipt ends inside a deposit return sequence (row %d)", deposit_row)
            self._warn(warning_sink, "deposit return dropped: missing unit price row", deposit_row)

        return items
