"""Name-then-detail item grammar (Kaufland).

Single items fit on one row. Multiples and weighed goods print the name on
its own row, followed by a detail row:

    Milch 1,19
    Wurst
    3 * 1,50 4,50          multiplier detail (printed count, unit price, total)
    Bananen
    1,234 kg x 1,99 2,46   weight detail (line total last)
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum, auto

from kassenbon.domain.receipt import ReceiptItem, ReceiptWarning
from kassenbon.domain.rows import RowTable
from kassenbon.runtime.logging import get_logger

from ..vendors import GRAMMAR_NAME_DETAIL
from .common import content_tokens, join_name, parse_decimal
from .items_grammar import ItemGrammar

logger = get_logger(__name__)

MULTIPLIER_MARKER = "*"
WEIGHT_MARKER = "kg"


class _State(Enum):
    IDLE = auto()
    AWAIT_DETAIL = auto()


class NameDetailGrammar(ItemGrammar):
    """States: IDLE, AWAIT_DETAIL."""

    kind = GRAMMAR_NAME_DETAIL

    def parse(self, rows: RowTable, warning_sink: list[ReceiptWarning] | None = None) -> list[ReceiptItem]:
        items: list[ReceiptItem] = []
        state = _State.IDLE
        pending_name = ""
        pending_row = -1

        for index in rows:
            tokens = content_tokens(rows[index])
            if not tokens:
                continue

            last = parse_decimal(tokens[-1])

            if state is _State.IDLE:
                if last is not None:
                    items.append(ReceiptItem(source_row_index=index, name=join_name(tokens, 1), unit_price=last))
                else:
                    pending_name = join_name(tokens)
                    pending_row = index
                    state = _State.AWAIT_DETAIL
                continue

            state = _State.IDLE
            if any(MULTIPLIER_MARKER in token for token in tokens):
                items.append(self._multiplier_item(pending_row, pending_name, tokens, warning_sink))
            elif any(WEIGHT_MARKER in token for token in tokens):
                items.append(
                    ReceiptItem(
                        source_row_index=pending_row,
                        name=pending_name,
                        unit_price=last if last is not None else Decimal("0.00"),
                    )
                )
            else:
                logger.warning("Row %d follows name row %r but is no detail row", index, pending_name)
                self._warn(warning_sink, f'name row "{pending_name}" dropped: no price detail', pending_row)

        if state is _State.AWAIT_DETAIL:
            logger.warning("Receipt ends after name row %r without a detail row", pending_name)
            self._warn(warning_sink, f'name row "{pending_name}" dropped: no price detail', pending_row)

        return items

    def _multiplier_item(
        self,
        row_index: int,
        name: str,
        tokens: list[str],
        warning_sink: list[ReceiptWarning] | None,
    ) -> ReceiptItem:
        """Build the item from a "3 * 1,50 4,50" detail row.

        The computed quantity is only trusted if it is a whole number that is
        also printed in the row's first token; otherwise quantity 1 is assumed.
        """
        total = parse_decimal(tokens[-1])
        unit_price = parse_decimal(tokens[-2]) if len(tokens) >= 2 else None

        if total is None or not unit_price:
            logger.warning("Multiplier row for %r has no readable prices", name)
            self._warn(warning_sink, f'"{name}": multiplier row without prices, price set to 0', row_index)
            return ReceiptItem(source_row_index=row_index, name=name, unit_price=Decimal("0.00"))

        quantity = total / unit_price
        if quantity == quantity.to_integral_value() and str(int(quantity)) in tokens[0]:
            return ReceiptItem(
                source_row_index=row_index,
                name=name,
                unit_price=unit_price,
                quantity=Decimal(int(quantity)),
            )

        logger.warning("Quantity %s for %r not confirmed by printed count %r", quantity, name, tokens[0])
        self._warn(warning_sink, f'"{name}": quantity not confirmed by printed count, assumed 1', row_index)
        return ReceiptItem(source_row_index=row_index, name=name, unit_price=unit_price)
