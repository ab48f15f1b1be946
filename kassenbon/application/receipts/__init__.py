"""Receipt workflows."""

from kassenbon.application.receipts.parse import ReceiptParseRequest, ReceiptParseResult, run_receipt_parse

__all__ = [
    "ReceiptParseRequest",
    "ReceiptParseResult",
    "run_receipt_parse",
]
