"""Core domain models for the kassenbon project.

This module provides the core data models used throughout the project:
- RowTable: Sparse, index-stable receipt rows
- Receipt, ReceiptItem, ReceiptWarning: Parsed receipt models
- ReceiptParseError and its subclasses: Fatal parse failures

Usage:
    from kassenbon.domain import Receipt, ReceiptItem, RowTable
"""

from kassenbon.domain.errors import EmptyInput, NoItemsFound, ReceiptParseError, UnprocessableDocument
from kassenbon.domain.receipt import Receipt, ReceiptItem, ReceiptWarning, TimestampIdSource, round_money
from kassenbon.domain.rows import RowTable

__all__ = [
    "EmptyInput",
    "NoItemsFound",
    "Receipt",
    "ReceiptItem",
    "ReceiptParseError",
    "ReceiptWarning",
    "RowTable",
    "TimestampIdSource",
    "UnprocessableDocument",
    "round_money",
]
