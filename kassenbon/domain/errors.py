"""Fatal receipt parsing errors surfaced to callers."""


class ReceiptParseError(Exception):
    """Base class for errors that stop a receipt from being parsed."""


class EmptyInput(ReceiptParseError):
    """No row data was supplied at all."""


class UnprocessableDocument(ReceiptParseError):
    """Boundary location collapsed the item range to nothing."""


class NoItemsFound(ReceiptParseError):
    """The vendor grammar produced no items from the filtered rows."""

    def __init__(self, message: str, *, store: str | None = None, store_is_fallback: bool = False) -> None:
        super().__init__(message)
        self.store = store
        self.store_is_fallback = store_is_fallback
