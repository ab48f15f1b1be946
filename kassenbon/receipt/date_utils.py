"""Date helpers for receipt parsing and formatting."""

from datetime import date


def placeholder_receipt_date(today: date | None = None) -> date:
    """Return the date used when a receipt carries no readable date."""
    return today or date.today()


def expand_two_digit_year(year: int, today: date | None = None) -> int:
    """Expand a two-digit year with the current century ("24" -> 2024)."""
    today = today or date.today()
    return (today.year // 100) * 100 + year
