"""Number and date formatting for printed documents."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Union

from .i18n import DEFAULT_LANGUAGE, MONTH_NAMES

CURRENCY_SYMBOL = "₪"


def format_number(value: Any) -> str:
    """Whole number with thousands separators; blanks print as ``0``."""
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        return str(value)
    return f"{amount:,.0f}"


def format_currency(value: Any, symbol: str = CURRENCY_SYMBOL) -> str:
    """Symbol-prefixed amount rounded to whole units.

    >>> format_currency(1234.5)
    '₪1,234'
    >>> format_currency(-80)
    '-₪80'
    """
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        return str(value)
    sign = "-" if round(amount) < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.0f}"


def _as_date(value: Union[str, date, datetime]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: Union[str, date, datetime, None], language: str = DEFAULT_LANGUAGE) -> str:
    """Day, long month name and year in ``language``, e.g. ``15 March 2024``.

    Unparseable strings are printed unchanged; ``None`` prints as an empty string.
    """
    if value is None:
        return ""
    parsed = _as_date(value)
    if parsed is None:
        return str(value)
    months = MONTH_NAMES.get(language, MONTH_NAMES[DEFAULT_LANGUAGE])
    return f"{parsed.day} {months[parsed.month - 1]} {parsed.year}"
