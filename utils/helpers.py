"""
Helper utility functions
"""
from datetime import datetime, date
from typing import Optional
import calendar
import math
import re

from config import settings

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_AMOUNT = re.compile(
    r"^(?:[A-Za-z$€£]{1,4}\s*)?"
    r"(?P<number>-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?)"
    r"\s*(?:[A-Za-z$€£%]{1,4})?$"
)


def format_currency(amount: float, currency: str = settings.LOCAL_CURRENCY) -> str:
    """Format an amount with thousands separators, e.g. '150,000 RWF'"""
    if amount is None:
        amount = 0
    if float(amount).is_integer():
        text = f"{abs(amount):,.0f}"
    else:
        text = f"{abs(amount):,.2f}"
    sign = "-" if amount < 0 else ""
    return f"{sign}{text} {currency}"


def format_percentage(value: float) -> str:
    """Format a whole-number percentage"""
    return f"{value:.0f}%"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero"""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def parse_iso_date(date_str) -> Optional[date]:
    """
    Parse a strict ISO calendar date (YYYY-MM-DD).
    Accepts date/datetime objects as-is. Returns None for anything else.
    """
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    if not isinstance(date_str, str) or not date_str.strip():
        return None

    text = date_str.strip()
    # Tolerate a trailing time component such as 2024-03-01T10:00:00Z
    if "T" in text:
        text = text.split("T", 1)[0]

    if not _ISO_DATE.match(text):
        return None
    try:
        return datetime.strptime(text, settings.DATE_FORMAT).date()
    except ValueError:
        return None


def parse_amount(value) -> Optional[float]:
    """
    Parse a numeric amount.
    Examples: 150000, "150,000", "150000 RWF", "Frw 150,000.50"
    Returns None when no finite number can be read.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # One number, optionally wrapped by a currency code or symbol
    match = _AMOUNT.match(text)
    if not match:
        return None

    number = float(match.group("number").replace(",", ""))
    return number if math.isfinite(number) else None


def last_day_of_month(year: int, month: int) -> date:
    """Last calendar day of the given month"""
    return date(year, month, calendar.monthrange(year, month)[1])


def get_month_name(month_date: date, short: bool = False) -> str:
    """Get month name from date (e.g., 'October' or 'Oct 2026')"""
    if not month_date:
        return ""
    if short:
        return month_date.strftime("%b %Y")
    return month_date.strftime("%B")


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID"""
    from uuid import uuid4
    unique = uuid4().hex
    if prefix:
        return f"{prefix}_{unique}"
    return unique
