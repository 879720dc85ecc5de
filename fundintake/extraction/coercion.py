"""Value coercers: free text in, typed value or ``None`` out.

A coercer never guesses. Text it cannot read with confidence yields ``None``,
which the engine records as a field-level parse failure.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser

_MONEY_RE = re.compile(
    r"(?:US\$|USD|\$|€|£|EUR|GBP)?\s*"
    r"(?P<number>\d[\d,]*(?:\.\d+)?|\.\d+)"
    r"(?:\s*(?P<suffix>k|m|mm|b|bn|thousand|million|billion)\b)?",
    re.IGNORECASE,
)
_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "mm": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "bn": 1_000_000_000,
    "billion": 1_000_000_000,
}
_GROUPED_RE = re.compile(r"^\d{1,3}(?:,\d{3})+(?:\.\d+)?$|^\d+(?:\.\d+)?$|^\.\d+$")
_PERCENT_RE = re.compile(r"(?P<number>\d+(?:\.\d+)?)\s*(?:%|percent\b)?", re.IGNORECASE)
_YES_NO_RE = re.compile(r"^\W*(yes|no|true|false|y|n)\b", re.IGNORECASE)
_NUMERIC_DATE_RE = re.compile(r"^\s*(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4})\s*$")
_ISO_DATE_RE = re.compile(r"^\s*\d{4}-\d{1,2}-\d{1,2}\s*$")
_HAS_YEAR_RE = re.compile(r"\b\d{4}\b")

_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%b. %d, %Y",
    "%Y-%m-%d",
)


def parse_money(text: str) -> int | float | None:
    """``"$1,250,000.00"`` -> ``1250000``; ``"$1.5M"`` -> ``1500000``.

    The amount must open the value; only a currency mark may precede it.
    """
    match = _MONEY_RE.match(text.strip())
    if match is None:
        return None
    digits = match.group("number")
    if not _GROUPED_RE.match(digits):
        return None
    try:
        amount = Decimal(digits.replace(",", ""))
    except InvalidOperation:
        return None
    suffix = (match.group("suffix") or "").lower()
    if suffix:
        amount *= _MULTIPLIERS[suffix]
    return _plain_number(amount)


def parse_percent(text: str) -> int | float | None:
    match = _PERCENT_RE.match(text.strip())
    if match is None:
        return None
    try:
        value = Decimal(match.group("number"))
    except InvalidOperation:
        return None
    if value > 100:
        return None
    return _plain_number(value)


def parse_yes_no(text: str) -> bool | None:
    match = _YES_NO_RE.match(text)
    if match is None:
        return None
    return match.group(1).lower() in {"yes", "true", "y"}


def parse_calendar_date(text: str) -> str | None:
    """Normalize a written date to ``YYYY-MM-DD``.

    Day/month order in purely numeric dates like ``01/02/2025`` cannot be
    known, so those only succeed when one side is greater than 12. Years
    must be written in full.
    """
    cleaned = text.strip().rstrip(".").strip()
    if not cleaned:
        return None

    numeric = _NUMERIC_DATE_RE.match(cleaned)
    if numeric:
        return _parse_numeric_date(*numeric.groups())

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue

    if _ISO_DATE_RE.match(cleaned) or not _HAS_YEAR_RE.search(cleaned):
        return None
    # Parsing against two different defaults exposes any component the text
    # did not supply (e.g. "March 2025" has no day).
    try:
        first = date_parser.parse(cleaned, fuzzy=False, default=datetime(1900, 1, 1))
        second = date_parser.parse(cleaned, fuzzy=False, default=datetime(1904, 2, 2))
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date().isoformat()


def _parse_numeric_date(first: str, second: str, year: str) -> str | None:
    a, b = int(first), int(second)
    full_year = int(year)
    if a > 12 and b <= 12:
        day, month = a, b
    elif b > 12 and a <= 12:
        month, day = a, b
    elif a == b:
        month = day = a
    else:
        return None
    try:
        return date(full_year, month, day).isoformat()
    except ValueError:
        return None


def _plain_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)
