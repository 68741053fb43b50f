"""String-to-value converters shared by every report extractor.

All three parsers are total: malformed or absent input yields None, never an
exception. A leading numeric prefix is accepted ("12.5 pts" -> 12.5);
NaN and infinities are rejected.
"""

import math
import re
from datetime import date, datetime
from typing import Any

_NUMBER_PREFIX = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_PARENTHESIZED = re.compile(r"\((.*?)\)")

_DATE_FORMATS = (
    "%d %B %Y",   # 30 June 2024
    "%d %b %Y",   # 30 Jun 2024
    "%d/%m/%Y",   # 30/06/2024 (day first, as printed in Australian reports)
    "%Y-%m-%d",   # 2024-06-30
    "%B %d %Y",   # June 30 2024
)


def _to_number(cleaned: str) -> float | None:
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_date(value: Any) -> str | None:
    """Parse a report date into an ISO calendar date string.

    Accepts "D Month YYYY" (full or abbreviated month), "DD/MM/YYYY" and
    ISO-like strings, with or without a time part.

    Examples:
        "30 June 2024" -> "2024-06-30"
        "30/06/2024" -> "2024-06-30"
        "2024-06-30T10:00:00" -> "2024-06-30"
        "sometime" -> None
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    cleaned = " ".join(str(value).replace(",", " ").split())
    if not cleaned:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(cleaned.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return None


def parse_currency(value: Any) -> float | None:
    """Parse a currency amount.

    Strips "$", thousands separators and whitespace. Parenthesized amounts
    are negative: "(1,234.56)" -> -1234.56.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    cleaned = str(value).replace("$", "").replace(",", "")
    cleaned = _PARENTHESIZED.sub(r"-\1", cleaned, count=1)
    cleaned = "".join(cleaned.split())
    return _to_number(cleaned)


def parse_percentage(value: Any) -> float | None:
    """Parse a percentage like "12.34%" into 12.34. A lone "-" is None."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    cleaned = str(value).replace("%", "", 1).strip()
    return _to_number(cleaned)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (12.25 -> 12.3 at one decimal).

    Python's round() uses banker's rounding, which would report 12.2 here.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
