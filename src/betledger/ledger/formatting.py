"""Currency, number, and date formatting primitives shared by the ledger."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
_ISO_KEY = re.compile(r"^\d{4}-\d{2}-\d{2}")
_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})")
_FALLBACK_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y", "%d %b %Y", "%m-%d-%Y")


def parse_float_prefix(text: str) -> float:
    """Parse the leading numeric portion of ``text``; ``nan`` when there is none."""

    match = _FLOAT_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going toward positive infinity."""

    return math.floor(value + 0.5)


def to_fixed(value: float, places: int = 2) -> str:
    """Render ``value`` with a fixed number of decimals.

    Ties on the exact binary value round away from zero, which is how browsers
    format numbers, so figures match what the ledger has always displayed.
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-places)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def parse_currency(value: Any) -> float:
    """Parse a number or a ``$``/``,`` decorated string; malformed input is 0."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    else:
        text = str(value).replace("$", "").replace(",", "")
        if not text.strip():
            return 0.0
        number = parse_float_prefix(text)
    return number if math.isfinite(number) else 0.0


def format_currency(value: Any) -> str:
    return "$" + to_fixed(parse_currency(value), 2)


def normalize_date_key(value: Any) -> str:
    """Convert the date spellings found in the ledger to ``YYYY-MM-DD``."""

    if not value:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    if _ISO_KEY.match(text):
        return text[:10]
    match = _US_DATE.match(text)
    if match:
        month, day, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    parsed = _parse_loose_date(text)
    return parsed.isoformat() if parsed else ""


def format_date_display(value: Any) -> str:
    """Render a stored date as ``MM/DD/YYYY``; unknown spellings pass through."""

    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        value = normalize_date_key(value)
    text = str(value)
    match = _ISO_DATE.match(text)
    if match:
        year, month, day = match.groups()
        return f"{month.zfill(2)}/{day.zfill(2)}/{year}"
    parsed = _parse_loose_date(text.strip())
    return parsed.strftime("%m/%d/%Y") if parsed else text


def _parse_loose_date(text: str) -> date | None:
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
