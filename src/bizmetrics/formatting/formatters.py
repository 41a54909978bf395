from __future__ import annotations

# Display formatting and numeric parsing shared by every page.
# - Locale is fixed to US: "$" prefix, "," thousands separator, "." decimal.
# - Rounding is half-up (1200.5 -> "$1,201"), not Python's default half-even.
# - parse_value is the only string -> number parser in the project.
#   Malformed input ("", "N/A", "-") always parses to PARSE_FALLBACK.

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

PARSE_FALLBACK = 0.0
NOT_AVAILABLE = "N/A"

# straight + curly double quotes, dollar sign, commas, any whitespace
_STRIP_RE = re.compile(r'["“”$,\s]')


def _round_half_up(value: float, fraction_digits: int) -> Decimal:
    exponent = Decimal(1).scaleb(-fraction_digits)
    d = Decimal(str(value))
    # quantize needs every integer digit plus the fraction digits in precision
    with localcontext() as ctx:
        ctx.prec = max(28, d.adjusted() + fraction_digits + 2)
        return d.quantize(exponent, rounding=ROUND_HALF_UP)


def _is_displayable(value) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def format_currency(value: float, fraction_digits: int = 0) -> str:
    """
    Format a number as US dollars.

    format_currency(1234567.891)    -> "$1,234,568"
    format_currency(1200.5, 2)      -> "$1,200.50"
    format_currency(-1200)          -> "-$1,200"
    """
    if not _is_displayable(value):
        return NOT_AVAILABLE
    q = _round_half_up(float(value), fraction_digits)
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.{fraction_digits}f}"


def format_percentage(value: float, fraction_digits: int = 1) -> str:
    """Format a fraction as a percentage: 0.1 -> "10.0%"."""
    if not _is_displayable(value):
        return NOT_AVAILABLE
    q = _round_half_up(float(value) * 100, fraction_digits)
    if q == 0:
        q = abs(q)
    return f"{q:,.{fraction_digits}f}%"


def format_percentage_change(change: float, fraction_digits: int = 1) -> str:
    """Like format_percentage, with a "+" prefix for non-negative values."""
    if not _is_displayable(change):
        return NOT_AVAILABLE
    sign = "+" if change >= 0 else ""
    return sign + format_percentage(change, fraction_digits)


def format_number(value: float, fraction_digits: int = 0) -> str:
    if not _is_displayable(value):
        return NOT_AVAILABLE
    q = _round_half_up(float(value), fraction_digits)
    return f"{q:,.{fraction_digits}f}"


def format_metric_value(value: float, unit: str) -> str:
    # Metric.unit is one of: currency | percentage | count
    if unit == "currency":
        return format_currency(value)
    if unit == "percentage":
        return format_percentage(value)
    return format_number(value)


def parse_value(value) -> float:
    """
    Parse a display string back into a number.

    - strips "$", commas, double quotes and whitespace
    - accounting notation: "($1,200)" -> -1200.0
    - numbers pass through unchanged
    - anything unparseable (None, "", "N/A", "-") -> PARSE_FALLBACK
    """
    if value is None or isinstance(value, bool):
        return PARSE_FALLBACK
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else PARSE_FALLBACK

    text = _STRIP_RE.sub("", str(value))
    negative = len(text) >= 2 and text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]

    try:
        number = float(text)
    except ValueError:
        return PARSE_FALLBACK

    if not math.isfinite(number):
        return PARSE_FALLBACK
    return -number if negative else number


def calculate_percentage_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0
    return (current - previous) / previous


def calculate_average(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def calculate_total(values: Iterable[float]) -> float:
    return float(sum(values))
