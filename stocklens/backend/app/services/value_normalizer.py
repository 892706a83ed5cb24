"""
Lenient cell normalization for spreadsheet imports.

Every function here is total: malformed cells contribute zero (or an explicit
absence for money columns) instead of aborting the import.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional

_NON_MONEY_CHARS = re.compile(r"[^0-9.\-]")
# Longest numeric prefix: "12 pcs" -> 12, "1.2.3" -> 1.2, "1,234" -> 1
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CENTS = Decimal("0.01")


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _leading_number(text: str) -> float:
    m = _LEADING_NUMBER.match(text.strip())
    if not m:
        return 0.0
    return _finite_or_zero(float(m.group(0)))


def parse_money(value) -> float:
    """
    Parse currency-like cells into a number.
    e.g. "$1,234.50" -> 1234.5; "", None, NaN and garbage -> 0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        return _finite_or_zero(float(value))
    return _leading_number(_NON_MONEY_CHARS.sub("", str(value)))


def parse_quantity(value) -> float:
    """Parse quantity / opening-inventory cells by their leading number ("12 pcs" -> 12). No number -> 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        return _finite_or_zero(float(value))
    return _leading_number(str(value))


def to_money(value) -> Optional[Decimal]:
    """
    Round to 2 decimal places for storage.
    None / NaN -> None so an absent amount stays distinct from a zero amount.
    """
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    try:
        return Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return None


def normalize_code(value) -> str:
    """
    Trimmed string form of an identity cell.
    pandas turns an integer ID column with blanks into floats (1001 -> 1001.0); render those back as integers.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()
