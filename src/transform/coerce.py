from __future__ import annotations

import math
import numbers
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

"""Cell coercion helpers shared by the hardness parser and row reshaper.

Spreadsheet cells arrive untyped (numbers, strings, dates or None). None of the
helpers here raise on odd input; they degrade to None instead.
"""

__all__ = [
    "as_text",
    "is_populated",
    "leading_int",
    "round_one_decimal",
    "to_number",
]

_LEADING_INT_RE = re.compile(r"^\s*([+-]?)(\d+)")
_ONE_DECIMAL = Decimal("0.1")
# 桁数上限 (int() の桁数制限より十分小さい)
_MAX_INT_DIGITS = 18


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_populated(value: Any) -> bool:
    """Spreadsheet truthiness: None, NaN, "" and numeric zero count as empty."""
    if value is None or _is_nan(value):
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, numbers.Number):
        return value != 0
    return True


def as_text(value: Any) -> str | None:
    """Stringify a cell and trim it. Empty results become None."""
    if value is None or _is_nan(value):
        return None
    text = str(value).strip()
    return text or None


def to_number(value: Any) -> float | None:
    """Coerce a cell to float.

    Empty, non-numeric, non-finite and zero values all become None, so a
    record never carries a zero thickness or height.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


def leading_int(text: str) -> int | None:
    """Parse the integer prefix of text ("12abc" -> 12, "12.0" -> 12).

    A digit run longer than _MAX_INT_DIGITS is not a usable value and gives None.
    """
    m = _LEADING_INT_RE.match(text)
    if m is None:
        return None
    sign, digits = m.groups()
    if len(digits) > _MAX_INT_DIGITS:
        return None
    return int(sign + digits)


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place on the shortest decimal repr."""
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
