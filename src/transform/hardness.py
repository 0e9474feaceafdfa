from __future__ import annotations

import math
import re
import statistics
from collections.abc import Callable
from typing import Any

from ..models.config_models import HardnessStrategy
from .coerce import as_text, leading_int, round_one_decimal

"""Hardness cell parsing.

Hardness is recorded in the source sheets in several ad-hoc encodings:

- one "index reading" pair per line, e.g. "09 043.3\\n10 045.1"
- several pairs on one line, e.g. "09 043.3 10 045.1"
- a bare number, e.g. "44.2" or 44
- period-separated integers, e.g. "47.47.46"
- degree-marked tokens, e.g. "45° 46° 47°"

Each encoding has a named reader returning the readings it finds (empty list
when it does not apply). A HardnessStrategy selects which readers are tried and
in what order; the first reader that returns readings wins and the result is
their mean rounded to one decimal place.
"""

__all__ = [
    "STRATEGY_READERS",
    "bare_number",
    "degree_marked",
    "indexed_readings",
    "parse_hardness",
    "period_separated",
    "segmented_readings",
]

Reader = Callable[[str], list[float]]

# digits, whitespace, captured decimal number (reading index + value)
_READING_RE = re.compile(r"\d+\s+(\d+\.?\d*)")
_BARE_RE = re.compile(r"^\d+\.?\d*$")
_DEGREE_RE = re.compile(r"(\d+)°")


def segmented_readings(text: str) -> list[float]:
    """First index/value pair of every newline-separated segment."""
    values: list[float] = []
    for segment in text.split("\n"):
        m = _READING_RE.search(segment)
        if m:
            values.append(float(m.group(1)))
    return values


def indexed_readings(text: str) -> list[float]:
    """Every index/value pair in the text. A pair never spans a line break."""
    return [
        float(m.group(1))
        for line in text.split("\n")
        for m in _READING_RE.finditer(line)
    ]


def bare_number(text: str) -> list[float]:
    if _BARE_RE.match(text):
        return [float(text)]
    return []


def period_separated(text: str) -> list[float]:
    """Integers separated by periods ("47.47.46"). Non-numeric parts are dropped."""
    if "." not in text:
        return []
    values: list[float] = []
    for part in text.split("."):
        n = leading_int(part)
        if n is not None:
            values.append(float(n))
    return values


def degree_marked(text: str) -> list[float]:
    """Whitespace-separated tokens carrying a degree mark ("45° 46°")."""
    if "°" not in text:
        return []
    values: list[float] = []
    for token in text.split():
        m = _DEGREE_RE.search(token)
        if m:
            values.append(float(m.group(1)))
    return values


# 優先順位順 (先に値を返した reader が採用される)
STRATEGY_READERS: dict[HardnessStrategy, tuple[Reader, ...]] = {
    HardnessStrategy.SEGMENTED: (segmented_readings,),
    HardnessStrategy.MULTI_FORMAT: (
        indexed_readings,
        bare_number,  # before period_separated so "44.2" is not read as 44 and 2
        period_separated,
        degree_marked,
    ),
}


def parse_hardness(
    value: Any, strategy: HardnessStrategy = HardnessStrategy.MULTI_FORMAT
) -> float | None:
    """Reduce a raw hardness cell to one averaged value.

    Parameters
    ----------
    value: raw cell (None, number or string)
    strategy: which encodings to accept

    Returns None when the cell is empty or no reader recognizes it; never raises.
    """
    text = as_text(value)
    if text is None:
        return None
    for reader in STRATEGY_READERS[strategy]:
        readings = reader(text)
        if not readings:
            continue
        mean = statistics.fmean(readings)
        if not math.isfinite(mean):
            return None
        return round_one_decimal(mean)
    return None
