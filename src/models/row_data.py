from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Row-level models for the hardness sheet transformer.

RawRow / Grid / Workbook describe the untyped cell data handed over by the
workbook reader. A source row that yields no output record is not an error;
SkippedRow keeps the reason so it can be logged at DEBUG level.
"""

__all__ = [
    "Grid",
    "RawRow",
    "SkipReason",
    "SkippedRow",
    "Workbook",
]

RawRow = Sequence[Any]  # 0-based cell values, trailing empty cells trimmed
Grid = Sequence[RawRow]
Workbook = Sequence[tuple[str, Grid]]  # (sheet name, grid) in workbook order


class SkipReason(Enum):
    TOO_SHORT = "too_short"
    INVALID_SIZE = "invalid_size"
    NO_TEST_DATA = "no_test_data"


@dataclass(frozen=True)
class SkippedRow:
    """A source row excluded from the output.

    The row_number is 1-based within the grid (grid index + 1).
    """
    sheet_name: str
    row_number: int
    reason: SkipReason
