from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..models.config_models import DEFAULT_HEADER_LABELS


def locate_data_start(
    grid: Sequence[Sequence[Any] | None], labels: Iterable[str] = DEFAULT_HEADER_LABELS
) -> int:
    """Return the index of the first data row of a sheet.

    The header row is the first row holding a cell exactly equal to one of
    ``labels`` (no trimming, case-sensitive). Data starts on the next row.
    Without a header row the whole sheet is data (index 0).
    """
    wanted = frozenset(labels)
    for index, row in enumerate(grid):
        if not row:
            continue
        if any(isinstance(cell, str) and cell in wanted for cell in row):
            return index + 1
    return 0
