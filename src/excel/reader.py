from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import Workbook

"""Workbook reader.

Sheets are read without a header (header=None): the header row position varies
between source files and is located later by the transformer. Each sheet becomes
a grid of plain Python values:

- NaN / NaT -> None
- trailing empty cells of a row are trimmed, so len(row) is the position of
  the last populated cell + 1
- fully empty rows stay in the grid as [] so row numbers remain aligned
"""


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be opened or parsed."""


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # pragma: no cover (array-like cell)
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _trim_row(cells: Iterable[Any]) -> list[Any]:
    row = [_clean_cell(c) for c in cells]
    while row and row[-1] is None:
        row.pop()
    return row


def frame_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame to a list of trimmed rows."""
    return [_trim_row(raw) for raw in df.itertuples(index=False, name=None)]


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> Workbook:
    """Read an Excel workbook as ordered (sheet name, grid) pairs.

    Parameters
    ----------
    path: Excel ファイルパス
    target_sheets: 対象シート制限 (None なら全シート)

    Raises
    ------
    WorkbookReadError: file missing or not a readable workbook
    """
    wanted = set(target_sheets) if target_sheets is not None else None
    try:
        with pd.ExcelFile(path) as xls:
            sheets: list[tuple[str, list[list[Any]]]] = []
            for name in xls.sheet_names:
                if wanted is not None and str(name) not in wanted:
                    continue
                df = xls.parse(name, header=None)
                sheets.append((str(name), frame_to_grid(df)))
    except FileNotFoundError as e:
        raise WorkbookReadError(f"workbook not found: {path}") from e
    except Exception as e:
        raise WorkbookReadError(f"cannot read workbook {path.name}: {e}") from e
    return sheets
