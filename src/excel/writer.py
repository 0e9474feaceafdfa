from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.output_record import OUTPUT_HEADER, OutputRecord

"""Workbook writer: normalized records -> single-sheet .xlsx.

The sheet always carries the fixed 11-column header, one row per record.
Absent values are written as empty cells.
"""

DEFAULT_SHEET_NAME = "All Data"


class WorkbookWriteError(Exception):
    """Raised when the output workbook cannot be written."""


def records_to_frame(records: Sequence[OutputRecord]) -> pd.DataFrame:
    """Build the export DataFrame (columns = OUTPUT_HEADER, record order kept)."""
    return pd.DataFrame([r.to_row() for r in records], columns=list(OUTPUT_HEADER))


def write_records(
    records: Sequence[OutputRecord], path: Path, sheet_name: str = DEFAULT_SHEET_NAME
) -> Path:
    """Write records to ``path`` and return it. Parent directories are created."""
    df = records_to_frame(records)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    except (OSError, ValueError) as e:
        raise WorkbookWriteError(f"cannot write {path}: {e}") from e
    return path
