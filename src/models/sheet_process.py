from __future__ import annotations

from dataclasses import dataclass

"""SheetStat model for the hardness sheet transformer.

SheetStat summarizes what the transformer did with a single worksheet.
"""

__all__ = [
    "SheetStat",
]


@dataclass(frozen=True)
class SheetStat:
    """Per-sheet transformation counters."""
    sheet_name: str
    data_start_row: int  # 0-based index of the first data row
    rows_scanned: int  # rows from data_start_row to end of sheet
    records_emitted: int = 0
    csa_records: int = 0
    en_records: int = 0
    skipped_rows: int = 0
