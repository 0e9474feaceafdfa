from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from .output_record import OutputRecord, TestType
from .row_data import SkippedRow
from .sheet_process import SheetStat

"""Result models for the hardness sheet transformer.

TransformResult is the value returned by one workbook transformation.
FileStat / ProcessingResult aggregate a CLI batch run over several files.
"""


@dataclass(frozen=True)
class TransformResult:
    """Output of transforming one workbook.

    records keeps sheet order, then row order, then CSA before EN.
    """
    records: list[OutputRecord] = field(default_factory=list)
    sheet_stats: list[SheetStat] = field(default_factory=list)
    skipped_rows: list[SkippedRow] = field(default_factory=list)

    def count_by_test_type(self) -> dict[TestType, int]:
        counts = Counter(r.test_type for r in self.records)
        return {t: counts.get(t, 0) for t in TestType}


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str
    status: str  # success/failed
    records: int  # 出力レコード数
    skipped_rows: int
    elapsed_seconds: float
    output_path: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for a batch run.

    Contains all metrics needed for the SUMMARY output line.
    """
    success_files: int
    failed_files: int
    total_records: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # total_records / elapsed
    file_stats: list[FileStat] | None = None
