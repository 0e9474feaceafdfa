from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .processing_result import TransformResult

"""ExcelFile domain model and FileStatus enum for the hardness sheet transformer.

The ExcelFile represents the processing context for a single input workbook,
tracking its status from pending to success/failed.
"""


class FileStatus(Enum):
    """Status enum for ExcelFile processing lifecycle.

    State transitions: pending → (success | failed)
    """
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    """Processing context for a single input workbook."""
    path: Path                             # Full path to input workbook
    name: str                              # File name
    output_path: Path | None = None        # Written workbook (None in inspect mode / on failure)
    result: TransformResult | None = None  # Transformation output
    start_time: datetime | None = None     # Processing start (UTC)
    end_time: datetime | None = None       # Processing end (UTC)
    status: FileStatus = FileStatus.PENDING
    error: str | None = None               # Failure reason summary

    @property
    def record_count(self) -> int:
        return len(self.result.records) if self.result is not None else 0

    @property
    def skipped_row_count(self) -> int:
        return len(self.result.skipped_rows) if self.result is not None else 0
