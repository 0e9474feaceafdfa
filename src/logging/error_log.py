from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from src.models.error_record import ErrorRecord

"""File-level error log (JSON Lines).

- fixed schema, one ErrorRecord per line (no extra keys)
- one file per run: ``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC), created lazily
- records are buffered and written on flush(); nothing is created when no
  error occurred
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer of ErrorRecords; flush() appends them as JSON Lines.

    Serial use only (the batch run is single-threaded).
    """

    def __init__(self, logs_dir: Path | None = None, prefix: str = "errors") -> None:
        self._logs_dir = logs_dir or LOGS_DIR
        self._prefix = prefix
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._written = 0

    @property
    def file_path(self) -> Path:
        # 初回アクセス時にファイル名を確定 (同一実行中は固定)
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"{self._prefix}-{stamp}.log"
        return self._file_path

    @property
    def written(self) -> int:
        """Number of records written by previous flushes."""
        return self._written

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write pending records. Returns the log path, or None if nothing was pending."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._written += len(self._records)
        self._records.clear()
        return fp
