from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.sheet_process import SheetStat

"""Progress display service with tqdm (TTY only).

- one tqdm bar over input workbooks, disabled when stdout is not a TTY (CI,
  pipes) to avoid ANSI control sequence spam
- one short line per sheet after a workbook has been transformed
"""

__all__ = [
    "ProgressTracker",
    "SheetProgressIndicator",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Workbook-level progress bar.

    In non-TTY environments no tqdm instance is created and every method is a
    no-op.
    """

    def __init__(self, total_files: int, *, description: str = "Transforming workbooks") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self) -> None:
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class SheetProgressIndicator:
    """Per-sheet status lines for one workbook (TTY only).

    Sheet transformation is fast and pure, so sheets are reported after the
    fact rather than with a live bar.
    """

    def __init__(self, file_name: str, total_sheets: int) -> None:
        self.file_name = file_name
        self.total_sheets = total_sheets
        self.current_sheet = 0
        self.enabled = is_tty_enabled()

    def report_sheet(self, stat: SheetStat) -> None:
        self.current_sheet += 1
        if not self.enabled:
            return
        status = "✓" if stat.records_emitted > 0 else "-"
        tqdm.write(
            f"  Sheet {self.current_sheet}/{self.total_sheets}: {stat.sheet_name}"
            f" - {stat.records_emitted} records (csa={stat.csa_records} en={stat.en_records}"
            f" skipped={stat.skipped_rows}) {status}"
        )
