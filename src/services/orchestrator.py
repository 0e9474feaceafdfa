from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import TransformConfig
from ..excel.reader import WorkbookReadError, read_workbook
from ..excel.writer import WorkbookWriteError, write_records
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..logging.init import child_logger
from ..models.excel_file import ExcelFile, FileStatus
from ..models.processing_result import FileStat, ProcessingResult
from .progress import ProgressTracker, SheetProgressIndicator
from .transformer import transform_workbook

"""Batch orchestration for the hardness sheet transformer.

Coordinates the whole run: resolving input workbooks, reading, transforming,
writing one output workbook per input, aggregating metrics and returning a
ProcessingResult. A failing file never stops the run; it is logged, recorded in
the JSON-lines error log and counted as failed.
"""

logger = child_logger(__name__)

EXCEL_SUFFIX = ".xlsx"
OUTPUT_SUFFIX = "_transformed"


class ProcessingError(Exception):
    """Fatal error that prevents the batch run from starting."""
    pass


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive, sorted by name).

    Excel lock files (``~$name.xlsx``) are ignored.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix == EXCEL_SUFFIX and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def collect_input_files(inputs: Iterable[Path]) -> list[Path]:
    """Expand directories to their workbooks; keep explicit files as given.

    Duplicates are dropped, first occurrence wins.

    Raises:
        ProcessingError: an input path does not exist
    """
    files: list[Path] = []
    seen: set[Path] = set()
    for item in inputs:
        if item.is_dir():
            candidates = scan_excel_files(item)
        elif item.exists():
            candidates = [item]
        else:
            raise ProcessingError(f"Input not found: {item}")
        for c in candidates:
            key = c.resolve()
            if key not in seen:
                seen.add(key)
                files.append(c)
    return files


def output_path_for(file_path: Path, output_dir: Path, config: TransformConfig, single: bool) -> Path:
    """Output location for one input workbook.

    A single input uses the configured file name; several inputs get
    ``<stem>_transformed.xlsx`` each so outputs never collide.
    """
    if single:
        return output_dir / config.output_file_name
    return output_dir / f"{file_path.stem}{OUTPUT_SUFFIX}{EXCEL_SUFFIX}"


def process_all(
    config: TransformConfig,
    inputs: Iterable[Path] | None = None,
    output_dir: Path | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Transform every input workbook and write the normalized workbooks.

    Args:
        config: loaded configuration (settings, output naming)
        inputs: files and/or directories; defaults to config.source_directory
        output_dir: destination directory; defaults to config.output_directory
        error_log: JSON-lines error buffer (a fresh one if None)

    Returns:
        ProcessingResult with aggregated metrics and file stats

    Raises:
        ProcessingError: an input path is missing
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    input_paths = list(inputs) if inputs is not None else [Path(config.source_directory)]
    out_dir = output_dir if output_dir is not None else Path(config.output_directory)

    file_paths = collect_input_files(input_paths)
    if not file_paths:
        logger.info("no .xlsx files found in %s", ", ".join(str(p) for p in input_paths))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_records = 0
    total_skipped = 0
    single = len(file_paths) == 1

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            target = output_path_for(file_path, out_dir, config, single)
            file_result = _process_single_file(file_path, target, config, error_log)

            if file_result.status == FileStatus.SUCCESS:
                success_count += 1
                total_records += file_result.record_count
                total_skipped += file_result.skipped_row_count
            else:
                failed_count += 1

            progress.set_postfix(success=success_count, failed=failed_count, records=total_records)
            progress.finish_file()

            elapsed = 0.0
            if file_result.start_time and file_result.end_time:
                elapsed = (file_result.end_time - file_result.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=file_result.status.value,
                    records=file_result.record_count,
                    skipped_rows=file_result.skipped_row_count,
                    elapsed_seconds=elapsed,
                    output_path=str(file_result.output_path) if file_result.output_path else None,
                )
            )

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning("failed to write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_records=total_records,
        skipped_rows=total_skipped,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
    )


def _failed(file_path: Path, start_time: datetime, error: str) -> ExcelFile:
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=error,
    )


def _process_single_file(
    file_path: Path,
    target: Path,
    config: TransformConfig,
    error_log: ErrorLogBuffer,
) -> ExcelFile:
    """Read, transform and write one workbook.

    Read and write failures are recorded and returned as a FAILED ExcelFile;
    they never propagate.
    """
    start_time = datetime.now(UTC)

    try:
        workbook = read_workbook(file_path)
    except WorkbookReadError as e:
        logger.error("read: %s", e)
        error_log.append(ErrorRecord.create(file_path.name, "<FILE_LEVEL>", -1, "WORKBOOK_READ_ERROR", str(e)))
        return _failed(file_path, start_time, str(e))

    result = transform_workbook(workbook, config.settings)

    indicator = SheetProgressIndicator(file_name=file_path.name, total_sheets=len(result.sheet_stats))
    for stat in result.sheet_stats:
        indicator.report_sheet(stat)

    try:
        written = write_records(result.records, target, sheet_name=config.output_sheet_name)
    except WorkbookWriteError as e:
        logger.error("write: %s", e)
        error_log.append(ErrorRecord.create(file_path.name, "<FILE_LEVEL>", -1, "WORKBOOK_WRITE_ERROR", str(e)))
        return _failed(file_path, start_time, str(e))

    logger.info(
        "file=%s sheets=%d records=%d skipped_rows=%d -> %s",
        file_path.name,
        len(result.sheet_stats),
        len(result.records),
        len(result.skipped_rows),
        written,
    )
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        output_path=written,
        result=result,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
    )
