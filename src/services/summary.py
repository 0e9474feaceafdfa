from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""Summary line rendering service.

SUMMARY files={total}/{total} success={success} failed={failed} records={records}
skipped_rows={skipped} elapsed_sec={elapsed} throughput_rps={throughput}
"""


def _format_metric(value: float) -> str:
    # 整数値は小数点なし、極小値は指数表記を避ける
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a batch run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2023, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_records=120,
        ...     skipped_rows=4, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=60.0
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 records=120 skipped_rows=4 elapsed_sec=2 throughput_rps=60'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"skipped_rows={result.skipped_rows} "
        f"elapsed_sec={_format_metric(result.elapsed_seconds)} "
        f"throughput_rps={_format_metric(result.throughput_rows_per_sec)}"
    )
