from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..logging.init import child_logger
from ..models.config_models import TransformSettings
from ..models.output_record import OutputRecord, TestType
from ..models.processing_result import TransformResult
from ..models.row_data import Grid, SkippedRow, Workbook
from ..models.sheet_process import SheetStat
from ..transform.header import locate_data_start
from ..transform.reshaper import reshape_row, skip_reason

"""Workbook transformation service.

Runs the header locator and row reshaper over every sheet of a workbook and
returns the accumulated records as a TransformResult. Pure: no I/O, no state
kept between calls.
"""

__all__ = [
    "transform_sheet",
    "transform_workbook",
]

logger = child_logger(__name__)


def transform_sheet(
    sheet_name: str, grid: Grid, settings: TransformSettings
) -> tuple[list[OutputRecord], SheetStat, list[SkippedRow]]:
    """Transform a single sheet grid.

    Returns:
        (records, stat, skipped) for the sheet
    """
    start = locate_data_start(grid, settings.header_labels)
    records: list[OutputRecord] = []
    skipped: list[SkippedRow] = []
    csa = en = 0

    for index in range(start, len(grid)):
        row = grid[index] or []
        row_records = reshape_row(row, settings)
        if not row_records:
            skipped.append(SkippedRow(sheet_name, index + 1, skip_reason(row, settings)))
            continue
        for record in row_records:
            if record.test_type is TestType.CSA:
                csa += 1
            else:
                en += 1
        records.extend(row_records)

    stat = SheetStat(
        sheet_name=sheet_name,
        data_start_row=start,
        rows_scanned=max(len(grid) - start, 0),
        records_emitted=len(records),
        csa_records=csa,
        en_records=en,
        skipped_rows=len(skipped),
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "sheet=%s data_start=%d rows=%d records=%d csa=%d en=%d skipped=%d",
            sheet_name,
            start,
            stat.rows_scanned,
            stat.records_emitted,
            csa,
            en,
            stat.skipped_rows,
        )
        for s in skipped:
            logger.debug("sheet=%s row=%d skipped reason=%s", s.sheet_name, s.row_number, s.reason.value)
    return records, stat, skipped


def transform_workbook(
    workbook: Workbook | Mapping[str, Grid], settings: TransformSettings | None = None
) -> TransformResult:
    """Transform every sheet of a workbook, in workbook sheet order.

    Args:
        workbook: ordered (sheet name, grid) pairs; a mapping is accepted and
            iterated in insertion order
        settings: material constants and parsing variants (defaults if None)

    Returns:
        TransformResult whose records follow sheet order, then row order,
        then CSA before EN within a row
    """
    settings = settings or TransformSettings()
    sheets: Any = workbook.items() if isinstance(workbook, Mapping) else workbook

    records: list[OutputRecord] = []
    stats: list[SheetStat] = []
    skipped: list[SkippedRow] = []
    for sheet_name, grid in sheets:
        sheet_records, stat, sheet_skipped = transform_sheet(str(sheet_name), grid, settings)
        records.extend(sheet_records)
        stats.append(stat)
        skipped.extend(sheet_skipped)

    return TransformResult(records=records, sheet_stats=stats, skipped_rows=skipped)
