from __future__ import annotations

import re
from pathlib import Path

from src.cli.__main__ import main as cli_main

"""SUMMARY line contract: exactly one line, fixed key order, plain numbers."""

SUMMARY_RE = re.compile(
    r"^SUMMARY files=(\d+)/(\d+) success=(\d+) failed=(\d+) records=(\d+) "
    r"skipped_rows=(\d+) elapsed_sec=(\d+(?:\.\d+)?) throughput_rps=(\d+(?:\.\d+)?)$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY")]


def test_summary_line_format(temp_workdir: Path, sample_workbook: Path, capsys):
    cli_main([])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    m = SUMMARY_RE.match(lines[0])
    assert m is not None, lines[0]
    files, total, success, failed, records, skipped = (int(g) for g in m.groups()[:6])
    assert files == total == success + failed == 1
    assert records == 5
    assert skipped == 1


def test_summary_is_last_line(temp_workdir: Path, sample_workbook: Path, capsys):
    cli_main([])
    out = capsys.readouterr().out.strip().splitlines()
    assert out[-1].startswith("SUMMARY ")
