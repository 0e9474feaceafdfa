from __future__ import annotations

from pathlib import Path

from src.cli.__main__ import main as cli_main
from src.models.output_record import OUTPUT_HEADER


def test_inspect_data_prints_preview(temp_workdir: Path, sample_workbook: Path, capsys):
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: batch_01.xlsx" in out
    assert "SHEET: Sheet1 data_start=2 records=5 skipped=1" in out
    assert " | ".join(OUTPUT_HEADER) in out
    assert "44.2 | 434 | 739 | 25.5 | 210 | 10.5 | 31.0 | 12 | 0 | 0 | 12.0" in out
    # 書き込みは行わない
    assert not (temp_workdir / "out").exists()
    assert "SUMMARY" not in out


def test_inspect_data_limits_preview_rows(temp_workdir: Path, make_workbook, capsys):
    from conftest import HEADER_ROW, make_row

    rows = [HEADER_ROW] + [make_row(f"L#{i}", [10.0, "44", 30.0, 12.0]) for i in range(1, 9)]
    make_workbook(temp_workdir / "data" / "many.xlsx", {"S": rows})
    assert cli_main(["--inspect-data"]) == 0
    out = capsys.readouterr().out
    preview = [line for line in out.splitlines() if line.startswith("    44.0 |")]
    assert len(preview) == 5


def test_inspect_data_no_files(temp_workdir: Path, capsys):
    assert cli_main(["--inspect-data"]) == 0
    assert "inspect: no .xlsx files" in capsys.readouterr().out


def test_inspect_data_unreadable_file(temp_workdir: Path, sample_workbook: Path, capsys):
    (temp_workdir / "data" / "broken.xlsx").write_bytes(b"garbage")
    # 読めないファイルがあればバッチ実行と同じく exit 2
    assert cli_main(["--inspect-data"]) == 2
    out = capsys.readouterr().out
    assert "FILE: broken.xlsx" in out
    assert "read_error:" in out
    assert "SHEET: Sheet1 data_start=2 records=5 skipped=1" in out


def test_inspect_data_missing_input(temp_workdir: Path, capsys):
    assert cli_main(["--inspect-data", "nowhere"]) == 1
    assert "inspect: Input not found" in capsys.readouterr().out
