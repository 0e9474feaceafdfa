#!/usr/bin/env python3
"""Synthetic hardness test workbook generator.

Generates Excel files laid out like the lab's mechanical-test sheets, for manual
runs and throughput checks of the transformer:

- Row 1: title row
- Row 2: header row ("Date", "Size", CSA columns, EN columns)
- Row 3+: data rows; hardness cells use the known encodings (one reading per
  line, period-separated, degree-marked, bare number) and some rows leave the
  CSA or EN group empty
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = [
    "Date", "Size",
    "CSA Thk", "CSA Hardness", "CSA Hgt", "CSA Plasticine", "CSA Original Hgt",
    "Notes", "", "",
    "EN Thk", "EN Hardness", "EN Hgt", "EN Plasticine",
]

ENCODINGS = ("lines", "periods", "degrees", "bare")


def _hardness_cell(rng: np.random.Generator, encoding: str) -> Any:
    readings = np.round(rng.uniform(38.0, 52.0, rng.integers(2, 5)), 1)
    if encoding == "lines":
        return "\n".join(f"{i + 1:02d} {v:05.1f}" for i, v in enumerate(readings))
    if encoding == "periods":
        return ".".join(str(int(v)) for v in readings)
    if encoding == "degrees":
        return " ".join(f"{int(v)}°" for v in readings)
    return float(readings[0])


def generate_rows(rows: int, seed: int = 42) -> list[list[Any]]:
    """Generate data rows (without title/header).

    About 10% of rows have only the CSA group, 10% only the EN group and 5%
    carry an unusable size cell.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range("2024-01-01", periods=max(rows, 1), freq="h")
    data: list[list[Any]] = []
    for i in range(rows):
        side = "L#" if i % 2 == 0 else "R#"
        size: Any = f"{side}{int(rng.integers(6, 40))}"
        roll = rng.random()
        if roll < 0.05:
            size = "n/a"
        row: list[Any] = [dates[i].to_pydatetime(), size]

        encoding = ENCODINGS[int(rng.integers(0, len(ENCODINGS)))]
        if roll < 0.15 or roll >= 0.25:
            height = float(np.round(rng.uniform(20, 60), 2))
            original = float(np.round(height + rng.uniform(0, 2), 2)) if rng.random() < 0.5 else None
            row += [
                float(np.round(rng.uniform(5, 25), 2)),
                _hardness_cell(rng, encoding),
                height,
                float(np.round(rng.uniform(5, 30), 1)),
                original,
            ]
        else:
            row += [None] * 5
        row += ["", None, None]

        if roll >= 0.15:
            row += [
                float(np.round(rng.uniform(5, 25), 2)),
                _hardness_cell(rng, encoding),
                float(np.round(rng.uniform(20, 60), 2)),
                float(np.round(rng.uniform(5, 30), 1)),
            ]
        else:
            row += [None] * 4
        data.append(row)
    return data


def create_excel_file(
    output_path: Path,
    rows: int,
    sheets: list[str] | None = None,
    title: str = "Hardness Test Results",
    seed: int = 42,
) -> None:
    """Create a workbook with one title row, one header row and ``rows`` data rows per sheet."""
    if sheets is None:
        sheets = ["Sheet1"]

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for offset, sheet_name in enumerate(sheets):
            sheet_data: list[list[Any]] = [[title] + [None] * (len(HEADER) - 1), list(HEADER)]
            sheet_data += generate_rows(rows, seed + offset)
            pd.DataFrame(sheet_data).to_excel(writer, sheet_name=sheet_name, header=False, index=False)

    print(f"Created Excel file: {output_path}")
    print(f"  Sheets: {len(sheets)} ({', '.join(sheets)})")
    print(f"  Rows per sheet: {rows} (+ 2 header rows)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic hardness test workbooks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/sample.xlsx
  %(prog)s data/large.xlsx --rows 20000 --sheets Jan Feb Mar --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--rows", type=int, default=200, help="Data rows per sheet (default: 200)")
    parser.add_argument("--sheets", nargs="+", default=["Sheet1"], help="Sheet names (default: Sheet1)")
    parser.add_argument("--title", default="Hardness Test Results", help="Title for the first row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    try:
        create_excel_file(args.output, args.rows, args.sheets, args.title, args.seed)
    except OSError as e:
        print(f"Error generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
