# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from src.logging.init import reset_logging

HEADER_ROW = [
    "Date", "Size",
    "CSA Thk", "CSA Hardness", "CSA Hgt", "CSA Plasticine", "CSA Original Hgt",
    "Notes", None, None,
    "EN Thk", "EN Hardness", "EN Hgt", "EN Plasticine",
]


def make_row(
    size: Any = "L#12",
    csa: list[Any] | None = None,
    en: list[Any] | None = None,
    date: Any = "2024-03-01",
) -> list[Any]:
    """Build a 14-column source row. csa = cols 2..6, en = cols 10..13."""
    csa = list(csa) if csa is not None else [None] * 5
    en = list(en) if en is not None else [None] * 4
    csa += [None] * (5 - len(csa))
    en += [None] * (4 - len(en))
    return [date, size, *csa, "note", None, "ok", *en]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TRANSFORM_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
output_file_name: transformed_all_data.xlsx
output_sheet_name: All Data
hardness_strategy: multi_format
height_policy: prefer_original
header_labels: [Date, Size]
material_constants:
  yield_strength: 434
  tensile_strength: 739
  elongation_percent: 25.5
  elastic_modulus: 210
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "transform.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_workbook() -> Callable[[Path, dict[str, list[list[Any]]]], Path]:
    """Write a header-less workbook: {sheet name: rows}."""
    def _make(path: Path, sheets: dict[str, list[list[Any]]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def sample_sheet_rows() -> list[list[Any]]:
    """Title row, header row and four data rows (two CSA+EN, one CSA, one bad size)."""
    return [
        ["Hardness Test Results"],
        HEADER_ROW,
        make_row("L#12", [10.5, "09 043.3\n10 045.1", 30.2, 12.0, 31.0], [11.0, "47.47.46", 29.5, 11.5]),
        make_row("R#7", [9.8, "44", 28.0, 10.0], None),
        make_row("n/a", [9.8, "44", 28.0, 10.0], [11.0, "45", 29.0, 11.0]),
        make_row(15, [10.0, None, 27.5, 9.5], [10.2, "45° 46° 47°", 28.1, 10.4]),
    ]


@pytest.fixture()
def sample_workbook(temp_workdir: Path, make_workbook, sample_sheet_rows) -> Path:
    return make_workbook(temp_workdir / "data" / "batch_01.xlsx", {"Sheet1": sample_sheet_rows})
