from __future__ import annotations

from pathlib import Path

import pytest

from src.config.loader import ConfigError, load_config

"""Config schema contract: unknown keys and bad values are rejected."""


def _write(temp_workdir: Path, text: str) -> Path:
    path = temp_workdir / "config" / "transform.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_extra_field_rejected(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)
    assert "extra_field" in str(e.value)


@pytest.mark.parametrize(
    "text",
    [
        "hardness_strategy: newline\n",
        "height_policy: tallest\n",
        "header_labels: []\n",
        "header_labels: [Date, Date]\n",
        "output_file_name: result.csv\n",
        "output_sheet_name: " + "x" * 32 + "\n",
        "material_constants:\n  yield_strength: -1\n",
        "material_constants:\n  tensile_strength: high\n",
        "material_constants:\n  hardness: 40\n",
        "source_directory: 12\n",
    ],
)
def test_invalid_values_rejected(temp_workdir: Path, text: str):
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(_write(temp_workdir, text))


def test_every_documented_key_accepted(temp_workdir: Path):
    text = (
        "source_directory: ./in\n"
        "output_directory: ./result\n"
        "output_file_name: all.xlsx\n"
        "output_sheet_name: Normalized\n"
        "hardness_strategy: segmented\n"
        "height_policy: measured_only\n"
        "header_labels: [Specimen]\n"
        "material_constants:\n"
        "  yield_strength: 1\n"
        "  tensile_strength: 2\n"
        "  elongation_percent: 0\n"
        "  elastic_modulus: 3.5\n"
    )
    cfg = load_config(_write(temp_workdir, text))
    assert cfg.settings.header_labels == ("Specimen",)
    assert cfg.settings.constants.elastic_modulus == 3.5


def test_repository_sample_config_is_valid():
    sample = Path(__file__).resolve().parents[2] / "config" / "transform.yml"
    cfg = load_config(sample)
    assert cfg.output_sheet_name == "All Data"
