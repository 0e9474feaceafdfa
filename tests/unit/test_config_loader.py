from __future__ import annotations

from pathlib import Path

import pytest

from src.config.loader import SCHEMA_PATH, ConfigError, TransformConfig, load_config
from src.models.config_models import HardnessStrategy, HeightPolicy, MaterialConstants


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.output_directory == "./out"
    assert cfg.output_file_name == "transformed_all_data.xlsx"
    assert cfg.output_sheet_name == "All Data"
    assert cfg.settings.hardness_strategy is HardnessStrategy.MULTI_FORMAT
    assert cfg.settings.height_policy is HeightPolicy.PREFER_ORIGINAL
    assert cfg.settings.header_labels == ("Date", "Size")
    assert cfg.settings.constants == MaterialConstants(434, 739, 25.5, 210)


def test_load_config_empty_file_uses_defaults(temp_workdir: Path):
    path = temp_workdir / "config" / "transform.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == TransformConfig()


def test_load_config_partial_overrides(temp_workdir: Path):
    path = temp_workdir / "config" / "transform.yml"
    path.write_text(
        "hardness_strategy: segmented\n"
        "height_policy: measured_only\n"
        "material_constants:\n  yield_strength: 500\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.settings.hardness_strategy is HardnessStrategy.SEGMENTED
    assert cfg.settings.height_policy is HeightPolicy.MEASURED_ONLY
    assert cfg.settings.constants.yield_strength == 500
    assert cfg.settings.constants.tensile_strength == 739
    assert cfg.output_directory == "./out"


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    path = temp_workdir / "config" / "transform.yml"
    path.write_text("header_labels: [Date, Size\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(path)


def test_load_config_root_must_be_mapping(temp_workdir: Path):
    path = temp_workdir / "config" / "transform.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_schema_file_ships_with_loader():
    assert SCHEMA_PATH.exists()
    assert SCHEMA_PATH.parent.name == "config"
