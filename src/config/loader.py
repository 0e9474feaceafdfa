from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from src.models.config_models import (
    DEFAULT_HEADER_LABELS,
    HardnessStrategy,
    HeightPolicy,
    MaterialConstants,
    TransformSettings,
)

"""Config loader.

Responsibilities:
- Load YAML config (default config/transform.yml)
- Validate against config_schema.json (unknown keys rejected)
- Apply defaults for every missing key
"""

DEFAULT_CONFIG_PATH = Path("config/transform.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DEFAULT_OUTPUT_FILE_NAME = "transformed_all_data.xlsx"
DEFAULT_OUTPUT_SHEET_NAME = "All Data"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class TransformConfig:
    source_directory: str = "./data"
    output_directory: str = "./out"
    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME
    output_sheet_name: str = DEFAULT_OUTPUT_SHEET_NAME
    settings: TransformSettings = field(default_factory=TransformSettings)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_settings(data: dict[str, Any]) -> TransformSettings:
    constants_raw = data.get("material_constants") or {}
    constants = MaterialConstants(**constants_raw)
    return TransformSettings(
        constants=constants,
        hardness_strategy=HardnessStrategy(data.get("hardness_strategy", HardnessStrategy.MULTI_FORMAT.value)),
        height_policy=HeightPolicy(data.get("height_policy", HeightPolicy.PREFER_ORIGINAL.value)),
        header_labels=tuple(data.get("header_labels", DEFAULT_HEADER_LABELS)),
    )


def load_config(path: Path) -> TransformConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = TransformConfig()
    return TransformConfig(
        source_directory=data.get("source_directory", defaults.source_directory),
        output_directory=data.get("output_directory", defaults.output_directory),
        output_file_name=data.get("output_file_name", defaults.output_file_name),
        output_sheet_name=data.get("output_sheet_name", defaults.output_sheet_name),
        settings=_build_settings(data),
    )
