from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the hardness sheet transformer.

This module defines the domain models for configuration. They are separate from
the YAML loader in src/config/loader.py and focus on typing and defaults.
"""

__all__ = [
    "HardnessStrategy",
    "HeightPolicy",
    "MaterialConstants",
    "TransformSettings",
    "DEFAULT_HEADER_LABELS",
]

DEFAULT_HEADER_LABELS: tuple[str, ...] = ("Date", "Size")


class HardnessStrategy(Enum):
    """Selectable hardness encoding variants.

    - SEGMENTED: one "index reading" pair per line only
    - MULTI_FORMAT: indexed readings, bare number, period-separated and
      degree-marked encodings (superset)
    """
    SEGMENTED = "segmented"
    MULTI_FORMAT = "multi_format"


class HeightPolicy(Enum):
    """Which CSA column supplies the output height.

    - PREFER_ORIGINAL: column 6 (original height) when usable, else column 4
    - MEASURED_ONLY: always column 4
    """
    PREFER_ORIGINAL = "prefer_original"
    MEASURED_ONLY = "measured_only"


@dataclass(frozen=True)
class MaterialConstants:
    """Material properties stamped onto every output record.

    Never read from the source sheet. Units follow the export header
    (MPa, MPa, %, GPa).
    """
    yield_strength: float = 434
    tensile_strength: float = 739
    elongation_percent: float = 25.5
    elastic_modulus: float = 210


@dataclass(frozen=True)
class TransformSettings:
    """Everything the pure transformation needs for one run."""
    constants: MaterialConstants = field(default_factory=MaterialConstants)
    hardness_strategy: HardnessStrategy = HardnessStrategy.MULTI_FORMAT
    height_policy: HeightPolicy = HeightPolicy.PREFER_ORIGINAL
    header_labels: tuple[str, ...] = DEFAULT_HEADER_LABELS
    min_row_length: int = 10  # 行長がこれ未満なら対象外
