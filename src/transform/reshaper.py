from __future__ import annotations

from collections.abc import Sequence
import numbers
from typing import Any

from ..models.config_models import HeightPolicy, TransformSettings
from ..models.output_record import OutputRecord, TestType
from ..models.row_data import SkipReason
from .coerce import is_populated, leading_int, to_number
from .hardness import parse_hardness

"""Row reshaping: one source row -> zero, one or two OutputRecords.

Source column layout (0-based):

    1        size ("L#12", "R#7", 12)
    2..6     CSA: thickness, hardness, height, plasticine height, original height
    10..13   EN:  thickness, hardness, height, plasticine height
"""

__all__ = [
    "SIZE_COLUMN",
    "parse_size",
    "reshape_row",
    "skip_reason",
]

SIZE_COLUMN = 1

CSA_THICKNESS = 2
CSA_HARDNESS = 3
CSA_HEIGHT = 4
CSA_PLASTICINE = 5
CSA_ORIGINAL_HEIGHT = 6

EN_THICKNESS = 10
EN_HARDNESS = 11
EN_HEIGHT = 12
EN_PLASTICINE = 13

# 出力対象判定に使う必須列
_CSA_REQUIRED = (CSA_THICKNESS, CSA_HEIGHT, CSA_PLASTICINE)
_EN_REQUIRED = (EN_THICKNESS, EN_HEIGHT, EN_PLASTICINE)

_SIZE_PREFIXES = ("L#", "R#")

# Both groups are recorded at the same (room) temperature code
_TEMPERATURE_CODE = 0


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _populated(row: Sequence[Any], columns: Sequence[int]) -> bool:
    return all(is_populated(_cell(row, c)) for c in columns)


def parse_size(value: Any) -> int | None:
    """Parse the size cell. Returns None unless the result is a positive integer.

    Only text and plain number cells carry a size; dates, booleans and other
    cell types give None.
    """
    if not is_populated(value):
        return None
    if isinstance(value, bool) or not isinstance(value, (str, numbers.Real)):
        return None
    text = str(value)
    for prefix in _SIZE_PREFIXES:
        text = text.replace(prefix, "")
    size = leading_int(text)
    if size is None or size <= 0:
        return None
    return size


def _csa_height(row: Sequence[Any], policy: HeightPolicy) -> float | None:
    if policy is HeightPolicy.PREFER_ORIGINAL:
        original = to_number(_cell(row, CSA_ORIGINAL_HEIGHT))
        if original is not None:
            return original
    return to_number(_cell(row, CSA_HEIGHT))


def _make_record(
    settings: TransformSettings,
    test_type: TestType,
    *,
    hardness: float | None,
    thickness: float | None,
    height: float | None,
    size: int,
    plasticine_height: float | None,
) -> OutputRecord:
    constants = settings.constants
    return OutputRecord(
        hardness=hardness,
        yield_strength=constants.yield_strength,
        tensile_strength=constants.tensile_strength,
        elongation_percent=constants.elongation_percent,
        elastic_modulus=constants.elastic_modulus,
        thickness=thickness,
        height=height,
        size=size,
        temperature_code=_TEMPERATURE_CODE,
        test_type_code=test_type.value,
        plasticine_height=plasticine_height,
    )


def reshape_row(row: Sequence[Any], settings: TransformSettings | None = None) -> list[OutputRecord]:
    """Turn one raw sheet row into its CSA and EN records (CSA first).

    Rows shorter than ``settings.min_row_length`` or without a usable size
    yield an empty list. A test group is emitted only when its thickness,
    height and plasticine height cells are populated; unparseable field values
    within an emitted group become None.
    """
    settings = settings or TransformSettings()
    if len(row) < settings.min_row_length:
        return []
    size = parse_size(_cell(row, SIZE_COLUMN))
    if size is None:
        return []

    records: list[OutputRecord] = []
    if _populated(row, _CSA_REQUIRED):
        records.append(
            _make_record(
                settings,
                TestType.CSA,
                hardness=parse_hardness(_cell(row, CSA_HARDNESS), settings.hardness_strategy),
                thickness=to_number(_cell(row, CSA_THICKNESS)),
                height=_csa_height(row, settings.height_policy),
                size=size,
                plasticine_height=to_number(_cell(row, CSA_PLASTICINE)),
            )
        )
    if _populated(row, _EN_REQUIRED):
        records.append(
            _make_record(
                settings,
                TestType.EN,
                hardness=parse_hardness(_cell(row, EN_HARDNESS), settings.hardness_strategy),
                thickness=to_number(_cell(row, EN_THICKNESS)),
                height=to_number(_cell(row, EN_HEIGHT)),
                size=size,
                plasticine_height=to_number(_cell(row, EN_PLASTICINE)),
            )
        )
    return records


def skip_reason(row: Sequence[Any], settings: TransformSettings | None = None) -> SkipReason:
    """Explain why a row produced no records (call only when reshape_row returned [])."""
    settings = settings or TransformSettings()
    if len(row) < settings.min_row_length:
        return SkipReason.TOO_SHORT
    if parse_size(_cell(row, SIZE_COLUMN)) is None:
        return SkipReason.INVALID_SIZE
    return SkipReason.NO_TEST_DATA
