"""Domain models for the hardness sheet transformer.

This package contains the domain model classes used throughout the application:
configuration values, output records, row diagnostics and result aggregates.
"""

from .config_models import HardnessStrategy, HeightPolicy, MaterialConstants, TransformSettings
from .output_record import OUTPUT_HEADER, OutputRecord, TestType
from .processing_result import TransformResult
from .row_data import SkippedRow, SkipReason
from .sheet_process import SheetStat

__all__ = [
    # Configuration models
    "HardnessStrategy",
    "HeightPolicy",
    "MaterialConstants",
    "TransformSettings",
    # Output models
    "OUTPUT_HEADER",
    "OutputRecord",
    "TestType",
    # Processing models
    "SheetStat",
    "SkipReason",
    "SkippedRow",
    "TransformResult",
]
