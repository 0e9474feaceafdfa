from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import Enum
from typing import Any

"""OutputRecord model for the hardness sheet transformer.

One OutputRecord is one flattened test result (CSA or EN) derived from a single
source row. Field order is the export column order.
"""

__all__ = [
    "OutputRecord",
    "TestType",
    "OUTPUT_HEADER",
]


OUTPUT_HEADER: tuple[str, ...] = (
    "Hardness (HRC)",
    "Yield Str (MPa)",
    "Tensile Str (MPa)",
    "Elongation(%)",
    "Elastic Mod (GPa)",
    "Thickness (mm)",
    "Height (mm)",
    "Size",
    "Temperature",
    "Test Type",
    "Plasticine Height (mm)",
)


class TestType(Enum):
    """Test-type column groups of the source sheet (exported as integer code)."""
    __test__ = False  # pytest: not a test class

    CSA = 0
    EN = 1


@dataclass(frozen=True)
class OutputRecord:
    """Normalized unit of output.

    Attributes:
        hardness: Averaged hardness (HRC), None if not derivable
        yield_strength / tensile_strength / elongation_percent / elastic_modulus:
            Copied from MaterialConstants
        thickness: Specimen thickness (mm), None if not numeric
        height: Specimen height (mm), None if not numeric
        size: Specimen size, always a positive integer
        temperature_code: 0 or 1
        test_type_code: TestType value (0 = CSA, 1 = EN)
        plasticine_height: Plasticine height (mm), None if not numeric
    """
    hardness: float | None
    yield_strength: float
    tensile_strength: float
    elongation_percent: float
    elastic_modulus: float
    thickness: float | None
    height: float | None
    size: int
    temperature_code: int
    test_type_code: int
    plasticine_height: float | None

    @property
    def test_type(self) -> TestType:
        return TestType(self.test_type_code)

    def to_row(self) -> list[Any]:
        """Return field values in export column order."""
        return list(astuple(self))
