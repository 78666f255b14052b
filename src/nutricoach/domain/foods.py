"""Domain models for foods and household measures."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class MeasureCategory(StrEnum):
    """Kind of household measure."""

    WEIGHT = "weight"
    VOLUME = "volume"
    UNIT = "unit"
    OTHER = "other"


@dataclass(frozen=True)
class Food:
    """Food with a per-100g nutrient profile.

    ``calories`` is informational; consumed energy is always derived from
    the macros.
    """

    id: UUID
    name: str
    food_group: str | None
    source: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float | None = None
    sodium_mg: float | None = None


@dataclass(frozen=True)
class HouseholdMeasure:
    """Generic conversion unit applying to any food."""

    code: str
    name: str
    category: MeasureCategory
    grams_equivalent: float | None
    ml_equivalent: float | None = None
    order_index: int = 0


@dataclass(frozen=True)
class FoodMeasureOverride:
    """Food-specific grams for a measure, taking precedence over the generic one."""

    food_id: UUID
    measure_code: str
    grams: float
    quantity: float = 1.0

    @property
    def grams_per_unit(self) -> float:
        """Grams for a single unit of the measure."""
        if self.quantity <= 0:
            return self.grams
        return self.grams / self.quantity
