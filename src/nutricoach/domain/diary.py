"""Domain models for the food diary."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from nutricoach.domain.nutrition import NutrientAmounts


@dataclass(frozen=True)
class FoodEntry:
    """A logged food consumption owned by a patient.

    ``nutrients`` holds unrounded values frozen at logging time.
    """

    id: UUID
    patient_id: UUID
    food_id: UUID
    food_name: str
    quantity: float
    measure_code: str
    grams: float
    day: date
    logged_at: datetime
    nutrients: NutrientAmounts
    meal_type: str | None = None


@dataclass(frozen=True)
class NewFoodEntry:
    """Data for a food entry about to be persisted."""

    patient_id: UUID
    food_id: UUID
    food_name: str
    quantity: float
    measure_code: str
    grams: float
    day: date
    logged_at: datetime
    nutrients: NutrientAmounts
    meal_type: str | None = None


@dataclass(frozen=True)
class DaySummary:
    """Entries for a day with their rounded totals."""

    day: date
    entries: list[FoodEntry]
    totals: NutrientAmounts


@dataclass(frozen=True)
class DiaryAdherence:
    """How consistently a patient keeps the diary over a window of days."""

    total_days: int
    days_with_records: int
    adherence_percentage: int
    current_streak: int
    total_entries: int
