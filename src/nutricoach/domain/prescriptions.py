"""Domain models for prescriptions and adherence."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from nutricoach.domain.nutrition import NutrientAmounts


@dataclass(frozen=True)
class Prescription:
    """Daily nutritional goal prescribed to a patient for a date range."""

    id: UUID
    patient_id: UUID
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    start_date: date
    end_date: date
    created_at: datetime

    def covers(self, day: date) -> bool:
        """Return True when the day falls inside the validity range."""
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class MacroAdherence:
    """Adherence percentages per nutrient; ``None`` means no goal set."""

    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None


@dataclass(frozen=True)
class DailyAdherence:
    """Consumption compared to the active prescription for a day."""

    day: date
    consumed: NutrientAmounts
    prescription: Prescription | None
    adherence: MacroAdherence


@dataclass(frozen=True)
class WeeklyAdherence:
    """Seven days of adherence plus the week's totals against summed goals.

    Days without an active prescription are left out of both sums.
    """

    start: date
    end: date
    days: list[DailyAdherence]
    consumed: NutrientAmounts
    goal: NutrientAmounts
    adherence: MacroAdherence


@dataclass(frozen=True)
class ChartPoint:
    """Capped cohort adherence value for one day."""

    day: date
    adherence: int
