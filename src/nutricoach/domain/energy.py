"""Domain models for energy expenditure estimates."""

from dataclasses import dataclass, field
from enum import Enum, StrEnum
from uuid import UUID

_MALE_ALIASES = {"male", "m", "masculino"}
_FEMALE_ALIASES = {"female", "f", "feminino"}


class Sex(StrEnum):
    """Biological sex used by the predictive equations."""

    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: "str | Sex | None") -> "Sex":
        """Map free-form sex/gender values onto the equation branches."""
        if isinstance(value, Sex):
            return value
        cleaned = (value or "").strip().lower()
        if cleaned in _MALE_ALIASES:
            return cls.MALE
        if cleaned in _FEMALE_ALIASES:
            return cls.FEMALE
        return cls.UNSPECIFIED


class ActivityLevel(float, Enum):
    """Physical activity factors applied to BMR."""

    SEDENTARY = 1.2
    LIGHT = 1.375
    MODERATE = 1.55
    INTENSE = 1.725
    VERY_INTENSE = 1.9

    @property
    def label(self) -> str:
        """Human readable name."""
        return self.name.replace("_", " ").capitalize()


class Goal(StrEnum):
    """Weight goal driving the calorie adjustment."""

    MAINTAIN = "maintain"
    LOSE = "lose"
    GAIN = "gain"


@dataclass(frozen=True)
class EnergyCalculationInput:
    """Biometrics and preferences for an energy estimate."""

    weight_kg: float
    height_cm: float
    age_years: float
    sex: Sex
    activity_factor: float
    goal: Goal
    protein_ratio_g_per_kg: float
    fat_percent_of_calories: float


@dataclass(frozen=True)
class BreakdownStep:
    """Single labelled step of a formula."""

    label: str
    value: str


@dataclass(frozen=True)
class FormulaBreakdown:
    """How a value was derived, for transparency views."""

    formula_name: str
    equation: str
    applied: str
    steps: list[BreakdownStep]
    base_data: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class EnergyCalculationResult:
    """Energy targets derived from an EnergyCalculationInput."""

    bmr: float
    tdee: float
    target_calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    breakdown: list[FormulaBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class BmrProtocolResult:
    """BMR estimated by one predictive protocol."""

    id: str
    name: str
    description: str
    category: str
    bmr: float
    recommended: bool = False


@dataclass(frozen=True)
class WeightProjection:
    """Estimated body-mass change for a sustained daily energy balance."""

    weekly_min: float
    weekly_max: float
    weekly_avg: float
    monthly_estimate: float
    direction: str

    @property
    def is_loss(self) -> bool:
        """True when the energy balance is a deficit."""
        return self.direction == "loss"

    @property
    def is_gain(self) -> bool:
        """True when the energy balance is a surplus."""
        return self.direction == "gain"


@dataclass(frozen=True)
class SavedEnergyCalculation:
    """Persisted energy estimate with the inputs it was computed from."""

    id: UUID
    patient_id: UUID
    data: EnergyCalculationInput
    result: EnergyCalculationResult
