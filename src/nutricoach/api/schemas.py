"""Pydantic request models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from nutricoach.domain.anthropometry import BodyMeasurements
from nutricoach.domain.energy import ActivityLevel, EnergyCalculationInput, Goal, Sex


class EnergyRequest(BaseModel):
    """Biometrics for an energy estimate; missing values yield no result."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: float | None = None
    sex: str | None = None
    activity_factor: float = ActivityLevel.SEDENTARY.value
    goal: Goal = Goal.MAINTAIN
    protein_ratio_g_per_kg: float = Field(ge=0)
    fat_percent_of_calories: float = Field(ge=0, le=100)

    def to_input(self) -> EnergyCalculationInput:
        """Convert to the domain input, mapping missing biometrics to 0."""
        return EnergyCalculationInput(
            weight_kg=self.weight_kg or 0.0,
            height_cm=self.height_cm or 0.0,
            age_years=self.age_years or 0.0,
            sex=Sex.parse(self.sex),
            activity_factor=self.activity_factor,
            goal=self.goal,
            protein_ratio_g_per_kg=self.protein_ratio_g_per_kg,
            fat_percent_of_calories=self.fat_percent_of_calories,
        )


class ProtocolRequest(BaseModel):
    """Biometrics for comparing BMR protocols."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: float | None = None
    sex: str | None = None
    lean_mass_kg: float | None = None


class CustomFoodRequest(BaseModel):
    """Per-100g profile of a custom food."""

    name: str = Field(min_length=1)
    food_group: str | None = None
    calories: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    fiber_g: float | None = Field(default=None, ge=0)
    sodium_mg: float | None = Field(default=None, ge=0)


class FoodMeasureRequest(BaseModel):
    """Grams a food weighs for a quantity of a household measure."""

    grams: float = Field(gt=0)
    quantity: float = Field(default=1.0, gt=0)


class LogFoodRequest(BaseModel):
    """Food diary entry to log."""

    food_id: UUID
    quantity: float = Field(gt=0)
    measure_code: str
    day: date
    meal_type: str | None = None


class ReplaceEntryRequest(BaseModel):
    """New portion for an existing diary entry."""

    quantity: float = Field(gt=0)
    measure_code: str


class PrescriptionRequest(BaseModel):
    """Daily goals for a date range."""

    calories: float = Field(gt=0)
    protein_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    start_date: date
    end_date: date


class SeedPrescriptionRequest(BaseModel):
    """Date range for a prescription derived from the latest energy estimate."""

    start_date: date
    end_date: date


class CohortAdherenceRequest(BaseModel):
    """Patients and last day of the charted week."""

    patient_ids: list[UUID]
    end_day: date


class AnthropometryRequest(BaseModel):
    """Measurement for a given date."""

    recorded_on: date
    weight_kg: float = Field(gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    notes: str | None = None


class CompositionRequest(BaseModel):
    """Skinfolds in mm, girths and bone widths in cm for a composition estimate."""

    age_years: float | None = Field(default=None, gt=0)
    sex: str | None = None
    triceps_mm: float | None = Field(default=None, ge=0)
    subscapular_mm: float | None = Field(default=None, ge=0)
    suprailiac_mm: float | None = Field(default=None, ge=0)
    chest_mm: float | None = Field(default=None, ge=0)
    axillary_mm: float | None = Field(default=None, ge=0)
    abdominal_mm: float | None = Field(default=None, ge=0)
    thigh_mm: float | None = Field(default=None, ge=0)
    biceps_mm: float | None = Field(default=None, ge=0)
    calf_skinfold_mm: float | None = Field(default=None, ge=0)
    wrist_cm: float | None = Field(default=None, ge=0)
    humerus_width_cm: float | None = Field(default=None, ge=0)
    femur_width_cm: float | None = Field(default=None, ge=0)
    arm_circumference_cm: float | None = Field(default=None, ge=0)
    calf_circumference_cm: float | None = Field(default=None, ge=0)

    def to_measurements(self) -> BodyMeasurements:
        return BodyMeasurements(
            **self.model_dump(exclude={"age_years", "sex"}),
        )
