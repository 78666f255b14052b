"""Domain models for anthropometric records."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class BmiCategory(StrEnum):
    """BMI classification bands."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class FrameSize(StrEnum):
    """Bone frame size from the height to wrist ratio."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass(frozen=True)
class AnthropometricRecord:
    """Measurement taken on a given date; BMI is never stored."""

    id: UUID
    patient_id: UUID
    recorded_on: date
    weight_kg: float
    height_cm: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AnthropometrySnapshot:
    """A record with its derived BMI."""

    record: AnthropometricRecord
    bmi: float | None
    category: BmiCategory | None


class DensityProtocol(StrEnum):
    """Skinfold equations used to estimate body density."""

    POLLOCK_3 = "pollock3"
    POLLOCK_7 = "pollock7"
    WELTMAN = "weltman"


@dataclass(frozen=True)
class BodyMeasurements:
    """Skinfolds in mm, circumferences and bone widths in cm."""

    triceps_mm: float | None = None
    subscapular_mm: float | None = None
    suprailiac_mm: float | None = None
    chest_mm: float | None = None
    axillary_mm: float | None = None
    abdominal_mm: float | None = None
    thigh_mm: float | None = None
    biceps_mm: float | None = None
    calf_skinfold_mm: float | None = None
    wrist_cm: float | None = None
    humerus_width_cm: float | None = None
    femur_width_cm: float | None = None
    arm_circumference_cm: float | None = None
    calf_circumference_cm: float | None = None


@dataclass(frozen=True)
class Somatotype:
    """Heath-Carter ratings with their somatochart coordinates."""

    endomorphy: float
    mesomorphy: float
    ectomorphy: float
    x: float
    y: float
    description: str


@dataclass(frozen=True)
class BodyComposition:
    """Estimates derived from one set of measurements."""

    weight_kg: float
    height_cm: float | None
    density_protocol: DensityProtocol | None
    body_density: float | None
    body_fat_percent: float | None
    fat_mass_kg: float | None
    lean_mass_kg: float | None
    frame_size: FrameSize | None
    somatotype: Somatotype | None
