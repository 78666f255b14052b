"""Body composition metrics."""

import math

from nutricoach.calculations.rounding import round_half_up
from nutricoach.domain.anthropometry import (
    BmiCategory,
    BodyComposition,
    BodyMeasurements,
    DensityProtocol,
    FrameSize,
    Somatotype,
)
from nutricoach.domain.energy import Sex

UNDERWEIGHT_LIMIT = 18.5
NORMAL_LIMIT = 25.0
OVERWEIGHT_LIMIT = 30.0

# Height/wrist ratio thresholds: above the first is small, above the second medium.
_FRAME_THRESHOLDS = {
    True: (10.9, 9.9),
    False: (11.0, 10.1),
}


def bmi(weight_kg: float | None, height_cm: float | None) -> float | None:
    """Return weight / height(m)^2, or None when it is undefined."""
    if not weight_kg or weight_kg <= 0 or not height_cm or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_bmi(value: float | None) -> BmiCategory | None:
    """Classify a BMI value; each band includes its lower bound."""
    if value is None:
        return None
    if value < UNDERWEIGHT_LIMIT:
        return BmiCategory.UNDERWEIGHT
    if value < NORMAL_LIMIT:
        return BmiCategory.NORMAL
    if value < OVERWEIGHT_LIMIT:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def body_density_pollock3(
    triceps_mm: float | None,
    subscapular_mm: float | None,
    suprailiac_mm: float | None,
    age_years: float | None,
    *,
    is_male: bool,
) -> float | None:
    """Jackson-Pollock three-site body density in g/cm3."""
    if not triceps_mm or not subscapular_mm or not suprailiac_mm or not age_years:
        return None
    total = triceps_mm + subscapular_mm + suprailiac_mm
    if is_male:
        return (
            1.10938
            - 0.0008267 * total
            + 0.0000016 * total * total
            - 0.0002574 * age_years
        )
    return (
        1.0994921
        - 0.0009929 * total
        + 0.0000023 * total * total
        - 0.0001392 * age_years
    )


def body_density_pollock7(  # noqa: PLR0913
    chest_mm: float | None,
    axillary_mm: float | None,
    triceps_mm: float | None,
    subscapular_mm: float | None,
    abdominal_mm: float | None,
    suprailiac_mm: float | None,
    thigh_mm: float | None,
    age_years: float | None,
    *,
    is_male: bool,
) -> float | None:
    """Jackson-Pollock seven-site body density in g/cm3."""
    folds = (
        chest_mm,
        axillary_mm,
        triceps_mm,
        subscapular_mm,
        abdominal_mm,
        suprailiac_mm,
        thigh_mm,
    )
    if not all(folds) or not age_years:
        return None
    total = sum(folds)  # type: ignore[arg-type]
    if is_male:
        return (
            1.112
            - 0.00043499 * total
            + 0.00000055 * total * total
            - 0.00028826 * age_years
        )
    return (
        1.097
        - 0.00046971 * total
        + 0.00000056 * total * total
        - 0.00012828 * age_years
    )


def body_density_weltman(
    triceps_mm: float | None,
    biceps_mm: float | None,
    subscapular_mm: float | None,
    suprailiac_mm: float | None,
    *,
    is_male: bool,
) -> float | None:
    """Weltman (1988) four-site body density in g/cm3."""
    if not triceps_mm or not biceps_mm or not subscapular_mm or not suprailiac_mm:
        return None
    log_sum = math.log10(triceps_mm + biceps_mm + subscapular_mm + suprailiac_mm)
    if is_male:
        return 1.1714 - 0.0671 * log_sum
    return 1.1665 - 0.0706 * log_sum


def body_fat_percent(body_density: float | None) -> float | None:
    """Siri equation converting body density to body-fat percentage."""
    if not body_density or body_density <= 0:
        return None
    return (4.95 / body_density - 4.5) * 100


def frame_size(
    height_cm: float | None, wrist_cm: float | None, *, is_male: bool
) -> FrameSize | None:
    """Classify bone frame from the height to wrist circumference ratio."""
    if not height_cm or not wrist_cm or height_cm <= 0 or wrist_cm <= 0:
        return None
    ratio = height_cm / wrist_cm
    small_above, medium_above = _FRAME_THRESHOLDS[is_male]
    if ratio > small_above:
        return FrameSize.SMALL
    if ratio > medium_above:
        return FrameSize.MEDIUM
    return FrameSize.LARGE


def somatotype(
    height_cm: float | None, weight_kg: float | None, measurements: BodyMeasurements
) -> Somatotype | None:
    """Heath-Carter anthropometric somatotype, or None when a rating is missing.

    Endomorphy uses the triceps, subscapular and suprailiac skinfolds.
    Mesomorphy corrects the arm and calf girths by their skinfolds and needs
    the humerus and femur widths. Ectomorphy follows the height to cube root
    of weight ratio.
    """
    if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
        return None
    m = measurements
    if not m.triceps_mm or not m.subscapular_mm or not m.suprailiac_mm:
        return None
    if (
        not m.humerus_width_cm
        or not m.femur_width_cm
        or not m.arm_circumference_cm
        or not m.calf_circumference_cm
    ):
        return None

    folds = m.triceps_mm + m.subscapular_mm + m.suprailiac_mm
    endo = max(
        -0.7182
        + 0.1451 * folds
        - 0.00068 * folds**2
        + 0.0000014 * folds**3,
        0.0,
    )
    arm = m.arm_circumference_cm - m.triceps_mm / 10
    calf = m.calf_circumference_cm - (m.calf_skinfold_mm or 0.0) / 10
    meso = max(
        0.858 * m.humerus_width_cm
        + 0.601 * m.femur_width_cm
        + 0.188 * arm
        + 0.161 * calf
        - 0.131 * height_cm
        + 4.5,
        0.0,
    )
    ratio = height_cm / weight_kg ** (1 / 3)
    if ratio >= 40.75:
        ecto = 0.732 * ratio - 28.58
    elif ratio > 38.25:
        ecto = 0.463 * ratio - 17.63
    else:
        ecto = 0.1
    ecto = max(ecto, 0.0)

    endo, meso, ecto = (round_half_up(value) for value in (endo, meso, ecto))
    return Somatotype(
        endomorphy=endo,
        mesomorphy=meso,
        ectomorphy=ecto,
        x=round_half_up(ecto - endo),
        y=round_half_up(2 * meso - (endo + ecto)),
        description=somatotype_description(endo, meso, ecto),
    )


def somatotype_description(
    endomorphy: float | None, mesomorphy: float | None, ectomorphy: float | None
) -> str:
    """Name the dominant component, paired with the stronger of the others."""
    if not endomorphy or not mesomorphy or not ectomorphy:
        return "Incomplete"
    highest = max(endomorphy, mesomorphy, ectomorphy)
    if highest == endomorphy:
        return "Endomorph-Mesomorph" if mesomorphy > ectomorphy else "Endomorph"
    if highest == mesomorphy:
        if endomorphy > ectomorphy:
            return "Mesomorph-Endomorph"
        if ectomorphy > endomorphy:
            return "Mesomorph-Ectomorph"
        return "Mesomorph"
    return "Ectomorph-Mesomorph" if mesomorphy > endomorphy else "Ectomorph"


def body_density(
    measurements: BodyMeasurements, age_years: float | None, *, is_male: bool
) -> tuple[DensityProtocol, float] | None:
    """Density from the most complete skinfold set: Pollock 7, Pollock 3, Weltman."""
    m = measurements
    candidates = (
        (
            DensityProtocol.POLLOCK_7,
            body_density_pollock7(
                m.chest_mm,
                m.axillary_mm,
                m.triceps_mm,
                m.subscapular_mm,
                m.abdominal_mm,
                m.suprailiac_mm,
                m.thigh_mm,
                age_years,
                is_male=is_male,
            ),
        ),
        (
            DensityProtocol.POLLOCK_3,
            body_density_pollock3(
                m.triceps_mm,
                m.subscapular_mm,
                m.suprailiac_mm,
                age_years,
                is_male=is_male,
            ),
        ),
        (
            DensityProtocol.WELTMAN,
            body_density_weltman(
                m.triceps_mm,
                m.biceps_mm,
                m.subscapular_mm,
                m.suprailiac_mm,
                is_male=is_male,
            ),
        ),
    )
    for protocol, density in candidates:
        if density:
            return protocol, density
    return None


def body_composition(
    weight_kg: float,
    height_cm: float | None,
    age_years: float | None,
    sex: Sex,
    measurements: BodyMeasurements,
) -> BodyComposition:
    """Combine density, fat split, frame size and somatotype for one visit.

    Sex other than male uses the female skinfold coefficients.
    """
    is_male = sex is Sex.MALE
    estimate = body_density(measurements, age_years, is_male=is_male)
    protocol, density = estimate if estimate else (None, None)
    fat_percent = body_fat_percent(density)
    fat_mass = lean_mass = None
    if fat_percent is not None:
        fat_mass = weight_kg * fat_percent / 100
        lean_mass = weight_kg - fat_mass
    return BodyComposition(
        weight_kg=weight_kg,
        height_cm=height_cm,
        density_protocol=protocol,
        body_density=_rounded(density, 5),
        body_fat_percent=_rounded(fat_percent),
        fat_mass_kg=_rounded(fat_mass),
        lean_mass_kg=_rounded(lean_mass),
        frame_size=frame_size(height_cm, measurements.wrist_cm, is_male=is_male),
        somatotype=somatotype(height_cm, weight_kg, measurements),
    )


def _rounded(value: float | None, places: int = 2) -> float | None:
    return None if value is None else round_half_up(value, places)
