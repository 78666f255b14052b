"""Energy expenditure engine.

BMR predictive equations, total daily energy expenditure (TDEE, BMR times an
activity factor), goal-adjusted target calories and macro targets. Every
function is pure and safe to call with incomplete form data: missing or
non-positive biometrics yield ``None`` instead of raising.

Mifflin-St Jeor is the reference equation::

    male:   10 x weight + 6.25 x height - 5 x age + 5
    female: 10 x weight + 6.25 x height - 5 x age - 161

For ``Sex.UNSPECIFIED`` sex-dependent equations use the mean of the male and
female branches (Mifflin constant -78).
"""

from dataclasses import dataclass

from nutricoach.domain.energy import (
    ActivityLevel,
    BmrProtocolResult,
    BreakdownStep,
    EnergyCalculationInput,
    EnergyCalculationResult,
    FormulaBreakdown,
    Goal,
    Sex,
)

MIFFLIN_SEX_CONSTANTS = {
    Sex.MALE: 5.0,
    Sex.FEMALE: -161.0,
    Sex.UNSPECIFIED: -78.0,
}
GOAL_ADJUSTMENT_KCAL = 500.0
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9
ATHLETE_BODY_FAT_LIMIT = 15
OVERWEIGHT_BMI = 25

_ADULT_MIN_AGE = 18
_YOUNG_ADULT_MAX_AGE = 30
_ADULT_MAX_AGE = 60


def _has_biometrics(*values: float | None) -> bool:
    return all(value is not None and value > 0 for value in values)


@dataclass(frozen=True)
class _Equation:
    """A constant plus labelled ``coefficient x value`` terms."""

    constant: float
    terms: tuple[tuple[str, float, float], ...]

    def evaluate(self) -> float:
        total = self.constant
        for _label, coefficient, value in self.terms:
            total += coefficient * value
        return total


# (constant, coefficients...) for male and female; unspecified uses the mean.
_HARRIS_BENEDICT = ((88.362, 13.397, 4.799, -5.677), (447.593, 9.247, 3.098, -4.330))
_FAO_WHO = ((679.0, 15.3), (496.0, 14.7))
# Age bands: up to 30, over 30 up to 60, over 60. Under 18 uses the first band.
_SCHOFIELD = (
    ((692.2, 15.057), (873.1, 11.472), (587.7, 11.711)),
    ((112.4, 13.623), (845.6, 8.126), (658.5, 9.082)),
)
_FAO_WHO_2001 = (
    ((717.0, 15.4, -27.0), (901.0, 11.3, 16.0), (901.0, 11.3, 16.0)),
    ((35.0, 13.3, 334.0), (865.0, 8.7, -25.0), (-302.0, 9.2, 637.0)),
)
_OWEN = (795.0, 7.18)
_LEAN_MASS_COEFFICIENTS = {
    "cunningham": (500.0, 22.0),
    "tinsley": (284.0, 25.9),
    "katch": (370.0, 21.6),
    "delorenzo": (500.0, 22.0),
}


def _coefficients(
    sex: Sex, male: tuple[float, ...], female: tuple[float, ...]
) -> tuple[float, ...]:
    if sex is Sex.MALE:
        return male
    if sex is Sex.FEMALE:
        return female
    return tuple((m + f) / 2 for m, f in zip(male, female, strict=True))


def _age_band(age_years: float) -> int:
    if age_years > _ADULT_MAX_AGE:
        return 2
    if age_years > _YOUNG_ADULT_MAX_AGE:
        return 1
    return 0


def _mifflin_equation(
    weight_kg: float, height_cm: float, age_years: float, sex: Sex
) -> _Equation:
    return _Equation(
        MIFFLIN_SEX_CONSTANTS[sex],
        (
            ("Weight", 10.0, weight_kg),
            ("Height", 6.25, height_cm),
            ("Age", -5.0, age_years),
        ),
    )


def _harris_equation(
    weight_kg: float, height_cm: float, age_years: float, sex: Sex
) -> _Equation:
    constant, weight_c, height_c, age_c = _coefficients(sex, *_HARRIS_BENEDICT)
    return _Equation(
        constant,
        (
            ("Weight", weight_c, weight_kg),
            ("Height", height_c, height_cm),
            ("Age", age_c, age_years),
        ),
    )


def _fao_equation(weight_kg: float, sex: Sex) -> _Equation:
    constant, weight_c = _coefficients(sex, *_FAO_WHO)
    return _Equation(constant, (("Weight", weight_c, weight_kg),))


def _schofield_equation(weight_kg: float, age_years: float, sex: Sex) -> _Equation:
    band = _age_band(age_years)
    constant, weight_c = _coefficients(
        sex, _SCHOFIELD[0][band], _SCHOFIELD[1][band]
    )
    return _Equation(constant, (("Weight", weight_c, weight_kg),))


def _fao_2001_equation(
    weight_kg: float, height_cm: float, age_years: float, sex: Sex
) -> _Equation:
    band = _age_band(age_years)
    constant, weight_c, height_c = _coefficients(
        sex, _FAO_WHO_2001[0][band], _FAO_WHO_2001[1][band]
    )
    return _Equation(
        constant,
        (("Weight", weight_c, weight_kg), ("Height (m)", height_c, height_cm / 100)),
    )


def _lean_mass_equation(key: str, lean_mass_kg: float | None) -> _Equation | None:
    if not _has_biometrics(lean_mass_kg):
        return None
    constant, lean_c = _LEAN_MASS_COEFFICIENTS[key]
    return _Equation(constant, (("Lean mass", lean_c, lean_mass_kg),))


def mifflin_st_jeor(
    weight_kg: float, height_cm: float, age_years: float, sex: Sex
) -> float:
    """Mifflin-St Jeor (1990) BMR in kcal/day."""
    return _mifflin_equation(weight_kg, height_cm, age_years, Sex.parse(sex)).evaluate()


def harris_benedict(
    weight_kg: float, height_cm: float, age_years: float, sex: Sex
) -> float:
    """Revised Harris-Benedict (1984) BMR."""
    return _harris_equation(weight_kg, height_cm, age_years, Sex.parse(sex)).evaluate()


def fao_who(weight_kg: float, sex: Sex) -> float:
    """FAO/WHO (1985) adult BMR, weight only."""
    return _fao_equation(weight_kg, Sex.parse(sex)).evaluate()


def schofield(weight_kg: float, age_years: float, sex: Sex) -> float:
    """Schofield (1985) BMR by age band; under 18 uses the 18-30 band."""
    return _schofield_equation(weight_kg, age_years, Sex.parse(sex)).evaluate()


def fao_who_2001(
    weight_kg: float, height_cm: float, age_years: float, sex: Sex
) -> float:
    """FAO/WHO/UNU (2001) BMR with height in meters."""
    return _fao_2001_equation(
        weight_kg, height_cm, age_years, Sex.parse(sex)
    ).evaluate()


def owen(weight_kg: float, sex: Sex) -> float | None:
    """Owen (1986) BMR; defined for women only."""
    if Sex.parse(sex) is not Sex.FEMALE:
        return None
    constant, weight_c = _OWEN
    return constant + weight_c * weight_kg


def cunningham(lean_mass_kg: float | None) -> float | None:
    """Cunningham (1980) BMR from fat-free mass."""
    equation = _lean_mass_equation("cunningham", lean_mass_kg)
    return equation.evaluate() if equation else None


def tinsley(lean_mass_kg: float | None) -> float | None:
    """Tinsley BMR for resistance-trained athletes."""
    equation = _lean_mass_equation("tinsley", lean_mass_kg)
    return equation.evaluate() if equation else None


def katch_mcardle(lean_mass_kg: float | None) -> float | None:
    """Katch-McArdle BMR from fat-free mass."""
    equation = _lean_mass_equation("katch", lean_mass_kg)
    return equation.evaluate() if equation else None


def de_lorenzo(lean_mass_kg: float | None) -> float | None:
    """De Lorenzo (1999) BMR from fat-free mass."""
    equation = _lean_mass_equation("delorenzo", lean_mass_kg)
    return equation.evaluate() if equation else None


def total_energy_expenditure(
    bmr: float | None, activity_factor: float | None
) -> float | None:
    """TDEE = BMR x activity factor.

    Any positive factor is accepted; the supported values are those of
    ActivityLevel.
    """
    if not _has_biometrics(bmr, activity_factor):
        return None
    return bmr * float(activity_factor)


def target_calories(tdee: float, goal: Goal) -> float:
    """Apply the fixed 500 kcal/day goal adjustment."""
    goal = Goal(goal)
    if goal is Goal.LOSE:
        return tdee - GOAL_ADJUSTMENT_KCAL
    if goal is Goal.GAIN:
        return tdee + GOAL_ADJUSTMENT_KCAL
    return tdee


def macro_targets(
    calories: float,
    weight_kg: float,
    protein_ratio_g_per_kg: float,
    fat_percent_of_calories: float,
) -> tuple[float, float, float]:
    """Return (protein_g, fat_g, carbs_g) for a calorie target.

    Carbohydrates take the remaining energy and may be negative when protein
    and fat already exceed the target; the value is not clamped.
    """
    protein_g = weight_kg * protein_ratio_g_per_kg
    fat_g = calories * fat_percent_of_calories / 100 / KCAL_PER_G_FAT
    carbs_g = (
        calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    ) / KCAL_PER_G_CARBS
    return protein_g, fat_g, carbs_g


def calculate_energy(data: EnergyCalculationInput) -> EnergyCalculationResult | None:
    """Run the BMR -> TDEE -> target -> macros pipeline."""
    if not _has_biometrics(data.weight_kg, data.height_cm, data.age_years):
        return None
    bmr = mifflin_st_jeor(data.weight_kg, data.height_cm, data.age_years, data.sex)
    tdee = total_energy_expenditure(bmr, data.activity_factor)
    if tdee is None:
        return None
    target = target_calories(tdee, data.goal)
    protein_g, fat_g, carbs_g = macro_targets(
        target,
        data.weight_kg,
        data.protein_ratio_g_per_kg,
        data.fat_percent_of_calories,
    )
    breakdown = [
        mifflin_breakdown(data.weight_kg, data.height_cm, data.age_years, data.sex),
        tdee_breakdown(bmr, data.activity_factor),
        _targets_breakdown(data, tdee, target, protein_g, fat_g, carbs_g),
    ]
    return EnergyCalculationResult(
        bmr=bmr,
        tdee=tdee,
        target_calories=target,
        protein_g=protein_g,
        fat_g=fat_g,
        carbs_g=carbs_g,
        breakdown=[item for item in breakdown if item is not None],
    )


def _protocol_equation(  # noqa: PLR0911, PLR0913
    key: str,
    weight_kg: float | None,
    height_cm: float | None,
    age_years: float | None,
    sex: Sex,
    lean_mass_kg: float | None,
) -> _Equation | None:
    if key in _LEAN_MASS_COEFFICIENTS:
        return _lean_mass_equation(key, lean_mass_kg)
    if not _has_biometrics(weight_kg):
        return None
    if key == "fao":
        return _fao_equation(weight_kg, sex)
    if key == "owen":
        if sex is not Sex.FEMALE:
            return None
        return _Equation(_OWEN[0], (("Weight", _OWEN[1], weight_kg),))
    if not _has_biometrics(height_cm, age_years):
        return None
    if key == "mifflin":
        return _mifflin_equation(weight_kg, height_cm, age_years, sex)
    if key == "harris":
        return _harris_equation(weight_kg, height_cm, age_years, sex)
    if key == "schofield":
        return _schofield_equation(weight_kg, age_years, sex)
    if key == "fao2001":
        return _fao_2001_equation(weight_kg, height_cm, age_years, sex)
    return None


def calculate_bmr_by_protocol(  # noqa: PLR0913
    protocol_id: str,
    weight_kg: float | None,
    height_cm: float | None,
    age_years: float | None,
    sex: Sex,
    lean_mass_kg: float | None = None,
) -> float | None:
    """Compute BMR with a named protocol, or None when inputs are missing."""
    key = _PROTOCOL_ALIASES.get(protocol_id, protocol_id)
    equation = _protocol_equation(
        key, weight_kg, height_cm, age_years, Sex.parse(sex), lean_mass_kg
    )
    return equation.evaluate() if equation else None


def calculate_all_protocols(
    weight_kg: float | None,
    height_cm: float | None,
    age_years: float | None,
    sex: Sex,
    lean_mass_kg: float | None = None,
) -> list[BmrProtocolResult]:
    """Estimate BMR with every applicable protocol and flag the recommended one."""
    if not _has_biometrics(weight_kg, height_cm, age_years):
        return []
    estimates: list[tuple[str, float]] = []
    for protocol_id in _PROTOCOL_INFO:
        value = calculate_bmr_by_protocol(
            protocol_id, weight_kg, height_cm, age_years, sex, lean_mass_kg
        )
        if value is not None:
            estimates.append((protocol_id, value))

    available = [protocol_id for protocol_id, _ in estimates]
    recommended = recommend_protocol(
        weight_kg, height_cm, sex, available, lean_mass_kg
    )
    results = []
    for protocol_id, value in estimates:
        name, description, category = _PROTOCOL_INFO[protocol_id]
        results.append(
            BmrProtocolResult(
                id=protocol_id,
                name=name,
                description=description,
                category=category,
                bmr=value,
                recommended=protocol_id == recommended,
            )
        )
    return results


def recommend_protocol(
    weight_kg: float,
    height_cm: float,
    sex: Sex,
    available: list[str],
    lean_mass_kg: float | None = None,
) -> str:
    """Pick the protocol best suited to the patient's profile."""
    if lean_mass_kg and lean_mass_kg > 0:
        body_fat = (weight_kg - lean_mass_kg) / weight_kg * 100
        if body_fat < ATHLETE_BODY_FAT_LIMIT:
            for protocol_id in available:
                if _PROTOCOL_INFO[protocol_id][2] == "athlete":
                    return protocol_id
    height_m = height_cm / 100
    if weight_kg / (height_m * height_m) > OVERWEIGHT_BMI:
        return "mifflin"
    if Sex.parse(sex) is not Sex.MALE and "owen" in available:
        return "owen"
    return "mifflin"


_TERM_SYMBOLS = {
    "Weight": "W",
    "Height": "H",
    "Height (m)": "H(m)",
    "Age": "A",
    "Lean mass": "LM",
}


def protocol_breakdown(  # noqa: PLR0913
    protocol_id: str,
    weight_kg: float | None,
    height_cm: float | None,
    age_years: float | None,
    sex: Sex,
    lean_mass_kg: float | None = None,
) -> FormulaBreakdown | None:
    """Step-by-step view of a BMR protocol, or None when it does not apply."""
    key = _PROTOCOL_ALIASES.get(protocol_id, protocol_id)
    sex = Sex.parse(sex)
    equation = _protocol_equation(
        key, weight_kg, height_cm, age_years, sex, lean_mass_kg
    )
    if equation is None:
        return None
    name = _PROTOCOL_INFO[key][0]
    if key not in _LEAN_MASS_COEFFICIENTS:
        name = f"{name}, {sex.value}"
    symbolic = [f"{equation.constant:g}"]
    applied = [f"{equation.constant:g}"]
    steps = [BreakdownStep("Constant", f"{equation.constant:g}")]
    for label, coefficient, value in equation.terms:
        sign = "-" if coefficient < 0 else "+"
        symbolic.append(f"{sign} ({abs(coefficient):g} x {_TERM_SYMBOLS[label]})")
        applied.append(f"{sign} ({abs(coefficient):g} x {value:g})")
        steps.append(
            BreakdownStep(
                label, f"{coefficient:g} x {value:g} = {coefficient * value:.2f}"
            )
        )
    result = equation.evaluate()
    steps.append(BreakdownStep("Result", f"{result:.0f} kcal"))
    return FormulaBreakdown(
        formula_name=name,
        equation=" ".join(symbolic),
        applied=" ".join(applied),
        steps=steps,
        base_data={
            "weight_kg": weight_kg,
            "height_cm": height_cm,
            "age_years": age_years,
            "sex": sex.value,
            "lean_mass_kg": lean_mass_kg,
            "bmr": result,
        },
    )


def mifflin_breakdown(
    weight_kg: float | None,
    height_cm: float | None,
    age_years: float | None,
    sex: Sex,
) -> FormulaBreakdown | None:
    """Step-by-step view of the Mifflin-St Jeor computation."""
    return protocol_breakdown("mifflin", weight_kg, height_cm, age_years, sex)


def tdee_breakdown(
    bmr: float | None, activity_factor: float | None
) -> FormulaBreakdown | None:
    """Step-by-step view of BMR x activity factor."""
    tdee = total_energy_expenditure(bmr, activity_factor)
    if tdee is None:
        return None
    factor = float(activity_factor)
    level = _activity_level(factor)
    label = level.label if level else "Custom"
    return FormulaBreakdown(
        formula_name="Total daily energy expenditure",
        equation="BMR x activity factor",
        applied=f"{bmr:.0f} x {factor:g} = {tdee:.0f}",
        steps=[
            BreakdownStep("BMR", f"{bmr:.0f} kcal"),
            BreakdownStep("Activity factor", f"{factor:g} ({label})"),
            BreakdownStep("TDEE", f"{tdee:.0f} kcal/day"),
        ],
        base_data={"bmr": bmr, "activity_factor": factor, "activity_label": label},
    )


def _targets_breakdown(  # noqa: PLR0913
    data: EnergyCalculationInput,
    tdee: float,
    target: float,
    protein_g: float,
    fat_g: float,
    carbs_g: float,
) -> FormulaBreakdown:
    goal = Goal(data.goal)
    return FormulaBreakdown(
        formula_name="Macro targets",
        equation=(
            "P = W x ratio; F = kcal x fat% / 9; C = (kcal - 4P - 9F) / 4"
        ),
        applied=f"{tdee:.0f} ({goal.value}) -> {target:.0f} kcal",
        steps=[
            BreakdownStep("Target calories", f"{target:.0f} kcal"),
            BreakdownStep(
                "Protein",
                f"{data.weight_kg:g} x {data.protein_ratio_g_per_kg:g} "
                f"= {protein_g:.1f} g",
            ),
            BreakdownStep(
                "Fat",
                f"{target:.0f} x {data.fat_percent_of_calories:g}% / 9 "
                f"= {fat_g:.1f} g",
            ),
            BreakdownStep("Carbohydrates", f"{carbs_g:.1f} g"),
        ],
        base_data={"goal": goal.value},
    )


def _activity_level(factor: float) -> ActivityLevel | None:
    try:
        return ActivityLevel(factor)
    except ValueError:
        return None


_PROTOCOL_INFO = {
    "harris": (
        "Harris-Benedict (1984)",
        "Classic equation for the general population.",
        "general",
    ),
    "mifflin": (
        "Mifflin-St Jeor (1990)",
        "Clinical reference, most accurate for overweight patients.",
        "clinical",
    ),
    "fao": ("FAO/WHO (1985)", "World Health Organization standard.", "general"),
    "schofield": (
        "Schofield (1985)",
        "Population-based, widely used in Europe.",
        "general",
    ),
    "fao2001": (
        "FAO/WHO/UNU (2001)",
        "Updated international standard.",
        "general",
    ),
    "owen": ("Owen (1986)", "Specific to the female population.", "clinical"),
    "cunningham": (
        "Cunningham (1980)",
        "Fat-free mass based, suited to high performance.",
        "athlete",
    ),
    "tinsley": ("Tinsley", "Specific to resistance training.", "athlete"),
    "katch": (
        "Katch-McArdle",
        "Fat-free mass based, accurate for athletes.",
        "athlete",
    ),
    "delorenzo": ("De Lorenzo (1999)", "Fat-free mass based, athletes.", "athlete"),
}

_PROTOCOL_ALIASES = {
    "harris-benedict": "harris",
    "mifflin-st-jeor": "mifflin",
    "fao-who": "fao",
    "fao-who-2001": "fao2001",
    "fao-oms-2001": "fao2001",
    "katch-mcardle": "katch",
    "de-lorenzo": "delorenzo",
}
