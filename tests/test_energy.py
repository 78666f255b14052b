"""Tests for the energy expenditure engine."""

import pytest

from nutricoach.calculations.energy import (
    calculate_all_protocols,
    calculate_bmr_by_protocol,
    calculate_energy,
    harris_benedict,
    macro_targets,
    mifflin_st_jeor,
    owen,
    protocol_breakdown,
    target_calories,
    total_energy_expenditure,
)
from nutricoach.domain.energy import ActivityLevel, EnergyCalculationInput, Goal, Sex


def _input(**changes: object) -> EnergyCalculationInput:
    values = {
        "weight_kg": 70,
        "height_cm": 175,
        "age_years": 30,
        "sex": Sex.MALE,
        "activity_factor": ActivityLevel.MODERATE.value,
        "goal": Goal.MAINTAIN,
        "protein_ratio_g_per_kg": 1.8,
        "fat_percent_of_calories": 25,
    }
    values.update(changes)
    return EnergyCalculationInput(**values)


def test_mifflin_reference_male() -> None:
    assert mifflin_st_jeor(70, 175, 30, Sex.MALE) == 1648.75


def test_mifflin_female_and_unspecified_constants() -> None:
    assert mifflin_st_jeor(70, 175, 30, Sex.FEMALE) == 1482.75
    assert mifflin_st_jeor(70, 175, 30, Sex.UNSPECIFIED) == 1565.75
    assert mifflin_st_jeor(70, 175, 30, "feminino") == 1482.75


def test_tdee_follows_formula_not_rounded_example() -> None:
    result = calculate_energy(_input())

    assert result is not None
    assert result.bmr == 1648.75
    assert result.tdee == pytest.approx(2555.5625)
    assert result.target_calories == pytest.approx(2555.5625)


def test_goal_adjusts_by_fixed_500_kcal() -> None:
    assert target_calories(2000, Goal.LOSE) == 1500
    assert target_calories(2000, Goal.GAIN) == 2500
    assert target_calories(2000, Goal.MAINTAIN) == 2000


def test_macro_targets_for_weight_loss() -> None:
    result = calculate_energy(_input(goal=Goal.LOSE))

    assert result is not None
    assert result.target_calories == pytest.approx(2055.5625)
    assert result.protein_g == pytest.approx(126)
    assert result.fat_g == pytest.approx(57.0990, abs=1e-3)
    assert result.carbs_g == pytest.approx(259.418, abs=1e-3)


def test_negative_carbohydrates_are_reported_not_clamped() -> None:
    protein_g, fat_g, carbs_g = macro_targets(1000, 100, 3.0, 40)

    assert protein_g == 300
    assert fat_g == pytest.approx(44.444, abs=1e-3)
    assert carbs_g == pytest.approx(-150)


def test_incomplete_biometrics_yield_no_result() -> None:
    assert calculate_energy(_input(weight_kg=0)) is None
    assert calculate_energy(_input(height_cm=-1)) is None
    assert calculate_energy(_input(activity_factor=0)) is None
    assert total_energy_expenditure(None, 1.2) is None


def test_breakdown_describes_each_step() -> None:
    result = calculate_energy(_input())

    assert result is not None
    names = [item.formula_name for item in result.breakdown]
    assert names[0] == "Mifflin-St Jeor (1990), male"
    assert len(names) == 3
    assert result.breakdown[1].base_data["activity_label"] == "Moderate"


def test_alternative_protocols() -> None:
    assert harris_benedict(70, 175, 30, Sex.MALE) == pytest.approx(1695.667)
    assert owen(70, Sex.MALE) is None
    assert owen(60, Sex.FEMALE) == pytest.approx(1225.8)
    assert calculate_bmr_by_protocol(
        "katch-mcardle", 70, 175, 30, Sex.MALE, lean_mass_kg=60
    ) == pytest.approx(1666)
    assert calculate_bmr_by_protocol("unknown", 70, 175, 30, Sex.MALE) is None


def test_protocol_comparison_recommends_by_profile() -> None:
    male = calculate_all_protocols(70, 175, 30, Sex.MALE)
    female = calculate_all_protocols(60, 165, 30, Sex.FEMALE)
    athlete = calculate_all_protocols(70, 175, 30, Sex.MALE, lean_mass_kg=63)

    assert {item.id for item in male} == {
        "harris",
        "mifflin",
        "fao",
        "schofield",
        "fao2001",
    }
    assert [item.id for item in male if item.recommended] == ["mifflin"]
    assert [item.id for item in female if item.recommended] == ["owen"]
    assert [item.id for item in athlete if item.recommended] == ["cunningham"]
    assert calculate_all_protocols(None, 175, 30, Sex.MALE) == []


def test_protocol_breakdown_lists_terms_and_result() -> None:
    breakdown = protocol_breakdown("mifflin", 70, 175, 30, Sex.MALE)

    assert breakdown is not None
    assert breakdown.equation == "5 + (10 x W) + (6.25 x H) - (5 x A)"
    assert breakdown.applied == "5 + (10 x 70) + (6.25 x 175) - (5 x 30)"
    assert [step.label for step in breakdown.steps] == [
        "Constant",
        "Weight",
        "Height",
        "Age",
        "Result",
    ]
    assert breakdown.steps[-1].value == "1649 kcal"
    assert breakdown.base_data["bmr"] == pytest.approx(1648.75)


def test_protocol_breakdown_for_lean_mass_and_inapplicable_protocols() -> None:
    lean = protocol_breakdown("cunningham", 70, 175, 30, Sex.FEMALE, lean_mass_kg=55)

    assert lean is not None
    assert lean.formula_name == "Cunningham (1980)"
    assert lean.equation == "500 + (22 x LM)"
    assert lean.base_data["bmr"] == pytest.approx(1710)
    assert protocol_breakdown("cunningham", 70, 175, 30, Sex.FEMALE) is None
    assert protocol_breakdown("unknown", 70, 175, 30, Sex.MALE) is None
