"""Tests for nutrient scaling and calorie reconciliation."""

from nutricoach.calculations.nutrients import (
    calories_from_macros,
    scale_nutrients,
    validate_food_nutrition,
)
from nutricoach.calculations.rounding import round_half_up, round_percent
from tests.conftest import make_food


def test_scale_rice_carbs_exactly() -> None:
    rice = make_food(carbs_g=28.0)

    amounts = scale_nutrients(rice, 150)

    assert amounts.carbs_g == 42.0


def test_calories_recomputed_from_macros_ignoring_stored_value() -> None:
    food = make_food(protein_g=10, carbs_g=20, fat_g=5, calories=999)

    amounts = scale_nutrients(food, 100)

    assert amounts.calories == 165.0
    assert amounts.calories == calories_from_macros(
        amounts.protein_g, amounts.carbs_g, amounts.fat_g
    )


def test_zero_or_missing_grams_yield_zero_without_error() -> None:
    food = make_food(fiber_g=2.0)

    for grams in (0, -10, None):
        amounts = scale_nutrients(food, grams)
        assert amounts.calories == 0
        assert amounts.protein_g == 0
        assert amounts.fiber_g == 0
        assert amounts.sodium_mg is None


def test_optional_nutrients_keep_null_distinct_from_zero() -> None:
    food = make_food(fiber_g=0.0, sodium_mg=None)

    amounts = scale_nutrients(food, 200)

    assert amounts.fiber_g == 0
    assert amounts.sodium_mg is None


def test_scaled_values_rounded_to_two_decimals() -> None:
    food = make_food(protein_g=3.333, carbs_g=0, fat_g=0)

    amounts = scale_nutrients(food, 100)
    raw = scale_nutrients(food, 100, rounded=False)

    assert amounts.protein_g == 3.33
    assert raw.protein_g == 3.333


def test_round_half_up() -> None:
    assert round_half_up(0.125) == 0.13
    assert round_half_up(2.5, 0) == 3
    assert round_half_up(-0.125) == -0.13
    assert round_percent(99.5) == 100


def test_validate_food_nutrition_tolerance() -> None:
    consistent = make_food(protein_g=10, carbs_g=20, fat_g=5, calories=165.5)
    stale = make_food(protein_g=10, carbs_g=20, fat_g=5, calories=150)

    assert validate_food_nutrition(consistent).is_valid
    check = validate_food_nutrition(stale)
    assert not check.is_valid
    assert check.calculated_calories == 165
    assert check.difference == 15
