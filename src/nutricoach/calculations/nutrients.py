"""Nutrient scaling with calorie reconciliation.

Energy for any consumed quantity is recomputed from the scaled macros
(4 kcal/g protein and carbohydrate, 9 kcal/g fat). The calorie field stored
on a food is never used for consumption totals.
"""

from nutricoach.calculations.rounding import round_half_up
from nutricoach.domain.foods import Food
from nutricoach.domain.nutrition import NutrientAmounts, NutritionCheck

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9
CALORIE_TOLERANCE_KCAL = 1.0


def calories_from_macros(
    protein_g: float = 0.0, carbs_g: float = 0.0, fat_g: float = 0.0
) -> float:
    """Return energy in kcal derived from macronutrient grams."""
    return (
        protein_g * PROTEIN_KCAL_PER_G
        + carbs_g * CARBS_KCAL_PER_G
        + fat_g * FAT_KCAL_PER_G
    )


def scale_nutrients(
    food: Food, grams: float | None, *, rounded: bool = True
) -> NutrientAmounts:
    """Scale a food's per-100g profile to the consumed grams."""
    if grams is None or grams <= 0:
        return NutrientAmounts(
            calories=0.0,
            protein_g=0.0,
            carbs_g=0.0,
            fat_g=0.0,
            fiber_g=0.0 if food.fiber_g is not None else None,
            sodium_mg=0.0 if food.sodium_mg is not None else None,
        )

    factor = grams / 100
    protein = food.protein_g * factor
    carbs = food.carbs_g * factor
    fat = food.fat_g * factor
    amounts = NutrientAmounts(
        calories=calories_from_macros(protein, carbs, fat),
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        fiber_g=food.fiber_g * factor if food.fiber_g is not None else None,
        sodium_mg=food.sodium_mg * factor if food.sodium_mg is not None else None,
    )
    if rounded:
        return round_amounts(amounts)
    return amounts


def round_amounts(amounts: NutrientAmounts, places: int = 2) -> NutrientAmounts:
    """Round every nutrient for display."""
    return NutrientAmounts(
        calories=round_half_up(amounts.calories, places),
        protein_g=round_half_up(amounts.protein_g, places),
        carbs_g=round_half_up(amounts.carbs_g, places),
        fat_g=round_half_up(amounts.fat_g, places),
        fiber_g=_round_optional(amounts.fiber_g, places),
        sodium_mg=_round_optional(amounts.sodium_mg, places),
    )


def validate_food_nutrition(food: Food) -> NutritionCheck:
    """Compare a food's stored calories with its macro-derived calories."""
    calculated = calories_from_macros(food.protein_g, food.carbs_g, food.fat_g)
    difference = abs(food.calories - calculated)
    return NutritionCheck(
        is_valid=difference < CALORIE_TOLERANCE_KCAL,
        saved_calories=food.calories,
        calculated_calories=calculated,
        difference=difference,
    )


def _round_optional(value: float | None, places: int) -> float | None:
    if value is None:
        return None
    return round_half_up(value, places)
