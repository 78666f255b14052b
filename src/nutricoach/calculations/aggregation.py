"""Summation of nutrient contributions."""

from collections.abc import Iterable

from nutricoach.calculations.nutrients import round_amounts
from nutricoach.domain.nutrition import NutrientAmounts


def aggregate(
    amounts: Iterable[NutrientAmounts], *, rounded: bool = True
) -> NutrientAmounts:
    """Sum unrounded contributions and round only the totals."""
    calories = protein = carbs = fat = 0.0
    fiber: float | None = None
    sodium: float | None = None
    for amount in amounts:
        calories += amount.calories
        protein += amount.protein_g
        carbs += amount.carbs_g
        fat += amount.fat_g
        if amount.fiber_g is not None:
            fiber = (fiber or 0.0) + amount.fiber_g
        if amount.sodium_mg is not None:
            sodium = (sodium or 0.0) + amount.sodium_mg

    total = NutrientAmounts(
        calories=calories,
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        fiber_g=fiber,
        sodium_mg=sodium,
    )
    if rounded:
        return round_amounts(total)
    return total
