"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientAmounts:
    """Nutrients for an actual quantity of food.

    ``fiber_g`` and ``sodium_mg`` are ``None`` when the source food does not
    carry them, which is distinct from a measured zero.
    """

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float | None = None
    sodium_mg: float | None = None

    @classmethod
    def zero(cls) -> "NutrientAmounts":
        """Return an all-zero amount without optional nutrients."""
        return cls(calories=0.0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)


@dataclass(frozen=True)
class NutritionCheck:
    """Comparison between a stored calorie field and the macro-derived value."""

    is_valid: bool
    saved_calories: float
    calculated_calories: float
    difference: float
