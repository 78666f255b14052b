"""Household measure to grams conversion."""

from nutricoach.domain.errors import ConversionError
from nutricoach.domain.foods import FoodMeasureOverride, HouseholdMeasure

GRAM = "gram"
MILLILITER = "ml"
DIRECT_CODES = frozenset({GRAM, MILLILITER})

MEASURE_LABELS = {
    "tablespoon": "Tablespoon",
    "dessertspoon": "Dessert spoon",
    "teaspoon": "Teaspoon",
    "coffeespoon": "Coffee spoon",
    "cup": "Cup",
    "small_glass": "Small glass",
    "large_glass": "Large glass",
    "ladle": "Ladle",
    "tongs": "Tongs",
    "unit": "Unit",
    "slice": "Slice",
    "portion": "Portion",
    "piece": "Piece",
    GRAM: "g",
    MILLILITER: "ml",
}


def convert_to_grams(
    measure_code: str,
    quantity: float,
    *,
    measure: HouseholdMeasure | None = None,
    override: FoodMeasureOverride | None = None,
) -> float:
    """Convert a quantity of a household measure to grams.

    Resolution order: the food-specific override, then direct grams or
    milliliters (liquids are taken 1:1), then the generic measure's grams
    equivalent. Raises ConversionError when nothing resolves the code.
    """
    if override is not None and override.measure_code == measure_code:
        return override.grams_per_unit * quantity
    if measure_code in DIRECT_CODES:
        return quantity
    if (
        measure is not None
        and measure.code == measure_code
        and measure.grams_equivalent
    ):
        return measure.grams_equivalent * quantity
    raise ConversionError(measure_code, override.food_id if override else None)


def measure_label(code: str, measure: HouseholdMeasure | None = None) -> str:
    """Return the display name of a measure code."""
    if measure is not None and measure.name:
        return measure.name
    return MEASURE_LABELS.get(code, code)


def format_quantity(
    quantity: float, code: str, measure: HouseholdMeasure | None = None
) -> str:
    """Format a quantity with its unit, e.g. ``150g`` or ``2 Tablespoon``."""
    label = measure_label(code, measure)
    amount = f"{quantity:g}"
    if code in DIRECT_CODES:
        return f"{amount}{label}"
    return f"{amount} {label}"
