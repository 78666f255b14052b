"""Tests for household measure conversion."""

from uuid import uuid4

import pytest

from nutricoach.calculations.measures import (
    convert_to_grams,
    format_quantity,
    measure_label,
)
from nutricoach.domain.errors import ConversionError
from nutricoach.domain.foods import FoodMeasureOverride
from tests.conftest import CUP, TABLESPOON, UNIT


def test_food_override_takes_precedence_over_generic_measure() -> None:
    olive_oil_id = uuid4()
    override = FoodMeasureOverride(
        food_id=olive_oil_id, measure_code="tablespoon", grams=8.0
    )

    grams = convert_to_grams("tablespoon", 2, measure=TABLESPOON, override=override)

    assert grams == 16


def test_override_recorded_for_several_units_is_per_unit() -> None:
    override = FoodMeasureOverride(
        food_id=uuid4(), measure_code="unit", grams=100.0, quantity=2.0
    )

    assert convert_to_grams("unit", 3, override=override) == 150


def test_generic_measure_used_without_override() -> None:
    assert convert_to_grams("cup", 0.5, measure=CUP) == 120


def test_grams_and_milliliters_convert_directly() -> None:
    assert convert_to_grams("gram", 150) == 150
    assert convert_to_grams("ml", 200) == 200


def test_unknown_measure_raises_instead_of_defaulting() -> None:
    with pytest.raises(ConversionError) as excinfo:
        convert_to_grams("handful", 2)

    assert excinfo.value.measure_code == "handful"


def test_measure_without_grams_equivalent_raises() -> None:
    with pytest.raises(ConversionError):
        convert_to_grams("unit", 1, measure=UNIT)


def test_override_for_other_measure_is_ignored() -> None:
    override = FoodMeasureOverride(food_id=uuid4(), measure_code="cup", grams=180.0)

    grams = convert_to_grams("tablespoon", 1, measure=TABLESPOON, override=override)

    assert grams == 15


def test_format_quantity_labels() -> None:
    assert format_quantity(150, "gram") == "150g"
    assert format_quantity(2, "tablespoon") == "2 Tablespoon"
    assert format_quantity(1.5, "cup", CUP) == "1.5 Cup"
    assert measure_label("mystery") == "mystery"
