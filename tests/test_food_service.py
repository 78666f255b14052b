"""Tests for the food service."""

from uuid import uuid4

import pytest

from nutricoach.domain.errors import FoodNotFoundError, MissingInputError
from nutricoach.services.foods import FoodService
from tests.conftest import InMemoryFoodRepository, make_food


def test_get_food_raises_missing_input() -> None:
    service = FoodService(InMemoryFoodRepository())

    with pytest.raises(FoodNotFoundError) as excinfo:
        service.get_food(uuid4())

    assert isinstance(excinfo.value, MissingInputError)


def test_search_ignores_blank_query() -> None:
    repository = InMemoryFoodRepository()
    repository.add(make_food(name="Brown rice"))
    repository.add(make_food(name="Olive oil"))
    service = FoodService(repository)

    assert service.search("   ") == []
    assert [food.name for food in service.search("rice")] == ["Brown rice"]


def test_create_custom_food_marks_source() -> None:
    service = FoodService(InMemoryFoodRepository())

    food = service.create_custom_food(
        {"name": "Granola", "protein_g": 10, "carbs_g": 60, "fat_g": 12}
    )

    assert food.source == "custom"


def test_create_custom_food_rejects_negative_values() -> None:
    service = FoodService(InMemoryFoodRepository())

    with pytest.raises(ValueError):
        service.create_custom_food({"name": "Broken", "fat_g": -1})


def test_check_nutrition_flags_stale_calories() -> None:
    repository = InMemoryFoodRepository()
    food = repository.add(make_food(protein_g=10, carbs_g=10, fat_g=10, calories=100))

    check = FoodService(repository).check_nutrition(food.id)

    assert not check.is_valid
    assert check.calculated_calories == 170
