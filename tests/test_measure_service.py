"""Tests for the household measure service."""

from uuid import uuid4

import pytest

from nutricoach.domain.errors import ConversionError
from nutricoach.services.cache import InMemoryCache
from nutricoach.services.measures import MeasureService
from tests.conftest import InMemoryMeasureRepository


def test_to_grams_prefers_food_override() -> None:
    repository = InMemoryMeasureRepository()
    service = MeasureService(repository, InMemoryCache())
    olive_oil_id = uuid4()
    service.set_food_measure(olive_oil_id, "tablespoon", grams=8)

    assert service.to_grams(olive_oil_id, "tablespoon", 2) == 16
    assert service.to_grams(uuid4(), "tablespoon", 2) == 30


def test_to_grams_raises_for_unknown_measure() -> None:
    service = MeasureService(InMemoryMeasureRepository(), InMemoryCache())
    food_id = uuid4()

    with pytest.raises(ConversionError) as excinfo:
        service.to_grams(food_id, "handful", 1)

    assert excinfo.value.food_id == food_id


def test_generic_measures_are_cached() -> None:
    repository = InMemoryMeasureRepository()
    service = MeasureService(repository, InMemoryCache())

    service.to_grams(uuid4(), "cup", 1)
    service.to_grams(uuid4(), "cup", 2)

    assert repository.measure_lookups == 1


def test_direct_units_skip_repository() -> None:
    repository = InMemoryMeasureRepository()
    service = MeasureService(repository, InMemoryCache())

    assert service.to_grams(uuid4(), "gram", 150) == 150
    assert repository.measure_lookups == 0


def test_set_food_measure_validates_input() -> None:
    service = MeasureService(InMemoryMeasureRepository(), InMemoryCache())

    with pytest.raises(ValueError):
        service.set_food_measure(uuid4(), "tablespoon", grams=0)
    with pytest.raises(ValueError):
        service.set_food_measure(uuid4(), "gram", grams=10)


def test_removed_override_falls_back_to_generic_measure() -> None:
    service = MeasureService(InMemoryMeasureRepository(), InMemoryCache())
    food_id = uuid4()
    service.set_food_measure(food_id, "cup", grams=180)

    assert service.to_grams(food_id, "cup", 1) == 180
    assert len(service.list_food_measures(food_id)) == 1

    service.remove_food_measure(food_id, "cup")

    assert service.to_grams(food_id, "cup", 1) == 240


def test_list_measures_ordered() -> None:
    service = MeasureService(InMemoryMeasureRepository(), InMemoryCache())

    codes = [item.code for item in service.list_measures()]

    assert codes == ["tablespoon", "cup", "unit"]
