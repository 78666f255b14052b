"""Household measure service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutricoach.calculations.measures import DIRECT_CODES, convert_to_grams
from nutricoach.domain.errors import ConversionError
from nutricoach.domain.foods import FoodMeasureOverride, HouseholdMeasure
from nutricoach.services.cache import Cache, cached

_logger = logging.getLogger(__name__)


class MeasureRepository(Protocol):
    """Persistence interface for household measures."""

    def get_measure(self, code: str) -> HouseholdMeasure | None:
        """Return an active generic measure by code."""

    def list_measures(self) -> list[HouseholdMeasure]:
        """Return active generic measures ordered for display."""

    def get_food_measure(
        self, food_id: UUID, code: str
    ) -> FoodMeasureOverride | None:
        """Return the food-specific conversion for a measure, if any."""

    def list_food_measures(self, food_id: UUID) -> list[FoodMeasureOverride]:
        """Return all food-specific conversions for a food."""

    def upsert_food_measure(
        self, food_id: UUID, code: str, grams: float, quantity: float
    ) -> FoodMeasureOverride:
        """Create or replace a food-specific conversion."""

    def delete_food_measure(self, food_id: UUID, code: str) -> None:
        """Remove a food-specific conversion."""


@dataclass
class MeasureService:
    """Resolves household measures to grams."""

    repository: MeasureRepository
    cache: Cache
    ttl_seconds: int = 3600

    def to_grams(self, food_id: UUID, measure_code: str, quantity: float) -> float:
        """Convert a quantity of a measure to grams for a food.

        Raises ConversionError when neither a food-specific nor a generic
        conversion exists.
        """
        if measure_code in DIRECT_CODES:
            return convert_to_grams(measure_code, quantity)
        override = self.repository.get_food_measure(food_id, measure_code)
        measure = None if override else self.get_measure(measure_code)
        try:
            return convert_to_grams(
                measure_code, quantity, measure=measure, override=override
            )
        except ConversionError:
            _logger.warning(
                "Measure conversion failed: food_id=%s measure=%s",
                food_id,
                measure_code,
            )
            raise ConversionError(measure_code, food_id) from None

    def get_measure(self, code: str) -> HouseholdMeasure | None:
        """Return a generic measure, cached."""
        value = cached(
            self.cache,
            f"measure:{code}",
            self.ttl_seconds,
            lambda: self.repository.get_measure(code),
        )
        return value if isinstance(value, HouseholdMeasure) else None

    def list_measures(self) -> list[HouseholdMeasure]:
        """Return all generic measures, cached."""
        value = cached(
            self.cache, "measures:all", self.ttl_seconds, self.repository.list_measures
        )
        return value if isinstance(value, list) else []

    def list_food_measures(self, food_id: UUID) -> list[FoodMeasureOverride]:
        """Return food-specific conversions."""
        return self.repository.list_food_measures(food_id)

    def set_food_measure(
        self, food_id: UUID, code: str, grams: float, quantity: float = 1.0
    ) -> FoodMeasureOverride:
        """Register the grams a food weighs for a household measure."""
        if grams <= 0:
            raise ValueError("grams must be greater than 0")
        if quantity <= 0:
            raise ValueError("quantity must be greater than 0")
        if code in DIRECT_CODES:
            raise ValueError(f"'{code}' converts directly and cannot be overridden")
        return self.repository.upsert_food_measure(food_id, code, grams, quantity)

    def remove_food_measure(self, food_id: UUID, code: str) -> None:
        """Remove a food-specific conversion; the generic measure still applies."""
        self.repository.delete_food_measure(food_id, code)
