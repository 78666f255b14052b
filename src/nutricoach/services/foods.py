"""Food catalogue service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutricoach.calculations.nutrients import validate_food_nutrition
from nutricoach.domain.errors import FoodNotFoundError
from nutricoach.domain.foods import Food
from nutricoach.domain.nutrition import NutritionCheck

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def search_foods(self, query: str, limit: int) -> list[Food]:
        """Search foods by name."""

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a custom food and return it."""


@dataclass
class FoodService:
    """Application service for food lookups."""

    repository: FoodRepository

    def get_food(self, food_id: UUID) -> Food:
        """Return a food or raise FoodNotFoundError."""
        food = self.repository.get_food(food_id)
        if food is None:
            _logger.warning("Food lookup failed: food_id=%s", food_id)
            raise FoodNotFoundError(food_id)
        return food

    def search(self, query: str, limit: int = 10) -> list[Food]:
        """Search foods by name; blank queries return nothing."""
        cleaned = query.strip()
        if not cleaned:
            return []
        return self.repository.search_foods(cleaned, limit)

    def create_custom_food(self, payload: dict[str, object]) -> Food:
        """Create a custom-entered food."""
        for key in ("protein_g", "carbs_g", "fat_g", "calories"):
            value = payload.get(key, 0)
            if not isinstance(value, int | float) or value < 0:
                raise ValueError(f"{key} must be a non-negative number")
        return self.repository.create_food({"source": "custom", **payload})

    def check_nutrition(self, food_id: UUID) -> NutritionCheck:
        """Check a food's stored calories against its macros."""
        check = validate_food_nutrition(self.get_food(food_id))
        if not check.is_valid:
            _logger.info(
                "Stored calories differ from macros: food_id=%s diff=%.2f",
                food_id,
                check.difference,
            )
        return check
