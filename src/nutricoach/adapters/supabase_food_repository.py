"""Supabase repository for the food catalogue."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutricoach.domain.foods import Food
from nutricoach.services.foods import FoodRepository

_FIELD_COLUMNS = {
    "name": "name",
    "food_group": "group",
    "source": "source",
    "calories": "calories",
    "protein_g": "protein",
    "carbs_g": "carbs",
    "fat_g": "fat",
    "fiber_g": "fiber",
    "sodium_mg": "sodium",
}


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed food repository."""

    client: Client

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def search_foods(self, query: str, limit: int) -> list[Food]:
        """Search foods by name."""
        response = (
            self.client.table("foods")
            .select("*")
            .ilike("name", f"%{query}%")
            .order("name", desc=False)
            .limit(limit)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food and return it."""
        row = {
            column: payload[field_name]
            for field_name, column in _FIELD_COLUMNS.items()
            if field_name in payload
        }
        response = self.client.table("foods").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create food")
        return _parse_food(response.data[0])


def _optional_float(value: object) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _parse_food(row: dict[str, object]) -> Food:
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        food_group=row.get("group") or None,
        source=str(row.get("source") or "custom"),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        fiber_g=_optional_float(row.get("fiber")),
        sodium_mg=_optional_float(row.get("sodium")),
    )
