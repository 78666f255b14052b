"""Supabase repository for household measures."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutricoach.domain.foods import (
    FoodMeasureOverride,
    HouseholdMeasure,
    MeasureCategory,
)
from nutricoach.services.measures import MeasureRepository

_MEASURE_COLUMNS = (
    "id, code, name, category, grams_equivalent, ml_equivalent, order_index"
)
_FOOD_MEASURE_COLUMNS = "food_id, quantity, grams, household_measures!inner(code)"


@dataclass
class SupabaseMeasureRepository(MeasureRepository):
    """Supabase-backed household measure repository."""

    client: Client

    def get_measure(self, code: str) -> HouseholdMeasure | None:
        """Return an active generic measure by code."""
        response = (
            self.client.table("household_measures")
            .select(_MEASURE_COLUMNS)
            .eq("code", code)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_measure(response.data[0])

    def list_measures(self) -> list[HouseholdMeasure]:
        """Return active generic measures ordered for display."""
        response = (
            self.client.table("household_measures")
            .select(_MEASURE_COLUMNS)
            .eq("is_active", True)
            .order("order_index", desc=False)
            .execute()
        )
        return [_parse_measure(row) for row in response.data or []]

    def get_food_measure(
        self, food_id: UUID, code: str
    ) -> FoodMeasureOverride | None:
        """Return the food-specific conversion for a measure, if any."""
        response = (
            self.client.table("food_household_measures")
            .select(_FOOD_MEASURE_COLUMNS)
            .eq("food_id", str(food_id))
            .eq("household_measures.code", code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food_measure(response.data[0])

    def list_food_measures(self, food_id: UUID) -> list[FoodMeasureOverride]:
        """Return all food-specific conversions for a food."""
        response = (
            self.client.table("food_household_measures")
            .select(_FOOD_MEASURE_COLUMNS)
            .eq("food_id", str(food_id))
            .execute()
        )
        return [_parse_food_measure(row) for row in response.data or []]

    def upsert_food_measure(
        self, food_id: UUID, code: str, grams: float, quantity: float
    ) -> FoodMeasureOverride:
        """Create or replace a food-specific conversion."""
        measure_id = self._measure_id(code)
        response = (
            self.client.table("food_household_measures")
            .upsert(
                {
                    "food_id": str(food_id),
                    "measure_id": measure_id,
                    "grams": grams,
                    "quantity": quantity,
                },
                on_conflict="food_id,measure_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save food measure")
        return FoodMeasureOverride(
            food_id=food_id, measure_code=code, grams=grams, quantity=quantity
        )

    def delete_food_measure(self, food_id: UUID, code: str) -> None:
        """Remove a food-specific conversion."""
        measure_id = self._measure_id(code)
        self.client.table("food_household_measures").delete().eq(
            "food_id", str(food_id)
        ).eq("measure_id", measure_id).execute()

    def _measure_id(self, code: str) -> str:
        response = (
            self.client.table("household_measures")
            .select("id")
            .eq("code", code)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Unknown household measure '{code}'")
        return str(response.data[0]["id"])


def _parse_measure(row: dict[str, object]) -> HouseholdMeasure:
    category = str(row.get("category") or MeasureCategory.OTHER)
    if category not in {item.value for item in MeasureCategory}:
        category = MeasureCategory.OTHER
    grams = row.get("grams_equivalent")
    ml = row.get("ml_equivalent")
    return HouseholdMeasure(
        code=str(row["code"]),
        name=str(row.get("name") or row["code"]),
        category=MeasureCategory(category),
        grams_equivalent=float(grams) if grams is not None else None,
        ml_equivalent=float(ml) if ml is not None else None,
        order_index=int(row.get("order_index") or 0),
    )


def _parse_food_measure(row: dict[str, object]) -> FoodMeasureOverride:
    measure = row.get("household_measures") or {}
    code = measure.get("code", "") if isinstance(measure, dict) else ""
    return FoodMeasureOverride(
        food_id=UUID(str(row["food_id"])),
        measure_code=str(code),
        grams=float(row.get("grams") or 0.0),
        quantity=float(row.get("quantity") or 1.0),
    )
