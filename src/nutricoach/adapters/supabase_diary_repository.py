"""Supabase repository for food diary entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutricoach.domain.diary import FoodEntry, NewFoodEntry
from nutricoach.domain.nutrition import NutrientAmounts
from nutricoach.services.diary import DiaryRepository


@dataclass
class SupabaseDiaryRepository(DiaryRepository):
    """Supabase implementation for food diary entries."""

    client: Client

    def create_entry(self, entry: NewFoodEntry) -> FoodEntry:
        """Insert an entry and return it with its id."""
        response = (
            self.client.table("food_entries")
            .insert(
                {
                    "patient_id": str(entry.patient_id),
                    "food_id": str(entry.food_id),
                    "food_name": entry.food_name,
                    "quantity": entry.quantity,
                    "measure_code": entry.measure_code,
                    "grams": entry.grams,
                    "entry_date": entry.day.isoformat(),
                    "entry_time": entry.logged_at.isoformat(),
                    "meal_type": entry.meal_type,
                    "calories": entry.nutrients.calories,
                    "protein": entry.nutrients.protein_g,
                    "carbs": entry.nutrients.carbs_g,
                    "fat": entry.nutrients.fat_g,
                    "fiber": entry.nutrients.fiber_g,
                    "sodium": entry.nutrients.sodium_mg,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("food_entries")
            .select("*")
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""
        self.client.table("food_entries").delete().eq("id", str(entry_id)).execute()

    def list_entries(self, patient_id: UUID, start: date, end: date) -> list[FoodEntry]:
        """Return entries in the inclusive day range ordered by log time."""
        response = (
            self.client.table("food_entries")
            .select("*")
            .eq("patient_id", str(patient_id))
            .gte("entry_date", start.isoformat())
            .lte("entry_date", end.isoformat())
            .order("entry_time", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_entries_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[FoodEntry]:
        """Return entries of several patients within the day range."""
        if not patient_ids:
            return []
        response = (
            self.client.table("food_entries")
            .select("*")
            .in_("patient_id", [str(patient_id) for patient_id in patient_ids])
            .gte("entry_date", start.isoformat())
            .lte("entry_date", end.isoformat())
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    return FoodEntry(
        id=UUID(str(row["id"])),
        patient_id=UUID(str(row["patient_id"])),
        food_id=UUID(str(row["food_id"])),
        food_name=str(row.get("food_name", "")),
        quantity=float(row.get("quantity") or 0.0),
        measure_code=str(row.get("measure_code") or "gram"),
        grams=float(row.get("grams") or 0.0),
        day=date.fromisoformat(str(row["entry_date"])),
        logged_at=datetime.fromisoformat(str(row["entry_time"])),
        meal_type=row.get("meal_type") or None,
        nutrients=NutrientAmounts(
            calories=float(row.get("calories") or 0.0),
            protein_g=float(row.get("protein") or 0.0),
            carbs_g=float(row.get("carbs") or 0.0),
            fat_g=float(row.get("fat") or 0.0),
            fiber_g=_optional_float(row.get("fiber")),
            sodium_mg=_optional_float(row.get("sodium")),
        ),
    )
