"""Food diary logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutricoach.calculations.adherence import diary_adherence
from nutricoach.calculations.aggregation import aggregate
from nutricoach.calculations.nutrients import scale_nutrients
from nutricoach.domain.diary import DaySummary, DiaryAdherence, FoodEntry, NewFoodEntry
from nutricoach.domain.errors import EntryNotFoundError
from nutricoach.domain.nutrition import NutrientAmounts
from nutricoach.services.audit import AuditService
from nutricoach.services.foods import FoodService
from nutricoach.services.measures import MeasureService

_logger = logging.getLogger(__name__)


class DiaryRepository(Protocol):
    """Persistence interface for food diary entries."""

    def create_entry(self, entry: NewFoodEntry) -> FoodEntry:
        """Persist an entry and return it with its id."""

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return an entry by id."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""

    def list_entries(self, patient_id: UUID, start: date, end: date) -> list[FoodEntry]:
        """Return entries with start <= day <= end ordered by log time."""

    def list_entries_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[FoodEntry]:
        """Return entries of several patients within the day range."""


@dataclass(frozen=True)
class PortionPreview:
    """Grams and rounded nutrients for a portion that is not saved."""

    grams: float
    nutrients: NutrientAmounts


@dataclass
class DiaryService:
    """Converts, scales and persists logged foods."""

    food_service: FoodService
    measure_service: MeasureService
    repository: DiaryRepository
    audit_service: AuditService

    def preview(
        self, food_id: UUID, quantity: float, measure_code: str
    ) -> PortionPreview:
        """Compute a portion's nutrients without saving it."""
        food = self.food_service.get_food(food_id)
        grams = self.measure_service.to_grams(food_id, measure_code, quantity)
        return PortionPreview(grams=grams, nutrients=scale_nutrients(food, grams))

    def log_food(  # noqa: PLR0913
        self,
        patient_id: UUID,
        food_id: UUID,
        quantity: float,
        measure_code: str,
        day: date,
        meal_type: str | None = None,
    ) -> FoodEntry:
        """Log a food for a patient; conversion failures block the save."""
        food = self.food_service.get_food(food_id)
        grams = self.measure_service.to_grams(food_id, measure_code, quantity)
        entry = self.repository.create_entry(
            NewFoodEntry(
                patient_id=patient_id,
                food_id=food.id,
                food_name=food.name,
                quantity=quantity,
                measure_code=measure_code,
                grams=grams,
                day=day,
                logged_at=datetime.now(tz=UTC),
                nutrients=scale_nutrients(food, grams, rounded=False),
                meal_type=meal_type,
            )
        )
        self.audit_service.record_event(
            patient_id=patient_id,
            entity_type="food_entry",
            entity_id=entry.id,
            action="create",
            after=_entry_snapshot(entry),
        )
        _logger.info(
            "Food logged: patient_id=%s food_id=%s grams=%.2f",
            patient_id,
            food_id,
            grams,
        )
        return entry

    def replace_entry(
        self, entry_id: UUID, quantity: float, measure_code: str
    ) -> FoodEntry:
        """Edit an entry by replacing it with a recomputed one."""
        current = self._require_entry(entry_id)
        replacement = self.log_food(
            patient_id=current.patient_id,
            food_id=current.food_id,
            quantity=quantity,
            measure_code=measure_code,
            day=current.day,
            meal_type=current.meal_type,
        )
        try:
            self.repository.delete_entry(entry_id)
        except Exception:
            _logger.exception(
                "Replace failed, removing replacement: entry_id=%s replacement_id=%s",
                entry_id,
                replacement.id,
            )
            self.repository.delete_entry(replacement.id)
            raise
        self.audit_service.record_event(
            patient_id=current.patient_id,
            entity_type="food_entry",
            entity_id=entry_id,
            action="replace",
            before=_entry_snapshot(current),
            after=_entry_snapshot(replacement),
        )
        return replacement

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""
        current = self._require_entry(entry_id)
        self.repository.delete_entry(entry_id)
        self.audit_service.record_event(
            patient_id=current.patient_id,
            entity_type="food_entry",
            entity_id=entry_id,
            action="delete",
            before=_entry_snapshot(current),
        )

    def day_summary(self, patient_id: UUID, day: date) -> DaySummary:
        """Return a day's entries with totals."""
        entries = self.repository.list_entries(patient_id, day, day)
        return DaySummary(
            day=day,
            entries=entries,
            totals=aggregate(entry.nutrients for entry in entries),
        )

    def daily_totals(
        self, patient_id: UUID, start: date, end: date, *, rounded: bool = True
    ) -> dict[date, NutrientAmounts]:
        """Return totals for every day in the range, zero when empty.

        Pass ``rounded=False`` when the totals feed further sums.
        """
        entries = self.repository.list_entries(patient_id, start, end)
        return _totals_by_day(entries, start, end, rounded=rounded)

    def entries_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[FoodEntry]:
        """Return entries of several patients within the day range."""
        if not patient_ids:
            return []
        return self.repository.list_entries_for_patients(patient_ids, start, end)

    def diary_adherence(
        self, patient_id: UUID, today: date, window_days: int = 30
    ) -> DiaryAdherence:
        """Return how consistently the patient logged over the window."""
        start = today - timedelta(days=window_days)
        entries = self.repository.list_entries(patient_id, start, today)
        return diary_adherence(
            (entry.day for entry in entries),
            window_days=window_days,
            today=today,
            total_entries=len(entries),
        )

    def _require_entry(self, entry_id: UUID) -> FoodEntry:
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry


def _totals_by_day(
    entries: list[FoodEntry], start: date, end: date, *, rounded: bool = True
) -> dict[date, NutrientAmounts]:
    grouped: dict[date, list[NutrientAmounts]] = {}
    for offset in range((end - start).days + 1):
        grouped[start + timedelta(days=offset)] = []
    for entry in entries:
        if entry.day in grouped:
            grouped[entry.day].append(entry.nutrients)
    return {
        day: aggregate(amounts, rounded=rounded) for day, amounts in grouped.items()
    }


def _entry_snapshot(entry: FoodEntry) -> dict[str, object]:
    return {
        "food_id": str(entry.food_id),
        "food_name": entry.food_name,
        "quantity": entry.quantity,
        "measure_code": entry.measure_code,
        "grams": entry.grams,
        "day": entry.day.isoformat(),
        "calories": entry.nutrients.calories,
    }
