"""Adherence reporting service."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from nutricoach.calculations.adherence import (
    DEFAULT_CHART_CAP,
    adherence,
    cap_for_chart,
    macro_adherence,
    totals_adherence,
)
from nutricoach.calculations.aggregation import aggregate
from nutricoach.calculations.nutrients import round_amounts
from nutricoach.domain.nutrition import NutrientAmounts
from nutricoach.domain.prescriptions import (
    ChartPoint,
    DailyAdherence,
    Prescription,
    WeeklyAdherence,
)
from nutricoach.services.diary import DiaryService
from nutricoach.services.prescriptions import PrescriptionService, select_active

WEEK_DAYS = 7


@dataclass
class AdherenceService:
    """Compares diary totals with active prescriptions."""

    diary_service: DiaryService
    prescription_service: PrescriptionService
    chart_cap: int = DEFAULT_CHART_CAP

    def daily(self, patient_id: UUID, day: date) -> DailyAdherence:
        """Adherence for a single day; no prescription yields None percentages."""
        totals = self.diary_service.daily_totals(patient_id, day, day, rounded=False)
        consumed = totals[day]
        prescription = self.prescription_service.get_active(patient_id, day)
        return _day_adherence(day, consumed, prescription)

    def weekly(self, patient_id: UUID, end_day: date) -> WeeklyAdherence:
        """Adherence for the seven days ending on end_day."""
        start = end_day - timedelta(days=WEEK_DAYS - 1)
        totals = self.diary_service.daily_totals(
            patient_id, start, end_day, rounded=False
        )
        prescriptions = self.prescription_service.list_prescriptions(patient_id)
        days: list[DailyAdherence] = []
        consumed: list[NutrientAmounts] = []
        goals: list[NutrientAmounts] = []
        for day, amounts in sorted(totals.items()):
            prescription = select_active(prescriptions, day)
            days.append(_day_adherence(day, amounts, prescription))
            if prescription is not None:
                consumed.append(amounts)
                goals.append(
                    NutrientAmounts(
                        calories=prescription.calories,
                        protein_g=prescription.protein_g,
                        carbs_g=prescription.carbs_g,
                        fat_g=prescription.fat_g,
                    )
                )
        consumed_total = aggregate(consumed, rounded=False)
        goal_total = aggregate(goals, rounded=False)
        return WeeklyAdherence(
            start=start,
            end=end_day,
            days=days,
            consumed=round_amounts(consumed_total),
            goal=round_amounts(goal_total),
            adherence=totals_adherence(consumed_total, goal_total),
        )

    def cohort_chart(self, patient_ids: list[UUID], end_day: date) -> list[ChartPoint]:
        """Daily calorie adherence across patients, capped for chart display.

        Only patients who logged on a day contribute to that day, each with
        the calories of their active prescription.
        """
        start = end_day - timedelta(days=WEEK_DAYS - 1)
        entries = self.diary_service.entries_for_patients(patient_ids, start, end_day)
        prescriptions = self.prescription_service.list_for_patients(
            patient_ids, start, end_day
        )
        points = []
        for offset in range(WEEK_DAYS):
            day = start + timedelta(days=offset)
            day_entries = [entry for entry in entries if entry.day == day]
            consumed = sum(entry.nutrients.calories for entry in day_entries)
            prescribed = 0.0
            for patient_id in {entry.patient_id for entry in day_entries}:
                active = select_active(
                    (item for item in prescriptions if item.patient_id == patient_id),
                    day,
                )
                if active is not None:
                    prescribed += active.calories
            points.append(
                ChartPoint(
                    day=day,
                    adherence=cap_for_chart(
                        adherence(consumed, prescribed), self.chart_cap
                    ),
                )
            )
        return points


def _day_adherence(
    day: date, consumed: NutrientAmounts, prescription: Prescription | None
) -> DailyAdherence:
    """Percentages use the raw totals, the reported totals are rounded."""
    return DailyAdherence(
        day=day,
        consumed=round_amounts(consumed),
        prescription=prescription,
        adherence=macro_adherence(consumed, prescription),
    )
