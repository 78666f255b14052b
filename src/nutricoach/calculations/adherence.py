"""Adherence of intake to prescribed goals."""

from collections.abc import Iterable
from datetime import date, timedelta

from nutricoach.calculations.rounding import round_percent
from nutricoach.domain.diary import DiaryAdherence
from nutricoach.domain.nutrition import NutrientAmounts
from nutricoach.domain.prescriptions import MacroAdherence, Prescription

DEFAULT_CHART_CAP = 150


def adherence(consumed: float, goal: float | None) -> float | None:
    """Return consumption as a percentage of the goal, or None without a goal."""
    if goal is None or goal <= 0:
        return None
    return consumed / goal * 100


def adherence_display(percent: float | None) -> int | None:
    """Round an adherence percentage for display."""
    if percent is None:
        return None
    return round_percent(percent)


def cap_for_chart(percent: float | None, maximum: int = DEFAULT_CHART_CAP) -> int:
    """Rounded percentage capped for chart scales; missing goals plot as 0."""
    if percent is None:
        return 0
    return min(round_percent(percent), maximum)


def macro_adherence(
    consumed: NutrientAmounts, prescription: Prescription | None
) -> MacroAdherence:
    """Adherence for calories and each macronutrient."""
    if prescription is None:
        return MacroAdherence(calories=None, protein=None, carbs=None, fat=None)
    return MacroAdherence(
        calories=adherence(consumed.calories, prescription.calories),
        protein=adherence(consumed.protein_g, prescription.protein_g),
        carbs=adherence(consumed.carbs_g, prescription.carbs_g),
        fat=adherence(consumed.fat_g, prescription.fat_g),
    )


def totals_adherence(
    consumed: NutrientAmounts, goal: NutrientAmounts
) -> MacroAdherence:
    """Adherence of summed consumption against summed goals."""
    return MacroAdherence(
        calories=adherence(consumed.calories, goal.calories),
        protein=adherence(consumed.protein_g, goal.protein_g),
        carbs=adherence(consumed.carbs_g, goal.carbs_g),
        fat=adherence(consumed.fat_g, goal.fat_g),
    )


def diary_adherence(
    logged_days: Iterable[date],
    window_days: int,
    today: date,
    total_entries: int | None = None,
) -> DiaryAdherence:
    """Share of days with records and the current logging streak.

    A missing record for ``today`` does not break the streak, the day is
    still open.
    """
    logged = list(logged_days)
    window_start = today - timedelta(days=window_days)
    unique_days = {day for day in logged if window_start <= day <= today}
    percentage = (
        round_percent(len(unique_days) / window_days * 100) if window_days > 0 else 0
    )

    streak = 0
    for offset in range(max(window_days, 0)):
        check = today - timedelta(days=offset)
        if check in unique_days:
            streak += 1
        elif check != today:
            break

    return DiaryAdherence(
        total_days=window_days,
        days_with_records=len(unique_days),
        adherence_percentage=percentage,
        current_streak=streak,
        total_entries=total_entries if total_entries is not None else len(logged),
    )
