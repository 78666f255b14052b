"""Tests for adherence calculations."""

from datetime import date, timedelta
from uuid import uuid4

from nutricoach.calculations.adherence import (
    adherence,
    adherence_display,
    cap_for_chart,
    diary_adherence,
    macro_adherence,
    totals_adherence,
)
from nutricoach.domain.nutrition import NutrientAmounts
from tests.conftest import make_prescription


def test_full_adherence() -> None:
    assert adherence(2000, 2000) == 100


def test_nothing_consumed_is_zero_percent() -> None:
    assert adherence(0, 2000) == 0


def test_missing_or_non_positive_goal_is_undefined() -> None:
    assert adherence(1500, 0) is None
    assert adherence(1500, -100) is None
    assert adherence(1500, None) is None


def test_overshoot_is_not_capped_but_chart_value_is() -> None:
    value = adherence(4000, 2000)

    assert value == 200
    assert cap_for_chart(value) == 150
    assert cap_for_chart(value, maximum=120) == 120
    assert cap_for_chart(None) == 0


def test_display_rounds_percentages() -> None:
    assert adherence_display(adherence(1, 3)) == 33
    assert adherence_display(None) is None


def test_macro_adherence_without_prescription_is_undefined() -> None:
    consumed = NutrientAmounts(calories=1800, protein_g=120, carbs_g=200, fat_g=50)

    result = macro_adherence(consumed, None)

    assert result.calories is None
    assert result.fat is None


def test_macro_adherence_per_nutrient() -> None:
    day = date(2024, 5, 1)
    prescription = make_prescription(uuid4(), day, day, calories=2000, fat_g=0)
    consumed = NutrientAmounts(calories=1000, protein_g=150, carbs_g=100, fat_g=40)

    result = macro_adherence(consumed, prescription)

    assert result.calories == 50
    assert result.protein == 100
    assert result.carbs == 50
    assert result.fat is None


def test_totals_adherence() -> None:
    consumed = NutrientAmounts(calories=3000, protein_g=100, carbs_g=0, fat_g=90)
    goal = NutrientAmounts(calories=4000, protein_g=200, carbs_g=400, fat_g=0)

    result = totals_adherence(consumed, goal)

    assert result.calories == 75
    assert result.protein == 50
    assert result.carbs == 0
    assert result.fat is None


def test_diary_adherence_counts_unique_days_and_streak() -> None:
    today = date(2024, 5, 31)
    logged = [today, today, today - timedelta(days=1), today - timedelta(days=2)]
    logged.append(today - timedelta(days=10))

    result = diary_adherence(logged, window_days=30, today=today)

    assert result.days_with_records == 4
    assert result.adherence_percentage == 13
    assert result.current_streak == 3
    assert result.total_entries == 5


def test_diary_streak_survives_unlogged_today() -> None:
    today = date(2024, 5, 31)
    logged = [today - timedelta(days=1), today - timedelta(days=2)]

    result = diary_adherence(logged, window_days=7, today=today)

    assert result.current_streak == 2


def test_diary_adherence_empty_window() -> None:
    result = diary_adherence([], window_days=0, today=date(2024, 5, 31))

    assert result.adherence_percentage == 0
    assert result.current_streak == 0
