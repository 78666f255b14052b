"""Food catalogue, household measure and diary endpoints."""

from __future__ import annotations

from dataclasses import asdict, replace
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from nutricoach.api.schemas import (  # noqa: TC001
    CustomFoodRequest,
    FoodMeasureRequest,
    LogFoodRequest,
    ReplaceEntryRequest,
)
from nutricoach.calculations.measures import format_quantity
from nutricoach.calculations.nutrients import round_amounts

if TYPE_CHECKING:
    from nutricoach.containers import AppContainer
    from nutricoach.domain.diary import FoodEntry

router = APIRouter(tags=["diary"])


@router.get("/foods/search")
async def search_foods(
    request: Request, q: str = "", limit: int = 10
) -> dict[str, object]:
    """Search foods by name."""
    container: AppContainer = request.app.state.container
    foods = container.food_service.search(q, limit=limit)
    return {"foods": [asdict(food) for food in foods]}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: CustomFoodRequest, request: Request
) -> dict[str, object]:
    """Create a custom food."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create_custom_food(
        payload.model_dump(exclude_none=True)
    )
    return asdict(food)


@router.get("/foods/{food_id}")
async def get_food(food_id: UUID, request: Request) -> dict[str, object]:
    """Return a food's per-100g profile."""
    container: AppContainer = request.app.state.container
    return asdict(container.food_service.get_food(food_id))


@router.get("/foods/{food_id}/nutrition-check")
async def nutrition_check(food_id: UUID, request: Request) -> dict[str, object]:
    """Compare stored calories with the macro-derived value."""
    container: AppContainer = request.app.state.container
    return asdict(container.food_service.check_nutrition(food_id))


@router.get("/foods/{food_id}/portion")
async def portion(
    food_id: UUID, request: Request, quantity: float, measure_code: str
) -> dict[str, object]:
    """Preview the nutrients of a portion without logging it."""
    container: AppContainer = request.app.state.container
    preview = container.diary_service.preview(food_id, quantity, measure_code)
    measure = container.measure_service.get_measure(measure_code)
    return {
        "label": format_quantity(quantity, measure_code, measure),
        "grams": preview.grams,
        "nutrients": asdict(preview.nutrients),
    }


@router.get("/measures")
async def list_measures(request: Request) -> dict[str, object]:
    """Return the generic household measures."""
    container: AppContainer = request.app.state.container
    measures = container.measure_service.list_measures()
    return {"measures": [asdict(item) for item in measures]}


@router.get("/foods/{food_id}/measures")
async def list_food_measures(food_id: UUID, request: Request) -> dict[str, object]:
    """Return food-specific measure conversions."""
    container: AppContainer = request.app.state.container
    overrides = container.measure_service.list_food_measures(food_id)
    return {"measures": [asdict(item) for item in overrides]}


@router.put("/foods/{food_id}/measures/{code}")
async def set_food_measure(
    food_id: UUID, code: str, payload: FoodMeasureRequest, request: Request
) -> dict[str, object]:
    """Create or replace a food-specific measure conversion."""
    container: AppContainer = request.app.state.container
    override = container.measure_service.set_food_measure(
        food_id, code, payload.grams, payload.quantity
    )
    return asdict(override)


@router.delete(
    "/foods/{food_id}/measures/{code}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_food_measure(food_id: UUID, code: str, request: Request) -> None:
    """Remove a food-specific measure conversion."""
    container: AppContainer = request.app.state.container
    container.measure_service.remove_food_measure(food_id, code)


@router.post("/patients/{patient_id}/diary", status_code=status.HTTP_201_CREATED)
async def log_food(
    patient_id: UUID, payload: LogFoodRequest, request: Request
) -> dict[str, object]:
    """Log a food for a patient."""
    container: AppContainer = request.app.state.container
    entry = container.diary_service.log_food(
        patient_id=patient_id,
        food_id=payload.food_id,
        quantity=payload.quantity,
        measure_code=payload.measure_code,
        day=payload.day,
        meal_type=payload.meal_type,
    )
    return _entry_payload(entry)


@router.put("/diary/{entry_id}")
async def replace_entry(
    entry_id: UUID, payload: ReplaceEntryRequest, request: Request
) -> dict[str, object]:
    """Change the portion of an entry by replacing it."""
    container: AppContainer = request.app.state.container
    entry = container.diary_service.replace_entry(
        entry_id, payload.quantity, payload.measure_code
    )
    return _entry_payload(entry)


@router.delete("/diary/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: UUID, request: Request) -> None:
    """Delete a diary entry."""
    container: AppContainer = request.app.state.container
    container.diary_service.delete_entry(entry_id)


@router.get("/patients/{patient_id}/diary/{day}")
async def day_summary(
    patient_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return a day's entries and totals."""
    container: AppContainer = request.app.state.container
    summary = container.diary_service.day_summary(patient_id, day)
    return {
        "day": summary.day,
        "entries": [_entry_payload(entry) for entry in summary.entries],
        "totals": asdict(summary.totals),
    }


@router.get("/patients/{patient_id}/diary-adherence")
async def diary_adherence(
    patient_id: UUID, request: Request, today: date, window_days: int | None = None
) -> dict[str, object]:
    """Return how consistently the patient logged over the window."""
    container: AppContainer = request.app.state.container
    window = window_days or container.settings.diary_adherence_window_days
    result = container.diary_service.diary_adherence(patient_id, today, window)
    return asdict(result)


def _entry_payload(entry: FoodEntry) -> dict[str, object]:
    return asdict(replace(entry, nutrients=round_amounts(entry.nutrients)))
