"""Stateless calculation endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutricoach.api.schemas import EnergyRequest, ProtocolRequest  # noqa: TC001
from nutricoach.calculations.body import bmi, classify_bmi
from nutricoach.calculations.rounding import round_half_up
from nutricoach.domain.energy import Sex

if TYPE_CHECKING:
    from nutricoach.containers import AppContainer

router = APIRouter(prefix="/calculations", tags=["calculations"])


@router.post("/energy")
async def energy(payload: EnergyRequest, request: Request) -> dict[str, object]:
    """Estimate BMR, TDEE, target calories and macros."""
    container: AppContainer = request.app.state.container
    result = container.energy_service.estimate(payload.to_input())
    return {"result": asdict(result) if result else None}


@router.post("/protocols")
async def protocols(payload: ProtocolRequest, request: Request) -> dict[str, object]:
    """Compare BMR across predictive protocols."""
    container: AppContainer = request.app.state.container
    results = container.energy_service.protocols(
        payload.weight_kg,
        payload.height_cm,
        payload.age_years,
        Sex.parse(payload.sex),
        payload.lean_mass_kg,
    )
    return {"protocols": [asdict(item) for item in results]}


@router.post("/protocols/{protocol_id}/breakdown")
async def protocol_breakdown(
    protocol_id: str, payload: ProtocolRequest, request: Request
) -> dict[str, object]:
    """Show the equation and steps behind one protocol; null when it does not apply."""
    container: AppContainer = request.app.state.container
    breakdown = container.energy_service.protocol_breakdown(
        protocol_id,
        payload.weight_kg,
        payload.height_cm,
        payload.age_years,
        Sex.parse(payload.sex),
        payload.lean_mass_kg,
    )
    return {"breakdown": asdict(breakdown) if breakdown else None}


@router.get("/bmi")
async def body_mass_index(
    weight_kg: float | None = None, height_cm: float | None = None
) -> dict[str, object]:
    """Return BMI and its band; both null when undefined."""
    value = bmi(weight_kg, height_cm)
    category = classify_bmi(value)
    return {
        "bmi": round_half_up(value, 1) if value is not None else None,
        "category": category.value if category else None,
    }


@router.get("/weight-projection")
async def weight_projection(
    request: Request, daily_kcal: float = 0.0
) -> dict[str, object]:
    """Project weekly and monthly weight change for a daily energy balance."""
    container: AppContainer = request.app.state.container
    projection = container.energy_service.project(daily_kcal)
    return asdict(projection)
