"""Patient adherence, prescription, anthropometry and energy endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from nutricoach.api.schemas import (  # noqa: TC001
    AnthropometryRequest,
    CohortAdherenceRequest,
    CompositionRequest,
    EnergyRequest,
    PrescriptionRequest,
    SeedPrescriptionRequest,
)
from nutricoach.calculations.adherence import adherence_display
from nutricoach.domain.energy import Sex

if TYPE_CHECKING:
    from nutricoach.containers import AppContainer
    from nutricoach.domain.anthropometry import AnthropometrySnapshot
    from nutricoach.domain.prescriptions import DailyAdherence, MacroAdherence

router = APIRouter(tags=["patients"])


@router.get("/patients/{patient_id}/adherence/daily/{day}")
async def daily_adherence(
    patient_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Compare a day's intake with the active prescription."""
    container: AppContainer = request.app.state.container
    result = container.adherence_service.daily(patient_id, day)
    return _daily_payload(result)


@router.get("/patients/{patient_id}/adherence/weekly/{end_day}")
async def weekly_adherence(
    patient_id: UUID, end_day: date, request: Request
) -> dict[str, object]:
    """Compare the seven days ending on end_day with their prescriptions."""
    container: AppContainer = request.app.state.container
    result = container.adherence_service.weekly(patient_id, end_day)
    return {
        "start": result.start,
        "end": result.end,
        "days": [_daily_payload(item) for item in result.days],
        "consumed": asdict(result.consumed),
        "goal": asdict(result.goal),
        "adherence": _adherence_payload(result.adherence),
    }


@router.post("/adherence/cohort")
async def cohort_adherence(
    payload: CohortAdherenceRequest, request: Request
) -> dict[str, object]:
    """Daily calorie adherence across patients for a chart."""
    container: AppContainer = request.app.state.container
    points = container.adherence_service.cohort_chart(
        payload.patient_ids, payload.end_day
    )
    return {"points": [asdict(point) for point in points]}


@router.post(
    "/patients/{patient_id}/prescriptions", status_code=status.HTTP_201_CREATED
)
async def create_prescription(
    patient_id: UUID, payload: PrescriptionRequest, request: Request
) -> dict[str, object]:
    """Prescribe daily goals for a date range."""
    container: AppContainer = request.app.state.container
    prescription = container.prescription_service.create(
        patient_id=patient_id,
        calories=payload.calories,
        protein_g=payload.protein_g,
        fat_g=payload.fat_g,
        carbs_g=payload.carbs_g,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    return asdict(prescription)


@router.get("/patients/{patient_id}/prescriptions/active")
async def active_prescription(
    patient_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return the prescription in force on a day."""
    container: AppContainer = request.app.state.container
    return asdict(container.prescription_service.require_active(patient_id, day))


@router.post(
    "/patients/{patient_id}/anthropometry", status_code=status.HTTP_201_CREATED
)
async def record_anthropometry(
    patient_id: UUID, payload: AnthropometryRequest, request: Request
) -> dict[str, object]:
    """Record a measurement; BMI is derived in the response."""
    container: AppContainer = request.app.state.container
    snapshot = container.anthropometry_service.record(
        patient_id=patient_id,
        recorded_on=payload.recorded_on,
        weight_kg=payload.weight_kg,
        height_cm=payload.height_cm,
        notes=payload.notes,
    )
    return _snapshot_payload(snapshot)


@router.get("/patients/{patient_id}/anthropometry")
async def anthropometry_history(
    patient_id: UUID, request: Request
) -> dict[str, object]:
    """Return measurements with BMI recomputed."""
    container: AppContainer = request.app.state.container
    history = container.anthropometry_service.history(patient_id)
    return {"records": [_snapshot_payload(item) for item in history]}


@router.post("/patients/{patient_id}/anthropometry/composition")
async def body_composition(
    patient_id: UUID, payload: CompositionRequest, request: Request
) -> dict[str, object]:
    """Estimate body fat, frame size and somatotype from the latest weight."""
    container: AppContainer = request.app.state.container
    composition = container.anthropometry_service.composition(
        patient_id,
        payload.age_years,
        Sex.parse(payload.sex),
        payload.to_measurements(),
    )
    return asdict(composition)


@router.post("/patients/{patient_id}/energy", status_code=status.HTTP_201_CREATED)
async def save_energy(
    patient_id: UUID, payload: EnergyRequest, request: Request
) -> dict[str, object]:
    """Compute and save an energy estimate; incomplete biometrics are rejected."""
    container: AppContainer = request.app.state.container
    saved = container.energy_service.estimate_and_save(patient_id, payload.to_input())
    return asdict(saved)


@router.get("/patients/{patient_id}/energy/latest")
async def latest_energy(patient_id: UUID, request: Request) -> dict[str, object]:
    """Return the most recent saved estimate, or null."""
    container: AppContainer = request.app.state.container
    saved = container.energy_service.latest(patient_id)
    return {"calculation": asdict(saved) if saved else None}


@router.post(
    "/patients/{patient_id}/energy/prescription",
    status_code=status.HTTP_201_CREATED,
)
async def seed_prescription(
    patient_id: UUID, payload: SeedPrescriptionRequest, request: Request
) -> dict[str, object]:
    """Create a prescription from the latest saved estimate."""
    container: AppContainer = request.app.state.container
    prescription = container.energy_service.seed_prescription(
        patient_id, payload.start_date, payload.end_date
    )
    return asdict(prescription)


def _adherence_payload(adherence: MacroAdherence) -> dict[str, int | None]:
    return {
        "calories": adherence_display(adherence.calories),
        "protein": adherence_display(adherence.protein),
        "carbs": adherence_display(adherence.carbs),
        "fat": adherence_display(adherence.fat),
    }


def _daily_payload(result: DailyAdherence) -> dict[str, object]:
    return {
        "day": result.day,
        "consumed": asdict(result.consumed),
        "prescription": asdict(result.prescription) if result.prescription else None,
        "adherence": _adherence_payload(result.adherence),
    }


def _snapshot_payload(snapshot: AnthropometrySnapshot) -> dict[str, object]:
    return {
        **asdict(snapshot.record),
        "bmi": snapshot.bmi,
        "category": snapshot.category.value if snapshot.category else None,
    }
