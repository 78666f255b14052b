"""Prescription service."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutricoach.domain.energy import EnergyCalculationResult
from nutricoach.domain.errors import PrescriptionNotFoundError
from nutricoach.domain.prescriptions import Prescription

_logger = logging.getLogger(__name__)


class PrescriptionRepository(Protocol):
    """Persistence interface for prescriptions."""

    def list_prescriptions(self, patient_id: UUID) -> list[Prescription]:
        """Return all prescriptions for a patient."""

    def list_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[Prescription]:
        """Return prescriptions overlapping the range for several patients."""

    def create_prescription(  # noqa: PLR0913
        self,
        patient_id: UUID,
        calories: float,
        protein_g: float,
        fat_g: float,
        carbs_g: float,
        start_date: date,
        end_date: date,
    ) -> Prescription:
        """Create a prescription and return it."""


def select_active(
    prescriptions: Iterable[Prescription], day: date
) -> Prescription | None:
    """Most recently created prescription whose range contains the day."""
    covering = [item for item in prescriptions if item.covers(day)]
    if not covering:
        return None
    return max(covering, key=lambda item: item.created_at)


@dataclass
class PrescriptionService:
    """Application service for prescriptions."""

    repository: PrescriptionRepository

    def list_prescriptions(self, patient_id: UUID) -> list[Prescription]:
        """Return every prescription of the patient."""
        return self.repository.list_prescriptions(patient_id)

    def get_active(self, patient_id: UUID, day: date) -> Prescription | None:
        """Return the active prescription for the day, if any."""
        return select_active(self.list_prescriptions(patient_id), day)

    def require_active(self, patient_id: UUID, day: date) -> Prescription:
        """Return the active prescription or raise PrescriptionNotFoundError."""
        prescription = self.get_active(patient_id, day)
        if prescription is None:
            _logger.warning(
                "No active prescription: patient_id=%s day=%s", patient_id, day
            )
            raise PrescriptionNotFoundError(patient_id, day)
        return prescription

    def list_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[Prescription]:
        """Return prescriptions overlapping the range for several patients."""
        if not patient_ids:
            return []
        return self.repository.list_for_patients(patient_ids, start, end)

    def create(  # noqa: PLR0913
        self,
        patient_id: UUID,
        calories: float,
        protein_g: float,
        fat_g: float,
        carbs_g: float,
        start_date: date,
        end_date: date,
    ) -> Prescription:
        """Create a prescription after validating its date range."""
        if end_date < start_date:
            raise ValueError("end_date must not be before start_date")
        if calories <= 0:
            raise ValueError("calories must be greater than 0")
        return self.repository.create_prescription(
            patient_id=patient_id,
            calories=calories,
            protein_g=protein_g,
            fat_g=fat_g,
            carbs_g=carbs_g,
            start_date=start_date,
            end_date=end_date,
        )

    def create_from_energy(
        self,
        patient_id: UUID,
        result: EnergyCalculationResult,
        start_date: date,
        end_date: date,
    ) -> Prescription:
        """Seed a prescription from an energy estimate.

        Values are rounded to whole units; a negative carbohydrate target is
        rejected rather than prescribed.
        """
        if result.carbs_g < 0:
            raise ValueError("carbohydrate target is negative")
        return self.create(
            patient_id=patient_id,
            calories=round(result.target_calories),
            protein_g=round(result.protein_g),
            fat_g=round(result.fat_g),
            carbs_g=round(result.carbs_g),
            start_date=start_date,
            end_date=end_date,
        )
