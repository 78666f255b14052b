"""Energy expenditure service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutricoach.calculations.energy import (
    calculate_all_protocols,
    calculate_energy,
    protocol_breakdown,
)
from nutricoach.calculations.projection import project_weight_change
from nutricoach.domain.energy import (
    BmrProtocolResult,
    EnergyCalculationInput,
    EnergyCalculationResult,
    FormulaBreakdown,
    SavedEnergyCalculation,
    Sex,
    WeightProjection,
)
from nutricoach.domain.errors import (
    EnergyEstimateNotFoundError,
    InvalidBiometricInputError,
)
from nutricoach.domain.prescriptions import Prescription
from nutricoach.services.prescriptions import PrescriptionService

_logger = logging.getLogger(__name__)


class EnergyRepository(Protocol):
    """Persistence interface for energy estimates."""

    def save_calculation(
        self,
        patient_id: UUID,
        data: EnergyCalculationInput,
        result: EnergyCalculationResult,
    ) -> SavedEnergyCalculation:
        """Persist an estimate and return it."""

    def get_latest(self, patient_id: UUID) -> SavedEnergyCalculation | None:
        """Return the most recent estimate for a patient."""


@dataclass
class EnergyService:
    """Estimates energy needs and turns them into prescriptions."""

    repository: EnergyRepository
    prescription_service: PrescriptionService

    def estimate(self, data: EnergyCalculationInput) -> EnergyCalculationResult | None:
        """Compute an estimate; incomplete biometrics yield None."""
        return calculate_energy(data)

    def estimate_and_save(
        self, patient_id: UUID, data: EnergyCalculationInput
    ) -> SavedEnergyCalculation:
        """Compute and persist an estimate the caller explicitly requested."""
        result = calculate_energy(data)
        if result is None:
            _logger.warning("Energy estimate rejected: patient_id=%s", patient_id)
            raise InvalidBiometricInputError(
                "weight, height, age and activity factor must be greater than 0"
            )
        return self.repository.save_calculation(patient_id, data, result)

    def latest(self, patient_id: UUID) -> SavedEnergyCalculation | None:
        """Return the most recent saved estimate."""
        return self.repository.get_latest(patient_id)

    def protocols(  # noqa: PLR0913
        self,
        weight_kg: float | None,
        height_cm: float | None,
        age_years: float | None,
        sex: Sex,
        lean_mass_kg: float | None = None,
    ) -> list[BmrProtocolResult]:
        """Compare BMR across predictive protocols."""
        return calculate_all_protocols(
            weight_kg, height_cm, age_years, sex, lean_mass_kg
        )

    def protocol_breakdown(  # noqa: PLR0913
        self,
        protocol_id: str,
        weight_kg: float | None,
        height_cm: float | None,
        age_years: float | None,
        sex: Sex,
        lean_mass_kg: float | None = None,
    ) -> FormulaBreakdown | None:
        """Show how one protocol reaches its BMR."""
        return protocol_breakdown(
            protocol_id, weight_kg, height_cm, age_years, sex, lean_mass_kg
        )

    def project(self, daily_kcal: float | None) -> WeightProjection:
        """Project weight change for a daily energy balance."""
        return project_weight_change(daily_kcal)

    def seed_prescription(
        self, patient_id: UUID, start_date: date, end_date: date
    ) -> Prescription:
        """Create a prescription from the latest saved estimate."""
        saved = self.latest(patient_id)
        if saved is None:
            raise EnergyEstimateNotFoundError(patient_id)
        return self.prescription_service.create_from_energy(
            patient_id, saved.result, start_date, end_date
        )
