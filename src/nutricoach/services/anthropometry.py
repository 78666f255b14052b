"""Anthropometric history service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutricoach.calculations.body import body_composition, bmi, classify_bmi
from nutricoach.domain.anthropometry import (
    AnthropometricRecord,
    AnthropometrySnapshot,
    BodyComposition,
    BodyMeasurements,
)
from nutricoach.domain.energy import Sex
from nutricoach.domain.errors import AnthropometricRecordNotFoundError

_logger = logging.getLogger(__name__)


class AnthropometryRepository(Protocol):
    """Persistence interface for anthropometric records."""

    def upsert_record(  # noqa: PLR0913
        self,
        patient_id: UUID,
        recorded_on: date,
        weight_kg: float,
        height_cm: float | None,
        notes: str | None,
    ) -> AnthropometricRecord:
        """Create or replace the record for a patient and date."""

    def list_records(self, patient_id: UUID) -> list[AnthropometricRecord]:
        """Return records ordered by date ascending."""


@dataclass
class AnthropometryService:
    """Records measurements and derives BMI on read."""

    repository: AnthropometryRepository

    def record(  # noqa: PLR0913
        self,
        patient_id: UUID,
        recorded_on: date,
        weight_kg: float,
        height_cm: float | None = None,
        notes: str | None = None,
    ) -> AnthropometrySnapshot:
        """Store a measurement; one record per patient and date."""
        if weight_kg <= 0:
            raise ValueError("weight_kg must be greater than 0")
        if height_cm is not None and height_cm <= 0:
            raise ValueError("height_cm must be greater than 0")
        record = self.repository.upsert_record(
            patient_id=patient_id,
            recorded_on=recorded_on,
            weight_kg=weight_kg,
            height_cm=height_cm,
            notes=notes,
        )
        _logger.info(
            "Anthropometry recorded: patient_id=%s date=%s", patient_id, recorded_on
        )
        return _snapshot(record)

    def history(self, patient_id: UUID) -> list[AnthropometrySnapshot]:
        """Return all records with BMI recomputed from weight and height.

        Records without a height reuse the most recent earlier height.
        """
        snapshots = []
        last_height: float | None = None
        for record in sorted(
            self.repository.list_records(patient_id), key=lambda item: item.recorded_on
        ):
            if record.height_cm:
                last_height = record.height_cm
            snapshots.append(_snapshot(record, last_height))
        return snapshots

    def latest(self, patient_id: UUID) -> AnthropometrySnapshot | None:
        """Return the most recent snapshot, if any."""
        snapshots = self.history(patient_id)
        return snapshots[-1] if snapshots else None

    def composition(
        self,
        patient_id: UUID,
        age_years: float | None,
        sex: Sex,
        measurements: BodyMeasurements,
    ) -> BodyComposition:
        """Estimate composition from the latest weight and last known height."""
        snapshots = self.history(patient_id)
        if not snapshots:
            raise AnthropometricRecordNotFoundError(patient_id)
        latest = snapshots[-1].record
        heights = [item.record.height_cm for item in snapshots if item.record.height_cm]
        height_cm = heights[-1] if heights else None
        composition = body_composition(
            latest.weight_kg, height_cm, age_years, sex, measurements
        )
        _logger.info(
            "Body composition computed: patient_id=%s protocol=%s",
            patient_id,
            composition.density_protocol,
        )
        return composition


def _snapshot(
    record: AnthropometricRecord, height_cm: float | None = None
) -> AnthropometrySnapshot:
    value = bmi(record.weight_kg, height_cm or record.height_cm)
    return AnthropometrySnapshot(record=record, bmi=value, category=classify_bmi(value))
