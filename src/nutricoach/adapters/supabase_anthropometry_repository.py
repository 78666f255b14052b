"""Supabase repository for anthropometric records."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutricoach.domain.anthropometry import AnthropometricRecord
from nutricoach.services.anthropometry import AnthropometryRepository


@dataclass
class SupabaseAnthropometryRepository(AnthropometryRepository):
    """Supabase implementation backed by the growth records table."""

    client: Client

    def upsert_record(  # noqa: PLR0913
        self,
        patient_id: UUID,
        recorded_on: date,
        weight_kg: float,
        height_cm: float | None,
        notes: str | None,
    ) -> AnthropometricRecord:
        """Create or replace the record for a patient and date."""
        response = (
            self.client.table("growth_records")
            .upsert(
                {
                    "patient_id": str(patient_id),
                    "record_date": recorded_on.isoformat(),
                    "weight": weight_kg,
                    "height": height_cm,
                    "notes": notes,
                },
                on_conflict="patient_id,record_date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save anthropometric record")
        return _parse_record(response.data[0])

    def list_records(self, patient_id: UUID) -> list[AnthropometricRecord]:
        """Return records ordered by date ascending."""
        response = (
            self.client.table("growth_records")
            .select("id, patient_id, record_date, weight, height, notes")
            .eq("patient_id", str(patient_id))
            .order("record_date", desc=False)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_record(row: dict[str, object]) -> AnthropometricRecord:
    height = row.get("height")
    return AnthropometricRecord(
        id=UUID(str(row["id"])),
        patient_id=UUID(str(row["patient_id"])),
        recorded_on=date.fromisoformat(str(row["record_date"])),
        weight_kg=float(row.get("weight") or 0.0),
        height_cm=float(height) if height else None,
        notes=row.get("notes") or None,
    )
