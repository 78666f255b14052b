"""Supabase repository for prescriptions."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutricoach.domain.prescriptions import Prescription
from nutricoach.services.prescriptions import PrescriptionRepository

_COLUMNS = (
    "id, patient_id, calories, protein, fat, carbs, start_date, end_date, created_at"
)


@dataclass
class SupabasePrescriptionRepository(PrescriptionRepository):
    """Supabase-backed prescription repository."""

    client: Client

    def list_prescriptions(self, patient_id: UUID) -> list[Prescription]:
        """Return all prescriptions for a patient."""
        response = (
            self.client.table("prescriptions")
            .select(_COLUMNS)
            .eq("patient_id", str(patient_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_prescription(row) for row in response.data or []]

    def list_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[Prescription]:
        """Return prescriptions overlapping the range for several patients."""
        response = (
            self.client.table("prescriptions")
            .select(_COLUMNS)
            .in_("patient_id", [str(patient_id) for patient_id in patient_ids])
            .lte("start_date", end.isoformat())
            .gte("end_date", start.isoformat())
            .execute()
        )
        return [_parse_prescription(row) for row in response.data or []]

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
        response = (
            self.client.table("prescriptions")
            .insert(
                {
                    "patient_id": str(patient_id),
                    "calories": calories,
                    "protein": protein_g,
                    "fat": fat_g,
                    "carbs": carbs_g,
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create prescription")
        return _parse_prescription(response.data[0])


def _parse_prescription(row: dict[str, object]) -> Prescription:
    return Prescription(
        id=UUID(str(row["id"])),
        patient_id=UUID(str(row["patient_id"])),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        start_date=date.fromisoformat(str(row["start_date"])),
        end_date=date.fromisoformat(str(row["end_date"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
