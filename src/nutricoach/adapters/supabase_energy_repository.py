"""Supabase repository for energy expenditure calculations."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutricoach.domain.energy import (
    EnergyCalculationInput,
    EnergyCalculationResult,
    Goal,
    SavedEnergyCalculation,
    Sex,
)
from nutricoach.services.energy import EnergyRepository


@dataclass
class SupabaseEnergyRepository(EnergyRepository):
    """Supabase-backed repository for saved energy estimates."""

    client: Client

    def save_calculation(
        self,
        patient_id: UUID,
        data: EnergyCalculationInput,
        result: EnergyCalculationResult,
    ) -> SavedEnergyCalculation:
        """Persist an estimate with its inputs and return it."""
        response = (
            self.client.table("energy_expenditure_calculations")
            .insert(
                {
                    "patient_id": str(patient_id),
                    "weight": data.weight_kg,
                    "height": data.height_cm,
                    "age": data.age_years,
                    "gender": data.sex.value,
                    "activity_level": data.activity_factor,
                    "goal": data.goal.value,
                    "protein_ratio": data.protein_ratio_g_per_kg,
                    "fat_percent": data.fat_percent_of_calories,
                    "tmb": result.bmr,
                    "get": result.tdee,
                    "target_calories": result.target_calories,
                    "protein": result.protein_g,
                    "fat": result.fat_g,
                    "carbs": result.carbs_g,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save energy calculation")
        return _parse_calculation(response.data[0])

    def get_latest(self, patient_id: UUID) -> SavedEnergyCalculation | None:
        """Return the most recent estimate for a patient."""
        response = (
            self.client.table("energy_expenditure_calculations")
            .select("*")
            .eq("patient_id", str(patient_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_calculation(response.data[0])


def _parse_calculation(row: dict[str, object]) -> SavedEnergyCalculation:
    data = EnergyCalculationInput(
        weight_kg=float(row.get("weight") or 0.0),
        height_cm=float(row.get("height") or 0.0),
        age_years=float(row.get("age") or 0.0),
        sex=Sex.parse(str(row.get("gender") or "")),
        activity_factor=float(row.get("activity_level") or 0.0),
        goal=Goal(str(row.get("goal") or Goal.MAINTAIN)),
        protein_ratio_g_per_kg=float(row.get("protein_ratio") or 0.0),
        fat_percent_of_calories=float(row.get("fat_percent") or 0.0),
    )
    result = EnergyCalculationResult(
        bmr=float(row.get("tmb") or 0.0),
        tdee=float(row.get("get") or 0.0),
        target_calories=float(row.get("target_calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
    )
    return SavedEnergyCalculation(
        id=UUID(str(row["id"])),
        patient_id=UUID(str(row["patient_id"])),
        data=data,
        result=result,
    )
