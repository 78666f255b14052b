"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutricoach.config import Settings
from nutricoach.containers import AppContainer
from nutricoach.domain.anthropometry import AnthropometricRecord
from nutricoach.domain.diary import FoodEntry, NewFoodEntry
from nutricoach.domain.energy import (
    EnergyCalculationInput,
    EnergyCalculationResult,
    SavedEnergyCalculation,
)
from nutricoach.domain.foods import (
    Food,
    FoodMeasureOverride,
    HouseholdMeasure,
    MeasureCategory,
)
from nutricoach.domain.prescriptions import Prescription
from nutricoach.services.adherence import AdherenceService
from nutricoach.services.anthropometry import (
    AnthropometryRepository,
    AnthropometryService,
)
from nutricoach.services.audit import AuditRepository, AuditService
from nutricoach.services.cache import InMemoryCache
from nutricoach.services.diary import DiaryRepository, DiaryService
from nutricoach.services.energy import EnergyRepository, EnergyService
from nutricoach.services.foods import FoodRepository, FoodService
from nutricoach.services.measures import MeasureRepository, MeasureService
from nutricoach.services.prescriptions import (
    PrescriptionRepository,
    PrescriptionService,
)


def make_food(  # noqa: PLR0913
    name: str = "Rice",
    protein_g: float = 2.5,
    carbs_g: float = 28.0,
    fat_g: float = 0.3,
    calories: float = 124.7,
    fiber_g: float | None = None,
    sodium_mg: float | None = None,
) -> Food:
    return Food(
        id=uuid4(),
        name=name,
        food_group=None,
        source="taco",
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        fiber_g=fiber_g,
        sodium_mg=sodium_mg,
    )


def make_prescription(  # noqa: PLR0913
    patient_id: UUID,
    start_date: date,
    end_date: date,
    calories: float = 2000,
    protein_g: float = 150,
    fat_g: float = 60,
    carbs_g: float = 200,
    created_at: datetime | None = None,
) -> Prescription:
    return Prescription(
        id=uuid4(),
        patient_id=patient_id,
        calories=calories,
        protein_g=protein_g,
        fat_g=fat_g,
        carbs_g=carbs_g,
        start_date=start_date,
        end_date=end_date,
        created_at=created_at or datetime.now(tz=UTC),
    )


TABLESPOON = HouseholdMeasure(
    code="tablespoon",
    name="Tablespoon",
    category=MeasureCategory.VOLUME,
    grams_equivalent=15.0,
    ml_equivalent=15.0,
    order_index=1,
)
CUP = HouseholdMeasure(
    code="cup",
    name="Cup",
    category=MeasureCategory.VOLUME,
    grams_equivalent=240.0,
    ml_equivalent=240.0,
    order_index=2,
)
UNIT = HouseholdMeasure(
    code="unit",
    name="Unit",
    category=MeasureCategory.UNIT,
    grams_equivalent=None,
    order_index=3,
)


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)

    def add(self, food: Food) -> Food:
        self.foods[food.id] = food
        return food

    def get_food(self, food_id: UUID) -> Food | None:
        return self.foods.get(food_id)

    def search_foods(self, query: str, limit: int) -> list[Food]:
        lowered = query.lower()
        matches = [food for food in self.foods.values() if lowered in food.name.lower()]
        return matches[:limit]

    def create_food(self, payload: dict[str, object]) -> Food:
        food = Food(
            id=uuid4(),
            name=str(payload["name"]),
            food_group=payload.get("food_group"),
            source=str(payload.get("source", "custom")),
            calories=float(payload.get("calories", 0.0)),
            protein_g=float(payload.get("protein_g", 0.0)),
            carbs_g=float(payload.get("carbs_g", 0.0)),
            fat_g=float(payload.get("fat_g", 0.0)),
            fiber_g=payload.get("fiber_g"),
            sodium_mg=payload.get("sodium_mg"),
        )
        return self.add(food)


@dataclass
class InMemoryMeasureRepository(MeasureRepository):
    """In-memory household measure repository for tests."""

    measures: dict[str, HouseholdMeasure] = field(
        default_factory=lambda: {m.code: m for m in (TABLESPOON, CUP, UNIT)}
    )
    overrides: dict[tuple[UUID, str], FoodMeasureOverride] = field(
        default_factory=dict
    )
    measure_lookups: int = 0

    def get_measure(self, code: str) -> HouseholdMeasure | None:
        self.measure_lookups += 1
        return self.measures.get(code)

    def list_measures(self) -> list[HouseholdMeasure]:
        return sorted(self.measures.values(), key=lambda item: item.order_index)

    def get_food_measure(
        self, food_id: UUID, code: str
    ) -> FoodMeasureOverride | None:
        return self.overrides.get((food_id, code))

    def list_food_measures(self, food_id: UUID) -> list[FoodMeasureOverride]:
        return [item for key, item in self.overrides.items() if key[0] == food_id]

    def upsert_food_measure(
        self, food_id: UUID, code: str, grams: float, quantity: float
    ) -> FoodMeasureOverride:
        override = FoodMeasureOverride(
            food_id=food_id, measure_code=code, grams=grams, quantity=quantity
        )
        self.overrides[(food_id, code)] = override
        return override

    def delete_food_measure(self, food_id: UUID, code: str) -> None:
        self.overrides.pop((food_id, code), None)


@dataclass
class InMemoryDiaryRepository(DiaryRepository):
    """In-memory diary repository for tests."""

    entries: dict[UUID, FoodEntry] = field(default_factory=dict)

    def create_entry(self, entry: NewFoodEntry) -> FoodEntry:
        created = FoodEntry(id=uuid4(), **vars(entry))
        self.entries[created.id] = created
        return created

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        return self.entries.get(entry_id)

    def delete_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)

    def list_entries(self, patient_id: UUID, start: date, end: date) -> list[FoodEntry]:
        rows = [
            entry
            for entry in self.entries.values()
            if entry.patient_id == patient_id and start <= entry.day <= end
        ]
        return sorted(rows, key=lambda entry: entry.logged_at)

    def list_entries_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[FoodEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.patient_id in patient_ids and start <= entry.day <= end
        ]


@dataclass
class InMemoryPrescriptionRepository(PrescriptionRepository):
    """In-memory prescription repository for tests."""

    prescriptions: list[Prescription] = field(default_factory=list)

    def list_prescriptions(self, patient_id: UUID) -> list[Prescription]:
        return [item for item in self.prescriptions if item.patient_id == patient_id]

    def list_for_patients(
        self, patient_ids: list[UUID], start: date, end: date
    ) -> list[Prescription]:
        return [
            item
            for item in self.prescriptions
            if item.patient_id in patient_ids
            and item.start_date <= end
            and item.end_date >= start
        ]

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
        prescription = make_prescription(
            patient_id,
            start_date,
            end_date,
            calories=calories,
            protein_g=protein_g,
            fat_g=fat_g,
            carbs_g=carbs_g,
        )
        self.prescriptions.append(prescription)
        return prescription


@dataclass
class InMemoryAnthropometryRepository(AnthropometryRepository):
    """In-memory anthropometry repository for tests."""

    records: dict[tuple[UUID, date], AnthropometricRecord] = field(
        default_factory=dict
    )

    def upsert_record(  # noqa: PLR0913
        self,
        patient_id: UUID,
        recorded_on: date,
        weight_kg: float,
        height_cm: float | None,
        notes: str | None,
    ) -> AnthropometricRecord:
        existing = self.records.get((patient_id, recorded_on))
        record = AnthropometricRecord(
            id=existing.id if existing else uuid4(),
            patient_id=patient_id,
            recorded_on=recorded_on,
            weight_kg=weight_kg,
            height_cm=height_cm,
            notes=notes,
        )
        self.records[(patient_id, recorded_on)] = record
        return record

    def list_records(self, patient_id: UUID) -> list[AnthropometricRecord]:
        rows = [item for key, item in self.records.items() if key[0] == patient_id]
        return sorted(rows, key=lambda item: item.recorded_on)


@dataclass
class InMemoryEnergyRepository(EnergyRepository):
    """In-memory energy estimate repository for tests."""

    saved: list[SavedEnergyCalculation] = field(default_factory=list)

    def save_calculation(
        self,
        patient_id: UUID,
        data: EnergyCalculationInput,
        result: EnergyCalculationResult,
    ) -> SavedEnergyCalculation:
        calculation = SavedEnergyCalculation(
            id=uuid4(), patient_id=patient_id, data=data, result=result
        )
        self.saved.append(calculation)
        return calculation

    def get_latest(self, patient_id: UUID) -> SavedEnergyCalculation | None:
        rows = [item for item in self.saved if item.patient_id == patient_id]
        return rows[-1] if rows else None


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[dict[str, object]] = field(default_factory=list)

    def create_event(  # noqa: PLR0913
        self,
        patient_id: UUID,
        entity_type: str,
        entity_id: UUID,
        action: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        self.events.append(
            {
                "patient_id": patient_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "action": action,
                "before": before,
                "after": after,
            }
        )


def build_diary_service(
    foods: InMemoryFoodRepository | None = None,
    measures: InMemoryMeasureRepository | None = None,
) -> DiaryService:
    return DiaryService(
        food_service=FoodService(foods or InMemoryFoodRepository()),
        measure_service=MeasureService(
            measures or InMemoryMeasureRepository(), InMemoryCache()
        ),
        repository=InMemoryDiaryRepository(),
        audit_service=AuditService(InMemoryAuditRepository()),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    food_service = FoodService(InMemoryFoodRepository())
    measure_service = MeasureService(
        repository=InMemoryMeasureRepository(),
        cache=InMemoryCache(),
        ttl_seconds=settings.measure_cache_ttl_seconds,
    )
    diary_service = DiaryService(
        food_service=food_service,
        measure_service=measure_service,
        repository=InMemoryDiaryRepository(),
        audit_service=AuditService(InMemoryAuditRepository()),
    )
    prescription_service = PrescriptionService(InMemoryPrescriptionRepository())

    async def close_resources() -> None:
        """Nothing to release."""

    return AppContainer(
        settings=settings,
        food_service=food_service,
        measure_service=measure_service,
        diary_service=diary_service,
        prescription_service=prescription_service,
        adherence_service=AdherenceService(
            diary_service=diary_service,
            prescription_service=prescription_service,
            chart_cap=settings.adherence_chart_cap,
        ),
        anthropometry_service=AnthropometryService(InMemoryAnthropometryRepository()),
        energy_service=EnergyService(
            repository=InMemoryEnergyRepository(),
            prescription_service=prescription_service,
        ),
        close_resources=close_resources,
    )
