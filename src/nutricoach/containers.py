"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutricoach.adapters.supabase_anthropometry_repository import (
    SupabaseAnthropometryRepository,
)
from nutricoach.adapters.supabase_audit_repository import SupabaseAuditRepository
from nutricoach.adapters.supabase_diary_repository import SupabaseDiaryRepository
from nutricoach.adapters.supabase_energy_repository import SupabaseEnergyRepository
from nutricoach.adapters.supabase_food_repository import SupabaseFoodRepository
from nutricoach.adapters.supabase_measure_repository import SupabaseMeasureRepository
from nutricoach.adapters.supabase_prescription_repository import (
    SupabasePrescriptionRepository,
)
from nutricoach.config import Settings
from nutricoach.services.adherence import AdherenceService
from nutricoach.services.anthropometry import AnthropometryService
from nutricoach.services.audit import AuditService
from nutricoach.services.cache import InMemoryCache
from nutricoach.services.diary import DiaryService
from nutricoach.services.energy import EnergyService
from nutricoach.services.foods import FoodService
from nutricoach.services.measures import MeasureService
from nutricoach.services.prescriptions import PrescriptionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    measure_service: MeasureService
    diary_service: DiaryService
    prescription_service: PrescriptionService
    adherence_service: AdherenceService
    anthropometry_service: AnthropometryService
    energy_service: EnergyService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_service = FoodService(SupabaseFoodRepository(supabase_client))
    measure_service = MeasureService(
        repository=SupabaseMeasureRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.measure_cache_ttl_seconds,
    )
    diary_service = DiaryService(
        food_service=food_service,
        measure_service=measure_service,
        repository=SupabaseDiaryRepository(supabase_client),
        audit_service=AuditService(SupabaseAuditRepository(supabase_client)),
    )
    prescription_service = PrescriptionService(
        SupabasePrescriptionRepository(supabase_client)
    )
    adherence_service = AdherenceService(
        diary_service=diary_service,
        prescription_service=prescription_service,
        chart_cap=resolved_settings.adherence_chart_cap,
    )
    anthropometry_service = AnthropometryService(
        SupabaseAnthropometryRepository(supabase_client)
    )
    energy_service = EnergyService(
        repository=SupabaseEnergyRepository(supabase_client),
        prescription_service=prescription_service,
    )

    async def close_resources() -> None:
        """Nothing to release; the Supabase client opens no long-lived sessions."""

    return AppContainer(
        settings=resolved_settings,
        food_service=food_service,
        measure_service=measure_service,
        diary_service=diary_service,
        prescription_service=prescription_service,
        adherence_service=adherence_service,
        anthropometry_service=anthropometry_service,
        energy_service=energy_service,
        close_resources=close_resources,
    )
