"""Supabase repository for diary audit events."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutricoach.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository writing to the meal audit log."""

    client: Client

    def create_event(  # noqa: PLR0913
        self,
        patient_id: UUID,
        entity_type: str,
        entity_id: UUID,
        action: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Create an audit event row."""
        self.client.table("meal_audit_log").insert(
            {
                "patient_id": str(patient_id),
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "action": action,
                "details": {"before": before, "after": after},
            }
        ).execute()
