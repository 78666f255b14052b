"""Audit trail for food diary changes."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


class AuditRepository(Protocol):
    """Persistence interface for audit events."""

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


@dataclass
class AuditService:
    """Service for recording diary audit events."""

    repository: AuditRepository

    def record_event(  # noqa: PLR0913
        self,
        patient_id: UUID,
        entity_type: str,
        entity_id: UUID,
        action: str,
        before: dict[str, object] | None = None,
        after: dict[str, object] | None = None,
    ) -> None:
        """Persist an audit event."""
        self.repository.create_event(
            patient_id=patient_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            before=before,
            after=after,
        )
