from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from core.domain.enums import AuditEventType
from core.domain.identifiers import generate_id


@dataclass
class AuditLogEntry:
    id: str
    occurred_at: datetime
    event_type: AuditEventType
    action: str
    actor_user_id: str | None
    actor_name: str | None
    module: str = "SYSTEM"
    entity_id: str | None = None
    project_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def create(
        event_type: AuditEventType,
        action: str,
        *,
        actor_user_id: str | None = None,
        actor_name: str | None = None,
        module: str = "SYSTEM",
        entity_id: str | None = None,
        project_id: str | None = None,
        details: dict[str, Any] | None = None,
        occurred_at: datetime | None = None,
    ) -> "AuditLogEntry":
        return AuditLogEntry(
            id=generate_id(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            event_type=event_type,
            action=action,
            actor_user_id=actor_user_id,
            actor_name=actor_name,
            module=module,
            entity_id=entity_id,
            project_id=project_id,
            details=details or {},
        )


__all__ = ["AuditLogEntry"]
