from __future__ import annotations

from datetime import timezone

from core.domain.audit import AuditLogEntry
from core.domain.enums import AuditEventType
from infra.db.json_fields import from_json, to_json
from infra.db.models import AuditLogORM


def audit_to_orm(entry: AuditLogEntry) -> AuditLogORM:
    occurred = entry.occurred_at
    if occurred.tzinfo is not None:
        occurred = occurred.astimezone(timezone.utc).replace(tzinfo=None)
    return AuditLogORM(
        id=entry.id,
        occurred_at=occurred,
        event_type=AuditEventType(entry.event_type).value,
        action=entry.action,
        actor_user_id=entry.actor_user_id,
        actor_name=entry.actor_name,
        module=entry.module,
        entity_id=entry.entity_id,
        project_id=entry.project_id,
        details_json=to_json(entry.details),
    )


def audit_from_orm(obj: AuditLogORM) -> AuditLogEntry:
    occurred = obj.occurred_at
    if occurred.tzinfo is None:
        occurred = occurred.replace(tzinfo=timezone.utc)
    return AuditLogEntry(
        id=obj.id,
        occurred_at=occurred,
        event_type=AuditEventType(obj.event_type),
        action=obj.action,
        actor_user_id=obj.actor_user_id,
        actor_name=obj.actor_name,
        module=obj.module,
        entity_id=obj.entity_id,
        project_id=obj.project_id,
        details=from_json(obj.details_json),
    )


__all__ = ["audit_to_orm", "audit_from_orm"]
