from __future__ import annotations

from typing import Any

from core.domain.enums import AuditEventType


def record_audit(
    owner: object,
    *,
    event_type: AuditEventType,
    action: str,
    module: str = "SYSTEM",
    entity_id: str | None = None,
    project_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    audit_service = getattr(owner, "_audit_service", None)
    if audit_service is None:
        return
    audit_service.record(
        event_type=event_type,
        action=action,
        module=module,
        entity_id=entity_id,
        project_id=project_id,
        details=details or {},
    )


__all__ = ["record_audit"]
