from __future__ import annotations

import csv
import io
import json
from typing import Any, List

from sqlalchemy.orm import Session

from core.domain.audit import AuditLogEntry
from core.domain.clock import Clock, system_clock
from core.domain.enums import AuditEventType, Module, Permission
from core.interfaces import AuditLogRepository
from core.services.auth.session import UserSessionContext
from core.services.common.base import ServiceBase

AUDIT_EXPORT_COLUMNS = [
    "occurred_at",
    "event_type",
    "action",
    "actor",
    "module",
    "entity_id",
    "project_id",
    "details",
]


class AuditService(ServiceBase):
    """Audit sink: stores the facts other services report after a mutation."""

    def __init__(
        self,
        session: Session,
        audit_repo: AuditLogRepository,
        user_session: UserSessionContext | None = None,
        clock: Clock = system_clock,
    ):
        super().__init__(session, user_session)
        self._audit_repo = audit_repo
        self._clock = clock

    def record(
        self,
        *,
        event_type: AuditEventType,
        action: str,
        module: str = "SYSTEM",
        entity_id: str | None = None,
        project_id: str | None = None,
        details: dict[str, Any] | None = None,
        commit: bool = False,
    ) -> AuditLogEntry:
        user = self._user_session.user if self._user_session else None
        entry = AuditLogEntry.create(
            event_type=event_type,
            action=action,
            actor_user_id=user.id if user else None,
            actor_name=user.name if user else None,
            module=module,
            entity_id=entity_id,
            project_id=project_id,
            details=details or {},
            occurred_at=self._clock(),
        )
        self._audit_repo.add(entry)
        if commit:
            self.commit()
        return entry

    def list_recent(
        self,
        limit: int = 200,
        *,
        project_id: str | None = None,
        event_type: AuditEventType | None = None,
    ) -> List[AuditLogEntry]:
        self._require(Permission.VIEW_AUDIT_LOGS, Module.ADMIN, operation_label="view audit logs")
        return self._audit_repo.list_recent(
            limit=limit,
            project_id=project_id,
            event_type=event_type.value if event_type else None,
        )

    def export_recent(
        self,
        limit: int = 200,
        *,
        project_id: str | None = None,
        event_type: AuditEventType | None = None,
    ) -> str:
        """CSV text of the same entries ``list_recent`` returns, newest first."""
        self._require(Permission.EXPORT, None, operation_label="export audit logs")
        entries = self.list_recent(limit, project_id=project_id, event_type=event_type)
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=AUDIT_EXPORT_COLUMNS)
        writer.writeheader()
        for entry in entries:
            writer.writerow(
                {
                    "occurred_at": entry.occurred_at.isoformat(),
                    "event_type": AuditEventType(entry.event_type).value,
                    "action": entry.action,
                    "actor": entry.actor_name or "",
                    "module": entry.module,
                    "entity_id": entry.entity_id or "",
                    "project_id": entry.project_id or "",
                    "details": json.dumps(entry.details, sort_keys=True, default=str),
                }
            )
        return buffer.getvalue()


__all__ = ["AUDIT_EXPORT_COLUMNS", "AuditService"]
