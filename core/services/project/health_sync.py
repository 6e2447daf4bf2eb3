from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from core.domain.clock import Clock
from core.domain.enums import AuditEventType, Module
from core.domain.project import Project
from core.events.domain_events import DomainEvents
from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository
from core.services.audit.helpers import record_audit
from core.services.health.engine import HealthThresholds, apply_health

logger = logging.getLogger(__name__)


class ProjectHealthMixin:
    """Shared write path: every project mutation recomputes health before commit."""

    _session: Session
    _project_repo: ProjectRepository
    _clock: Clock
    _thresholds: HealthThresholds
    _events: DomainEvents

    def _require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def _persist_with_health(
        self,
        before: Project,
        after: Project,
        *,
        event_type: AuditEventType | None = None,
        action: str = "",
        details: dict[str, Any] | None = None,
        entity_id: str | None = None,
    ) -> Project:
        refreshed, changed = apply_health(after, self._clock(), self._thresholds)
        try:
            self._project_repo.update(refreshed)
            if event_type is not None:
                record_audit(
                    self,
                    event_type=event_type,
                    action=action,
                    module=Module.PROJECTS.value,
                    entity_id=entity_id or refreshed.id,
                    project_id=refreshed.id,
                    details=details,
                )
            if changed:
                record_audit(
                    self,
                    event_type=AuditEventType.HEALTH_UPDATE,
                    action="project.health",
                    module=Module.PROJECTS.value,
                    entity_id=refreshed.id,
                    project_id=refreshed.id,
                    details={"from": before.health.value, "to": refreshed.health.value},
                )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        if changed:
            logger.info(
                "Project %s health %s -> %s",
                refreshed.id,
                before.health.value,
                refreshed.health.value,
            )
            self._events.health_changed.emit(refreshed.id)
        return refreshed


__all__ = ["ProjectHealthMixin"]
