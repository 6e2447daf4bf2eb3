# core/services/baseline/service.py
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from core.domain.clock import Clock, system_clock
from core.domain.enums import AuditEventType, Module, Permission
from core.domain.project import Project
from core.events.domain_events import DomainEvents, domain_events
from core.interfaces import ProjectRepository
from core.services.audit.service import AuditService
from core.services.auth.session import UserSessionContext
from core.services.baseline.variance import VarianceResult, compute_variance, snapshot_baseline
from core.services.common.base import ServiceBase
from core.services.health.engine import DEFAULT_HEALTH_THRESHOLDS, HealthThresholds
from core.services.project.health_sync import ProjectHealthMixin

logger = logging.getLogger(__name__)


class BaselineService(ProjectHealthMixin, ServiceBase):
    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        user_session: UserSessionContext | None = None,
        audit_service: AuditService | None = None,
        *,
        clock: Clock = system_clock,
        thresholds: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS,
        events: DomainEvents = domain_events,
    ):
        super().__init__(session, user_session)
        self._project_repo: ProjectRepository = project_repo
        self._audit_service: AuditService | None = audit_service
        self._clock: Clock = clock
        self._thresholds: HealthThresholds = thresholds
        self._events: DomainEvents = events

    def snapshot_baseline(self, project_id: str) -> Project:
        """Freeze the current schedule, budget and progress as the new baseline."""
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="snapshot baseline")
        project = self._require_project(project_id)
        snapped = snapshot_baseline(project, self._clock())
        baseline = snapped.baseline
        previous = project.baseline

        updated = self._persist_with_health(
            project,
            snapped,
            event_type=AuditEventType.PROJECT_BASELINE,
            action="baseline.snapshot",
            details={
                "start_date": baseline.start_date.isoformat(),
                "end_date": baseline.end_date.isoformat(),
                "budget": baseline.budget,
                "progress": baseline.progress,
                "timestamp": baseline.timestamp.isoformat(),
                "replaced": previous.timestamp.isoformat() if previous else None,
            },
        )
        logger.info("Baseline snapshot for project %s at %s", project_id, baseline.timestamp.isoformat())
        self._events.baseline_changed.emit(project_id)
        return updated

    def get_variance(self, project_id: str) -> VarianceResult:
        self._require(Permission.VIEW, Module.PROJECTS, operation_label="view baseline variance")
        return compute_variance(self._require_project(project_id))


__all__ = ["BaselineService"]
