from __future__ import annotations

from typing import Mapping

from sqlalchemy.orm import Session

from core.domain.clock import Clock, system_clock
from core.events.domain_events import DomainEvents, domain_events
from core.interfaces import ProjectRepository
from core.services.audit.service import AuditService
from core.services.auth.session import UserSessionContext
from core.services.common.base import ServiceBase
from core.services.health.engine import DEFAULT_HEALTH_THRESHOLDS, HealthThresholds
from core.services.project.lifecycle import ProjectLifecycleMixin
from core.services.project.query import ProjectQueryMixin
from core.services.timeline.layout import DEFAULT_ZOOM_MULTIPLIERS, ZoomScale


class ProjectService(ProjectLifecycleMixin, ProjectQueryMixin, ServiceBase):
    """Project service orchestrator: wiring repositories + composing mixins."""

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        user_session: UserSessionContext | None = None,
        audit_service: AuditService | None = None,
        *,
        clock: Clock = system_clock,
        thresholds: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS,
        zoom_multipliers: Mapping[ZoomScale, float] = DEFAULT_ZOOM_MULTIPLIERS,
        events: DomainEvents = domain_events,
    ):
        super().__init__(session, user_session)
        self._project_repo: ProjectRepository = project_repo
        self._audit_service: AuditService | None = audit_service
        self._clock: Clock = clock
        self._thresholds: HealthThresholds = thresholds
        self._zoom_multipliers: Mapping[ZoomScale, float] = zoom_multipliers
        self._events: DomainEvents = events


__all__ = ["ProjectService"]
