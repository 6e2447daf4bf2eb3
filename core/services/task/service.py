from __future__ import annotations

from typing import List, Mapping, Optional

from sqlalchemy.orm import Session

from core.domain.clock import Clock, system_clock
from core.domain.enums import Module, Permission, TaskStatus
from core.domain.task import Task
from core.events.domain_events import DomainEvents, domain_events
from core.interfaces import ProjectRepository
from core.services.audit.service import AuditService
from core.services.auth.session import UserSessionContext
from core.services.common.base import ServiceBase
from core.services.health.engine import DEFAULT_HEALTH_THRESHOLDS, HealthThresholds
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import (
    MATCH_ALL,
    SortDirection,
    TaskSortKey,
    open_dependencies,
    select_tasks,
    task_dependencies,
)
from core.services.timeline.layout import DEFAULT_ZOOM_MULTIPLIERS, ZoomScale


class TaskService(TaskLifecycleMixin, ServiceBase):
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

    def list_tasks(
        self,
        project_id: str,
        status: TaskStatus | str | None = MATCH_ALL,
        assignee: Optional[str] = MATCH_ALL,
        sort_key: TaskSortKey | str = TaskSortKey.DUE_DATE,
        sort_direction: SortDirection | str = SortDirection.ASC,
    ) -> List[Task]:
        self._require(Permission.VIEW, Module.PROJECTS, operation_label="list tasks")
        project = self._require_project(project_id)
        return select_tasks(project.tasks, status, assignee, sort_key, sort_direction)

    def get_dependencies(self, project_id: str, task_id: str, *, open_only: bool = False) -> List[Task]:
        self._require(Permission.VIEW, Module.PROJECTS, operation_label="view task dependencies")
        project = self._require_project(project_id)
        if open_only:
            return open_dependencies(project, task_id)
        return task_dependencies(project, task_id)


__all__ = ["TaskService"]
