from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from core.domain.enums import AuditEventType, Module, Permission, TaskStatus
from core.domain.project import Project
from core.exceptions import NotFoundError
from core.services.project.health_sync import ProjectHealthMixin
from core.services.task.reschedule import reschedule
from core.services.timeline.layout import TimelineWindow, ZoomScale, delta_days_from_drop

logger = logging.getLogger(__name__)


class TaskLifecycleMixin(ProjectHealthMixin):
    def update_task_status(self, project_id: str, task_id: str, status: TaskStatus) -> Project:
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="update task status")
        project = self._require_project(project_id)
        task = project.find_task(task_id)
        if task is None:
            raise NotFoundError("Task not found in project.", code="TASK_NOT_FOUND")
        status = TaskStatus(status)
        if task.status == status:
            return project

        tasks = tuple(replace(t, status=status) if t.id == task_id else t for t in project.tasks)
        updated = self._persist_with_health(project, replace(project, tasks=tasks))
        logger.info("Task %s status %s -> %s", task_id, task.status.value, status.value)
        self._events.tasks_changed.emit(project_id)
        return updated

    def reschedule_task(
        self,
        project_id: str,
        task_id: str,
        delta_days: int,
        *,
        source_project_id: Optional[str] = None,
    ) -> Project:
        """
        Apply a drag-release: shift one task by ``delta_days``.

        A drop outside the task's own project lane, or onto a task id the
        project does not contain, returns the project unchanged.
        """
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="reschedule task")
        project = self._require_project(project_id)
        if source_project_id is not None and source_project_id != project_id:
            logger.info(
                "Reschedule rejected: task %s dragged from %s onto %s",
                task_id,
                source_project_id,
                project_id,
            )
            return project

        moved = reschedule(project, task_id, delta_days)
        if moved is project:
            return project

        before = project.find_task(task_id)
        after = moved.find_task(task_id)
        updated = self._persist_with_health(
            project,
            moved,
            event_type=AuditEventType.TASK_DRAG,
            action="task.reschedule",
            entity_id=task_id,
            details={
                "delta_days": int(delta_days),
                "start_date": [before.start_date.isoformat(), after.start_date.isoformat()],
                "due_date": [before.due_date.isoformat(), after.due_date.isoformat()],
            },
        )
        self._events.tasks_changed.emit(project_id)
        return updated

    def reschedule_task_from_drop(
        self,
        project_id: str,
        task_id: str,
        offset_percent: float,
        window: TimelineWindow,
        zoom_scale: ZoomScale | str = ZoomScale.MONTH,
        zoom_level: float = 1.0,
        *,
        source_project_id: Optional[str] = None,
    ) -> Project:
        delta = delta_days_from_drop(
            offset_percent,
            window.start,
            window.end,
            zoom_scale,
            zoom_level,
            self._zoom_multipliers,
        )
        return self.reschedule_task(
            project_id,
            task_id,
            delta,
            source_project_id=source_project_id,
        )


__all__ = ["TaskLifecycleMixin"]
