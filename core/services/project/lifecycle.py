from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from core.domain.enums import Module, Permission, ProjectStatus, TaskStatus
from core.domain.project import Project, ProjectRisk
from core.domain.task import Task
from core.events.domain_events import DomainEvents
from core.exceptions import ValidationError
from core.interfaces import ProjectRepository
from core.services.health.engine import apply_health
from core.services.project.health_sync import ProjectHealthMixin
from core.services.project.normalize import normalize_project, validate_progress, validate_project

logger = logging.getLogger(__name__)


class ProjectLifecycleMixin(ProjectHealthMixin):
    _project_repo: ProjectRepository
    _events: DomainEvents

    def create_project(
        self,
        name: str,
        start_date: date,
        end_date: date,
        *,
        owner: str = "",
        budget: float = 0.0,
        status: ProjectStatus = ProjectStatus.INITIATION,
        progress: float = 0.0,
        tasks: Iterable[Task] = (),
        risks: Iterable[ProjectRisk] = (),
    ) -> Project:
        self._require(Permission.CREATE, Module.PROJECTS, operation_label="create project")
        project = Project.create(
            name=(name or "").strip(),
            start_date=start_date,
            end_date=end_date,
            owner=(owner or "").strip(),
            budget=float(budget or 0.0),
            status=status,
            progress=float(progress or 0.0),
        )
        project = replace(
            project,
            tasks=tuple(replace(t, project_id=project.id) for t in tasks),
            risks=tuple(risks),
        )
        validate_project(project)
        project, _ = apply_health(normalize_project(project), self._clock(), self._thresholds)

        try:
            self._project_repo.add(project)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise
        logger.info("Created project %s - %s", project.id, project.name)
        self._events.project_changed.emit(project.id)
        return project

    def add_task(
        self,
        project_id: str,
        title: str,
        *,
        assignee: str = "",
        status: TaskStatus = TaskStatus.TODO,
        start_date: Optional[date] = None,
        due_date: Optional[date] = None,
        dependencies: Iterable[str] = (),
        parent_id: Optional[str] = None,
    ) -> Task:
        self._require(Permission.CREATE, Module.PROJECTS, operation_label="add task")
        project = self._require_project(project_id)
        if not (title or "").strip():
            raise ValidationError("Task title cannot be empty.", code="TASK_TITLE_EMPTY")
        if parent_id is not None and project.find_task(parent_id) is None:
            raise ValidationError("Parent task must belong to the same project.", code="TASK_PARENT_INVALID")

        task = Task.create(
            project_id,
            title.strip(),
            assignee=(assignee or "").strip(),
            status=status,
            start_date=start_date,
            due_date=due_date,
            dependencies=tuple(dependencies),
            parent_id=parent_id,
        )
        candidate = replace(project, tasks=project.tasks + (task,))
        validate_project(candidate)
        updated = self._persist_with_health(project, normalize_project(candidate))
        self._events.tasks_changed.emit(project_id)
        return updated.find_task(task.id)

    def update_progress(self, project_id: str, progress: float) -> Project:
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="update progress")
        validate_progress(progress)
        project = self._require_project(project_id)
        updated = self._persist_with_health(project, replace(project, progress=float(progress)))
        self._events.project_changed.emit(project_id)
        return updated

    def set_status(self, project_id: str, status: ProjectStatus) -> Project:
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="set project status")
        project = self._require_project(project_id)
        updated = self._persist_with_health(project, replace(project, status=ProjectStatus(status)))
        self._events.project_changed.emit(project_id)
        return updated

    def refresh_health(self, project_id: str) -> Project:
        """Re-evaluate health against the current clock (e.g. on a daily tick)."""
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="refresh health")
        project = self._require_project(project_id)
        return self._persist_with_health(project, project)

    def refresh_all_health(self) -> list[Project]:
        self._require(Permission.EDIT, Module.PROJECTS, operation_label="refresh health")
        return [self._persist_with_health(p, p) for p in self._project_repo.list_all()]


__all__ = ["ProjectLifecycleMixin"]
