from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta

from core.domain.project import Project

logger = logging.getLogger(__name__)


def reschedule(project: Project, task_id: str, delta_days: int) -> Project:
    """
    Shift one task's start and due dates by ``delta_days`` calendar days.

    The task must belong to ``project``; anything else returns the project
    unchanged. Dates are not clamped to the project envelope and health is
    left for the caller to recompute.
    """
    task = project.find_task(task_id)
    if task is None or task.project_id != project.id:
        logger.debug("Reschedule ignored: task %s is not in project %s", task_id, project.id)
        return project
    delta = timedelta(days=int(delta_days))
    if not delta:
        return project

    moved = replace(
        task,
        start_date=(task.start_date or project.start_date) + delta,
        due_date=(task.due_date or project.end_date) + delta,
    )
    tasks = tuple(moved if t.id == task_id else t for t in project.tasks)
    return replace(project, tasks=tasks)


__all__ = ["reschedule"]
