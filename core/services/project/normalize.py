from __future__ import annotations

from dataclasses import replace

from core.domain.project import Project
from core.exceptions import ValidationError


def normalize_project(project: Project) -> Project:
    """
    Fill missing task dates from the owning project and drop dependency ids
    that do not point at a task of the same project. Applied once when a
    project enters the core, so downstream functions never see ``None`` dates.
    """
    task_ids = {t.id for t in project.tasks}
    tasks = []
    changed = False
    for task in project.tasks:
        deps = tuple(d for d in task.dependencies if d in task_ids and d != task.id)
        normalized = replace(
            task,
            project_id=project.id,
            start_date=task.start_date or project.start_date,
            due_date=task.due_date or project.end_date,
            dependencies=deps,
        )
        changed = changed or normalized != task
        tasks.append(normalized)
    if not changed:
        return project
    return replace(project, tasks=tuple(tasks))


def validate_project(project: Project) -> None:
    if not project.name or not project.name.strip():
        raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")
    if project.end_date < project.start_date:
        raise ValidationError(
            f"Project end date ({project.end_date}) can not be before start ({project.start_date})",
            code="PROJECT_INVALID_DATES",
        )
    validate_progress(project.progress)
    seen: set[str] = set()
    for task in project.tasks:
        if task.id in seen:
            raise ValidationError(f"Duplicate task id {task.id}.", code="TASK_DUPLICATE_ID")
        seen.add(task.id)
        if task.start_date and task.due_date and task.due_date < task.start_date:
            raise ValidationError(
                f"Task '{task.title}' is due before it starts.",
                code="TASK_INVALID_DATE",
            )


def validate_progress(progress: float) -> None:
    if progress is None or not (0.0 <= float(progress) <= 100.0):
        raise ValidationError("Progress must be between 0 and 100.", code="PROGRESS_OUT_OF_RANGE")


__all__ = ["normalize_project", "validate_project", "validate_progress"]
