from __future__ import annotations

from core.domain.task import Task
from infra.db.json_fields import list_from_json, to_json
from infra.db.models import TaskORM


def task_to_orm(task: Task, position: int) -> TaskORM:
    return TaskORM(
        id=task.id,
        project_id=task.project_id,
        position=position,
        title=task.title,
        status=task.status,
        assignee=task.assignee,
        start_date=task.start_date,
        due_date=task.due_date,
        dependencies_json=to_json(list(task.dependencies)),
        parent_id=task.parent_id,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        project_id=obj.project_id,
        title=obj.title,
        status=obj.status,
        assignee=obj.assignee or "",
        start_date=obj.start_date,
        due_date=obj.due_date,
        dependencies=tuple(str(d) for d in list_from_json(obj.dependencies_json)),
        parent_id=obj.parent_id,
    )


__all__ = ["task_to_orm", "task_from_orm"]
