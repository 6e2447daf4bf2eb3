from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Sequence

from core.domain.enums import HealthTier, TaskStatus
from core.domain.project import Project
from core.domain.task import Task

MATCH_ALL = "ALL"


class TaskSortKey(str, Enum):
    DUE_DATE = "dueDate"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _matches(value: str, wanted: Optional[str]) -> bool:
    if wanted is None or wanted == MATCH_ALL:
        return True
    return value == wanted


def _due_key(task: Task) -> str:
    return task.due_date.isoformat() if task.due_date else ""


def _status_key(task: Task) -> str:
    return TaskStatus(task.status).value


def select_tasks(
    tasks: Iterable[Task],
    status_filter: TaskStatus | str | None = MATCH_ALL,
    assignee_filter: Optional[str] = MATCH_ALL,
    sort_key: TaskSortKey | str = TaskSortKey.DUE_DATE,
    sort_direction: SortDirection | str = SortDirection.ASC,
) -> List[Task]:
    """Filter by status/assignee and order by due date or status.

    ``sorted`` is stable for both directions (``reverse=True`` keeps ties in
    input order), so equal keys keep their original relative order.
    """
    status_value = status_filter.value if isinstance(status_filter, TaskStatus) else status_filter
    selected = [
        t
        for t in tasks
        if _matches(_status_key(t), status_value) and _matches(t.assignee, assignee_filter)
    ]
    key = _status_key if TaskSortKey(sort_key) == TaskSortKey.STATUS else _due_key
    descending = SortDirection(sort_direction) == SortDirection.DESC
    return sorted(selected, key=key, reverse=descending)


def list_assignees(tasks: Iterable[Task]) -> List[str]:
    return sorted({t.assignee for t in tasks if t.assignee})


def filter_projects(
    projects: Iterable[Project],
    health_filter: HealthTier | str | None = MATCH_ALL,
    search: str = "",
) -> List[Project]:
    needle = (search or "").strip().lower()
    health_value = health_filter.value if isinstance(health_filter, HealthTier) else health_filter
    return [
        p
        for p in projects
        if needle in p.name.lower() and _matches(HealthTier(p.health).value, health_value)
    ]


def task_dependencies(project: Project, task_id: str) -> List[Task]:
    """Resolve a task's dependency ids against its own project only."""
    task = project.find_task(task_id)
    if task is None:
        return []
    by_id = {t.id: t for t in project.tasks}
    return [by_id[dep_id] for dep_id in task.dependencies if dep_id in by_id]


def open_dependencies(project: Project, task_id: str) -> List[Task]:
    return [t for t in task_dependencies(project, task_id) if not t.is_done]


def subtasks(project: Project, parent_id: Optional[str]) -> List[Task]:
    return [t for t in project.tasks if t.parent_id == parent_id]


def task_tree(project: Project) -> List[tuple[int, Task]]:
    """Depth-first (depth, task) pairs, roots first, in project order.

    Tasks whose parent is missing from the project are treated as roots.
    """
    known = {t.id for t in project.tasks}
    out: List[tuple[int, Task]] = []
    seen: set[str] = set()

    def _walk(items: Sequence[Task], depth: int) -> None:
        for item in items:
            if item.id in seen:
                continue
            seen.add(item.id)
            out.append((depth, item))
            _walk(subtasks(project, item.id), depth + 1)

    roots = [t for t in project.tasks if t.parent_id is None or t.parent_id not in known]
    _walk(roots, 0)
    return out


__all__ = [
    "MATCH_ALL",
    "TaskSortKey",
    "SortDirection",
    "select_tasks",
    "list_assignees",
    "filter_projects",
    "task_dependencies",
    "open_dependencies",
    "subtasks",
    "task_tree",
]
