from core.services.task.query import (
    MATCH_ALL,
    SortDirection,
    TaskSortKey,
    filter_projects,
    list_assignees,
    open_dependencies,
    select_tasks,
    subtasks,
    task_dependencies,
    task_tree,
)
from core.services.task.reschedule import reschedule
from core.services.task.service import TaskService

__all__ = [
    "MATCH_ALL",
    "SortDirection",
    "TaskSortKey",
    "filter_projects",
    "list_assignees",
    "open_dependencies",
    "select_tasks",
    "subtasks",
    "task_dependencies",
    "task_tree",
    "reschedule",
    "TaskService",
]
