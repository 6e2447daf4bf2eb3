from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import TaskStatus
from core.domain.identifiers import generate_id


@dataclass(frozen=True)
class Task:
    id: str
    project_id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    assignee: str = ""
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    dependencies: tuple[str, ...] = ()
    parent_id: Optional[str] = None

    @staticmethod
    def create(project_id: str, title: str, **extra) -> "Task":
        deps = extra.pop("dependencies", ())
        return Task(
            id=generate_id(),
            project_id=project_id,
            title=title,
            dependencies=tuple(deps or ()),
            **extra,
        )

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


__all__ = ["Task"]
