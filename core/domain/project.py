from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.baseline import ProjectBaseline
from core.domain.enums import HealthTier, ProjectStatus, RiskSeverity
from core.domain.identifiers import generate_id
from core.domain.task import Task


@dataclass(frozen=True)
class ProjectRisk:
    id: str
    description: str
    severity: RiskSeverity = RiskSeverity.LOW

    @staticmethod
    def create(description: str, severity: RiskSeverity = RiskSeverity.LOW) -> "ProjectRisk":
        return ProjectRisk(id=generate_id(), description=description, severity=severity)


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    start_date: date
    end_date: date
    owner: str = ""
    status: ProjectStatus = ProjectStatus.INITIATION
    progress: float = 0.0
    health: HealthTier = HealthTier.ON_TRACK
    budget: float = 0.0
    tasks: tuple[Task, ...] = ()
    risks: tuple[ProjectRisk, ...] = ()
    baseline: Optional[ProjectBaseline] = None

    @staticmethod
    def create(name: str, start_date: date, end_date: date, **extra) -> "Project":
        tasks = tuple(extra.pop("tasks", ()) or ())
        risks = tuple(extra.pop("risks", ()) or ())
        return Project(
            id=generate_id(),
            name=name,
            start_date=start_date,
            end_date=end_date,
            tasks=tasks,
            risks=risks,
            **extra,
        )

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


__all__ = ["Project", "ProjectRisk"]
