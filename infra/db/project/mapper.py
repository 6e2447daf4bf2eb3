from __future__ import annotations

from typing import Iterable, Optional

from core.domain.baseline import ProjectBaseline
from core.domain.project import Project, ProjectRisk
from core.domain.task import Task
from core.services.project.normalize import normalize_project
from infra.db.models import ProjectORM, ProjectRiskORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        name=project.name,
        owner=project.owner,
        status=project.status,
        progress=project.progress,
        health=project.health,
        start_date=project.start_date,
        end_date=project.end_date,
        budget=project.budget,
    )


def project_from_orm(
    obj: ProjectORM,
    tasks: Iterable[Task] = (),
    risks: Iterable[ProjectRisk] = (),
    baseline: Optional[ProjectBaseline] = None,
) -> Project:
    project = Project(
        id=obj.id,
        name=obj.name,
        owner=obj.owner or "",
        status=obj.status,
        progress=float(obj.progress or 0.0),
        health=obj.health,
        start_date=obj.start_date,
        end_date=obj.end_date,
        budget=float(obj.budget or 0.0),
        tasks=tuple(tasks),
        risks=tuple(risks),
        baseline=baseline,
    )
    # Loading is the ingestion boundary: task dates get their defaults here.
    return normalize_project(project)


def risk_to_orm(project_id: str, risk: ProjectRisk, position: int) -> ProjectRiskORM:
    return ProjectRiskORM(
        id=risk.id,
        project_id=project_id,
        position=position,
        description=risk.description,
        severity=risk.severity,
    )


def risk_from_orm(obj: ProjectRiskORM) -> ProjectRisk:
    return ProjectRisk(id=obj.id, description=obj.description, severity=obj.severity)


__all__ = ["project_to_orm", "project_from_orm", "risk_to_orm", "risk_from_orm"]
