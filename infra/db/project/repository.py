from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.domain.project import Project
from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository
from infra.db.baseline.mapper import baseline_from_orm, baseline_to_orm
from infra.db.models import ProjectBaselineORM, ProjectORM, ProjectRiskORM, TaskORM
from infra.db.project.mapper import project_from_orm, project_to_orm, risk_from_orm, risk_to_orm
from infra.db.task.mapper import task_from_orm, task_to_orm


class SqlAlchemyProjectRepository(ProjectRepository):
    """Stores the Project aggregate: project row, ordered tasks, risks, baseline."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))
        self._write_children(project)

    def update(self, project: Project) -> None:
        if self.session.get(ProjectORM, project.id) is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        self.session.merge(project_to_orm(project))

        keep_task_ids = [t.id for t in project.tasks]
        self.session.execute(
            delete(TaskORM)
            .where(TaskORM.project_id == project.id, TaskORM.id.not_in(keep_task_ids))
            .execution_options(synchronize_session="fetch")
        )
        keep_risk_ids = [r.id for r in project.risks]
        self.session.execute(
            delete(ProjectRiskORM)
            .where(ProjectRiskORM.project_id == project.id, ProjectRiskORM.id.not_in(keep_risk_ids))
            .execution_options(synchronize_session="fetch")
        )
        if project.baseline is None:
            existing = self.session.get(ProjectBaselineORM, project.id)
            if existing is not None:
                self.session.delete(existing)
        self._write_children(project)

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return self._load(obj) if obj else None

    def list_all(self) -> List[Project]:
        rows = self.session.execute(select(ProjectORM).order_by(ProjectORM.start_date, ProjectORM.name)).scalars().all()
        return [self._load(row) for row in rows]

    def _write_children(self, project: Project) -> None:
        for position, task in enumerate(project.tasks):
            self.session.merge(task_to_orm(task, position))
        for position, risk in enumerate(project.risks):
            self.session.merge(risk_to_orm(project.id, risk, position))
        if project.baseline is not None:
            self.session.merge(baseline_to_orm(project.id, project.baseline))

    def _load(self, obj: ProjectORM) -> Project:
        task_rows = self.session.execute(
            select(TaskORM).where(TaskORM.project_id == obj.id).order_by(TaskORM.position)
        ).scalars().all()
        risk_rows = self.session.execute(
            select(ProjectRiskORM).where(ProjectRiskORM.project_id == obj.id).order_by(ProjectRiskORM.position)
        ).scalars().all()
        baseline_row = self.session.get(ProjectBaselineORM, obj.id)
        return project_from_orm(
            obj,
            tasks=[task_from_orm(row) for row in task_rows],
            risks=[risk_from_orm(row) for row in risk_rows],
            baseline=baseline_from_orm(baseline_row) if baseline_row else None,
        )


__all__ = ["SqlAlchemyProjectRepository"]
