from __future__ import annotations

from typing import Iterable, List

from core.domain.enums import HealthTier, Module, Permission
from core.domain.project import Project
from core.interfaces import ProjectRepository
from core.services.baseline.variance import VarianceResult, compute_variance
from core.services.health.engine import HealthSignals, HealthThresholds, compute_health_signals
from core.services.task.query import MATCH_ALL, filter_projects
from core.services.timeline.layout import (
    TimelineRow,
    TimelineWindow,
    ZoomScale,
    build_timeline_rows,
)


class ProjectQueryMixin:
    _project_repo: ProjectRepository
    _thresholds: HealthThresholds

    def get_project(self, project_id: str) -> Project:
        self._require(Permission.VIEW, Module.PROJECTS, operation_label="view project")
        return self._require_project(project_id)

    def list_projects(
        self,
        health_filter: HealthTier | str | None = MATCH_ALL,
        search: str = "",
    ) -> List[Project]:
        self._require(Permission.VIEW, Module.PROJECTS, operation_label="list projects")
        return filter_projects(self._project_repo.list_all(), health_filter, search)

    def get_health_signals(self, project_id: str) -> HealthSignals:
        project = self.get_project(project_id)
        return compute_health_signals(project, self._clock())

    def get_variance(self, project_id: str) -> VarianceResult:
        return compute_variance(self.get_project(project_id))

    def timeline_rows(
        self,
        window: TimelineWindow | None = None,
        zoom_scale: ZoomScale | str = ZoomScale.MONTH,
        zoom_level: float = 1.0,
        *,
        health_filter: HealthTier | str | None = MATCH_ALL,
        search: str = "",
        collapsed: Iterable[str] = (),
    ) -> List[TimelineRow]:
        projects = self.list_projects(health_filter, search)
        window = window or TimelineWindow.covering(projects, self._clock().year)
        return build_timeline_rows(
            projects,
            window,
            zoom_scale,
            zoom_level,
            collapsed=collapsed,
            multipliers=self._zoom_multipliers,
        )


__all__ = ["ProjectQueryMixin"]
