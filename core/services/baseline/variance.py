from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.baseline import ProjectBaseline
from core.domain.enums import VarianceDirection
from core.domain.project import Project


@dataclass(frozen=True)
class VarianceResult:
    schedule_variance_days: int
    direction: VarianceDirection
    start_variance_days: int = 0
    budget_variance: float = 0.0
    progress_variance: float = 0.0
    baseline_timestamp: Optional[datetime] = None


def direction_for(variance_days: int) -> VarianceDirection:
    if variance_days > 0:
        return VarianceDirection.BEHIND
    if variance_days < 0:
        return VarianceDirection.AHEAD
    return VarianceDirection.NONE


def compute_variance(project: Project) -> VarianceResult:
    """
    Compare the current schedule against the active baseline.

    Without a baseline the current values stand in for it, so every
    variance is zero.
    """
    baseline = project.baseline
    if baseline is None:
        return VarianceResult(schedule_variance_days=0, direction=VarianceDirection.NONE)

    schedule_days = (project.end_date - baseline.end_date).days
    return VarianceResult(
        schedule_variance_days=schedule_days,
        direction=direction_for(schedule_days),
        start_variance_days=(project.start_date - baseline.start_date).days,
        budget_variance=float(project.budget or 0.0) - float(baseline.budget or 0.0),
        progress_variance=float(project.progress or 0.0) - float(baseline.progress or 0.0),
        baseline_timestamp=baseline.timestamp,
    )


def snapshot_baseline(project: Project, now: datetime) -> Project:
    baseline = ProjectBaseline(
        start_date=project.start_date,
        end_date=project.end_date,
        budget=float(project.budget or 0.0),
        progress=float(project.progress or 0.0),
        timestamp=now,
    )
    return replace(project, baseline=baseline)


__all__ = ["VarianceResult", "direction_for", "compute_variance", "snapshot_baseline"]
