from __future__ import annotations

from datetime import timezone

from core.domain.baseline import ProjectBaseline
from infra.db.models import ProjectBaselineORM


def baseline_to_orm(project_id: str, baseline: ProjectBaseline) -> ProjectBaselineORM:
    stamp = baseline.timestamp
    if stamp.tzinfo is not None:
        # SQLite DateTime is naive; store UTC.
        stamp = stamp.astimezone(timezone.utc).replace(tzinfo=None)
    return ProjectBaselineORM(
        project_id=project_id,
        start_date=baseline.start_date,
        end_date=baseline.end_date,
        budget=baseline.budget,
        progress=baseline.progress,
        timestamp=stamp,
    )


def baseline_from_orm(obj: ProjectBaselineORM) -> ProjectBaseline:
    stamp = obj.timestamp
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return ProjectBaseline(
        start_date=obj.start_date,
        end_date=obj.end_date,
        budget=float(obj.budget or 0.0),
        progress=float(obj.progress or 0.0),
        timestamp=stamp,
    )


__all__ = ["baseline_to_orm", "baseline_from_orm"]
