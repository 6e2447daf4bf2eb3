"""
Project health classification.

Health is derived from three signals and never stored by hand:

* overdue percent: open tasks whose due date is before ``as_of``
* slippage: current end date minus baseline end date, in days
* progress deviation: expected (elapsed share of the schedule) minus actual

The first matching rule wins: off-track, then at-risk, else on-track.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime

from core.domain.enums import HealthTier
from core.domain.project import Project


@dataclass(frozen=True)
class HealthThresholds:
    off_track_overdue_percent: float = 20.0
    off_track_slippage_days: float = 14.0
    off_track_progress_deviation: float = 25.0
    at_risk_overdue_percent: float = 5.0
    at_risk_slippage_days: float = 3.0
    at_risk_progress_deviation: float = 10.0


DEFAULT_HEALTH_THRESHOLDS = HealthThresholds()


@dataclass(frozen=True)
class HealthSignals:
    overdue_percent: float
    slippage_days: int
    expected_progress: float
    progress_deviation: float


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def expected_progress(start: date, end: date, as_of: date) -> float:
    span = (end - start).days
    if span <= 0:
        # Zero-length schedule counts as fully elapsed.
        return 100.0
    elapsed = (as_of - start).days
    return max(0.0, min(100.0, elapsed / span * 100.0))


def compute_health_signals(project: Project, as_of: date | datetime) -> HealthSignals:
    today = _as_date(as_of)
    tasks = project.tasks

    overdue = sum(
        1
        for t in tasks
        if not t.is_done and t.due_date is not None and t.due_date < today
    )
    overdue_percent = overdue / len(tasks) * 100.0 if tasks else 0.0

    baseline_end = project.baseline.end_date if project.baseline else project.end_date
    slippage_days = (project.end_date - baseline_end).days

    expected = expected_progress(project.start_date, project.end_date, today)
    return HealthSignals(
        overdue_percent=overdue_percent,
        slippage_days=slippage_days,
        expected_progress=expected,
        progress_deviation=expected - float(project.progress or 0.0),
    )


def tier_for_signals(
    signals: HealthSignals,
    thresholds: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS,
) -> HealthTier:
    if (
        signals.overdue_percent > thresholds.off_track_overdue_percent
        or signals.slippage_days > thresholds.off_track_slippage_days
        or signals.progress_deviation > thresholds.off_track_progress_deviation
    ):
        return HealthTier.OFF_TRACK
    if (
        signals.overdue_percent > thresholds.at_risk_overdue_percent
        or signals.slippage_days > thresholds.at_risk_slippage_days
        or signals.progress_deviation > thresholds.at_risk_progress_deviation
    ):
        return HealthTier.AT_RISK
    return HealthTier.ON_TRACK


def classify_health(
    project: Project,
    as_of: date | datetime,
    thresholds: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS,
) -> HealthTier:
    return tier_for_signals(compute_health_signals(project, as_of), thresholds)


def apply_health(
    project: Project,
    as_of: date | datetime,
    thresholds: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS,
) -> tuple[Project, bool]:
    """Return the project with its health refreshed and whether it changed.

    The same instance is returned when the tier is unchanged so callers do
    not emit spurious change notifications.
    """
    tier = classify_health(project, as_of, thresholds)
    if tier == project.health:
        return project, False
    return replace(project, health=tier), True


__all__ = [
    "HealthThresholds",
    "DEFAULT_HEALTH_THRESHOLDS",
    "HealthSignals",
    "expected_progress",
    "compute_health_signals",
    "tier_for_signals",
    "classify_health",
    "apply_health",
]
