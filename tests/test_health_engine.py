from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from core.domain.baseline import ProjectBaseline
from core.domain.enums import HealthTier, TaskStatus
from core.domain.project import Project
from core.domain.task import Task
from core.services.health import (
    DEFAULT_HEALTH_THRESHOLDS,
    HealthSignals,
    HealthThresholds,
    apply_health,
    classify_health,
    compute_health_signals,
    expected_progress,
    tier_for_signals,
)

AS_OF = date(2024, 7, 1)


def _project(progress: float = 10.0, **extra) -> Project:
    return Project.create("Health", date(2024, 1, 1), date(2024, 12, 31), progress=progress, **extra)


def _tasks(project_id: str, total: int, overdue: int) -> tuple[Task, ...]:
    tasks = []
    for i in range(total):
        due = date(2024, 6, 1) if i < overdue else date(2024, 9, 1)
        tasks.append(
            Task.create(project_id, f"T{i}", start_date=date(2024, 1, 1), due_date=due)
        )
    return tuple(tasks)


def _baseline(end: date) -> ProjectBaseline:
    return ProjectBaseline(
        start_date=date(2024, 1, 1),
        end_date=end,
        budget=0.0,
        progress=0.0,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_behind_schedule_progress_is_off_track():
    project = _project(progress=10)
    signals = compute_health_signals(project, AS_OF)

    assert signals.expected_progress == pytest.approx(182 / 365 * 100)
    assert signals.progress_deviation == pytest.approx(182 / 365 * 100 - 10)
    assert signals.overdue_percent == 0
    assert signals.slippage_days == 0
    assert classify_health(project, AS_OF) == HealthTier.OFF_TRACK


def test_progress_close_to_expected_is_on_track():
    project = _project(progress=45)
    assert compute_health_signals(project, AS_OF).progress_deviation == pytest.approx(182 / 365 * 100 - 45)
    assert classify_health(project, AS_OF) == HealthTier.ON_TRACK


def test_moderate_progress_gap_is_at_risk():
    assert classify_health(_project(progress=35), AS_OF) == HealthTier.AT_RISK


def test_overdue_ratio_thresholds():
    base = _project(progress=50)
    at_risk = replace(base, tasks=_tasks(base.id, total=10, overdue=1))
    off_track = replace(base, tasks=_tasks(base.id, total=10, overdue=3))
    boundary = replace(base, tasks=_tasks(base.id, total=10, overdue=2))

    assert classify_health(at_risk, AS_OF) == HealthTier.AT_RISK
    assert classify_health(off_track, AS_OF) == HealthTier.OFF_TRACK
    # exactly 20% is not strictly greater than the off-track threshold
    assert classify_health(boundary, AS_OF) == HealthTier.AT_RISK


def test_done_tasks_and_tasks_due_today_are_not_overdue():
    base = _project(progress=50)
    tasks = (
        Task.create(base.id, "done late", status=TaskStatus.DONE, due_date=date(2024, 3, 1)),
        Task.create(base.id, "due today", due_date=AS_OF),
        Task.create(base.id, "no due date"),
    )
    signals = compute_health_signals(replace(base, tasks=tasks), AS_OF)
    assert signals.overdue_percent == 0


def test_slippage_against_baseline():
    base = _project(progress=50)
    assert classify_health(replace(base, baseline=_baseline(date(2024, 12, 27))), AS_OF) == HealthTier.AT_RISK
    assert classify_health(replace(base, baseline=_baseline(date(2024, 12, 16))), AS_OF) == HealthTier.OFF_TRACK
    assert compute_health_signals(replace(base, baseline=_baseline(date(2024, 12, 16))), AS_OF).slippage_days == 15


def test_pulled_in_end_date_is_negative_slippage():
    base = _project(progress=50, baseline=_baseline(date(2025, 1, 31)))
    signals = compute_health_signals(base, AS_OF)
    assert signals.slippage_days == -31
    assert classify_health(base, AS_OF) == HealthTier.ON_TRACK


def test_zero_length_project_counts_as_fully_elapsed():
    assert expected_progress(date(2024, 5, 1), date(2024, 5, 1), date(2024, 1, 1)) == 100.0
    project = Project.create("Milestone", date(2024, 5, 1), date(2024, 5, 1), progress=100)
    assert classify_health(project, AS_OF) == HealthTier.ON_TRACK
    assert classify_health(replace(project, progress=50), AS_OF) == HealthTier.OFF_TRACK


def test_expected_progress_is_clamped():
    assert expected_progress(date(2024, 1, 1), date(2024, 12, 31), date(2023, 6, 1)) == 0.0
    assert expected_progress(date(2024, 1, 1), date(2024, 12, 31), date(2025, 6, 1)) == 100.0


def test_datetime_as_of_uses_calendar_day():
    project = _project(progress=45)
    late_evening = datetime(2024, 7, 1, 23, 59, tzinfo=timezone.utc)
    assert classify_health(project, late_evening) == classify_health(project, AS_OF)


@pytest.mark.parametrize("field", ["overdue_percent", "slippage_days", "progress_deviation"])
def test_severity_never_decreases_as_one_signal_grows(field):
    values = [-10, 0, 3, 4, 5, 6, 10, 11, 14, 15, 20, 21, 25, 26, 40, 100]
    previous = -1
    for value in values:
        kwargs = {"overdue_percent": 0.0, "slippage_days": 0, "expected_progress": 50.0, "progress_deviation": 0.0}
        kwargs[field] = value
        severity = tier_for_signals(HealthSignals(**kwargs)).severity
        assert severity >= previous
        previous = severity


def test_thresholds_are_configurable():
    lenient = HealthThresholds(off_track_progress_deviation=50.0, at_risk_progress_deviation=45.0)
    project = _project(progress=10)
    assert classify_health(project, AS_OF, DEFAULT_HEALTH_THRESHOLDS) == HealthTier.OFF_TRACK
    assert classify_health(project, AS_OF, lenient) == HealthTier.ON_TRACK


def test_apply_health_only_replaces_when_tier_changes():
    project = _project(progress=45)
    same, changed = apply_health(project, AS_OF)
    assert changed is False
    assert same is project

    lagging = replace(project, progress=10)
    updated, changed = apply_health(lagging, AS_OF)
    assert changed is True
    assert updated.health == HealthTier.OFF_TRACK
    assert lagging.health == HealthTier.ON_TRACK
