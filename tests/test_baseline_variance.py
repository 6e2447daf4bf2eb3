from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from core.domain.baseline import ProjectBaseline
from core.domain.enums import VarianceDirection
from core.domain.project import Project
from core.services.baseline import compute_variance, direction_for, snapshot_baseline

SNAP_AT = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)


def _project(**extra) -> Project:
    return Project.create("Variance", date(2024, 1, 1), date(2024, 12, 31), budget=1000.0, progress=20.0, **extra)


def test_slipped_end_date_is_behind():
    project = snapshot_baseline(_project(), SNAP_AT)
    slipped = replace(project, end_date=date(2025, 1, 20))

    result = compute_variance(slipped)

    assert result.schedule_variance_days == 20
    assert result.direction == VarianceDirection.BEHIND
    assert result.baseline_timestamp == SNAP_AT


def test_no_baseline_means_zero_variance():
    result = compute_variance(_project())
    assert result.schedule_variance_days == 0
    assert result.direction == VarianceDirection.NONE
    assert result.baseline_timestamp is None


@pytest.mark.parametrize("shift", [-30, -1, 0, 1, 45])
def test_direction_matches_variance_sign(shift):
    project = snapshot_baseline(_project(), SNAP_AT)
    moved = replace(project, end_date=project.end_date + timedelta(days=shift))

    result = compute_variance(moved)

    assert result.schedule_variance_days == shift
    if shift > 0:
        assert result.direction == VarianceDirection.BEHIND
    elif shift < 0:
        assert result.direction == VarianceDirection.AHEAD
    else:
        assert result.direction == VarianceDirection.NONE
    assert direction_for(shift) == result.direction


def test_snapshot_copies_current_values_and_leaves_input_untouched():
    project = _project()
    snapped = snapshot_baseline(project, SNAP_AT)

    assert project.baseline is None
    assert snapped.baseline == ProjectBaseline(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        budget=1000.0,
        progress=20.0,
        timestamp=SNAP_AT,
    )


def test_snapshot_replaces_previous_baseline_wholesale():
    first = snapshot_baseline(_project(), SNAP_AT)
    changed = replace(first, end_date=date(2025, 2, 28), budget=1500.0, progress=35.0)
    later = SNAP_AT + timedelta(days=30)

    second = snapshot_baseline(changed, later)

    assert second.baseline.end_date == date(2025, 2, 28)
    assert second.baseline.budget == 1500.0
    assert second.baseline.timestamp == later
    assert compute_variance(second).schedule_variance_days == 0


def test_supplementary_variance_fields():
    project = snapshot_baseline(_project(), SNAP_AT)
    drifted = replace(project, start_date=date(2024, 1, 15), budget=1250.0, progress=50.0)

    result = compute_variance(drifted)

    assert result.start_variance_days == 14
    assert result.budget_variance == pytest.approx(250.0)
    assert result.progress_variance == pytest.approx(30.0)
