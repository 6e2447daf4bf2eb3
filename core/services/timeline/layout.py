from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Mapping, Optional

from core.domain.enums import HealthTier
from core.domain.project import Project


class ZoomScale(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


DEFAULT_ZOOM_MULTIPLIERS: Mapping[ZoomScale, float] = {
    ZoomScale.WEEK: 4.0,
    ZoomScale.MONTH: 1.0,
    ZoomScale.YEAR: 0.4,
}

# Keeps zero-length items visible and clickable.
MIN_WIDTH_PERCENT = 0.5

DateLike = date | datetime | str


@dataclass(frozen=True)
class TimelinePlacement:
    left_percent: float
    width_percent: float


@dataclass(frozen=True)
class TimelineWindow:
    start: date
    end: date

    @staticmethod
    def for_year(year: int) -> "TimelineWindow":
        return TimelineWindow(date(year, 1, 1), date(year, 12, 31))

    @staticmethod
    def covering(projects: Iterable[Project], fallback_year: int) -> "TimelineWindow":
        projects = list(projects)
        if not projects:
            return TimelineWindow.for_year(fallback_year)
        return TimelineWindow(
            min(p.start_date for p in projects),
            max(p.end_date for p in projects),
        )

    @property
    def span_days(self) -> int:
        return (self.end - self.start).days


@dataclass(frozen=True)
class TimelineRow:
    kind: str  # "project" | "task"
    project_id: str
    item_id: str
    label: str
    placement: TimelinePlacement
    health: Optional[HealthTier] = None


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _multiplier(zoom_scale: ZoomScale | str, multipliers: Mapping[ZoomScale, float]) -> float:
    try:
        scale = ZoomScale(zoom_scale)
    except ValueError:
        return 1.0
    return float(multipliers.get(scale, 1.0))


def layout(
    item_start: DateLike,
    item_end: DateLike,
    timeline_start: DateLike,
    timeline_end: DateLike,
    zoom_scale: ZoomScale | str = ZoomScale.MONTH,
    zoom_level: float = 1.0,
    multipliers: Mapping[ZoomScale, float] = DEFAULT_ZOOM_MULTIPLIERS,
) -> TimelinePlacement:
    """
    Map an item's date range onto percent coordinates of the timeline.

    Results outside 0-100 are valid; clipping belongs to the renderer. An
    empty timeline window yields the floor values instead of dividing by zero.
    """
    t0 = _to_date(timeline_start)
    total_span = (_to_date(timeline_end) - t0).days
    start = _to_date(item_start)
    start_offset = (start - t0).days
    duration = (_to_date(item_end) - start).days

    if total_span > 0:
        base_left = start_offset / total_span * 100.0
        base_width = duration / total_span * 100.0
    else:
        base_left = 0.0
        base_width = 0.0

    scale = _multiplier(zoom_scale, multipliers) * float(zoom_level)
    return TimelinePlacement(
        left_percent=max(0.0, base_left * scale),
        width_percent=max(MIN_WIDTH_PERCENT, base_width * scale),
    )


def delta_days_from_drop(
    offset_percent: float,
    timeline_start: DateLike,
    timeline_end: DateLike,
    zoom_scale: ZoomScale | str = ZoomScale.MONTH,
    zoom_level: float = 1.0,
    multipliers: Mapping[ZoomScale, float] = DEFAULT_ZOOM_MULTIPLIERS,
) -> int:
    """Convert a horizontal drag distance (percent of track width) to whole days."""
    total_span = (_to_date(timeline_end) - _to_date(timeline_start)).days
    scale = _multiplier(zoom_scale, multipliers) * float(zoom_level)
    if total_span <= 0 or scale <= 0:
        return 0
    days = offset_percent / scale / 100.0 * total_span
    # round half away from zero so drags are symmetric
    return int(math.copysign(math.floor(abs(days) + 0.5), days))


def build_timeline_rows(
    projects: Iterable[Project],
    window: TimelineWindow,
    zoom_scale: ZoomScale | str = ZoomScale.MONTH,
    zoom_level: float = 1.0,
    *,
    collapsed: Iterable[str] = (),
    multipliers: Mapping[ZoomScale, float] = DEFAULT_ZOOM_MULTIPLIERS,
) -> list[TimelineRow]:
    collapsed_ids = set(collapsed)
    rows: list[TimelineRow] = []
    for project in projects:
        rows.append(
            TimelineRow(
                kind="project",
                project_id=project.id,
                item_id=project.id,
                label=project.name,
                placement=layout(
                    project.start_date,
                    project.end_date,
                    window.start,
                    window.end,
                    zoom_scale,
                    zoom_level,
                    multipliers,
                ),
                health=project.health,
            )
        )
        if project.id in collapsed_ids:
            continue
        for task in project.tasks:
            rows.append(
                TimelineRow(
                    kind="task",
                    project_id=project.id,
                    item_id=task.id,
                    label=task.title,
                    placement=layout(
                        task.start_date or project.start_date,
                        task.due_date or project.end_date,
                        window.start,
                        window.end,
                        zoom_scale,
                        zoom_level,
                        multipliers,
                    ),
                )
            )
    return rows


__all__ = [
    "ZoomScale",
    "DEFAULT_ZOOM_MULTIPLIERS",
    "MIN_WIDTH_PERCENT",
    "TimelinePlacement",
    "TimelineWindow",
    "TimelineRow",
    "layout",
    "delta_days_from_drop",
    "build_timeline_rows",
]
