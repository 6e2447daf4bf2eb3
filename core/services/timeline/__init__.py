from core.services.timeline.layout import (
    DEFAULT_ZOOM_MULTIPLIERS,
    MIN_WIDTH_PERCENT,
    TimelinePlacement,
    TimelineRow,
    TimelineWindow,
    ZoomScale,
    build_timeline_rows,
    delta_days_from_drop,
    layout,
)

__all__ = [
    "DEFAULT_ZOOM_MULTIPLIERS",
    "MIN_WIDTH_PERCENT",
    "TimelinePlacement",
    "TimelineRow",
    "TimelineWindow",
    "ZoomScale",
    "build_timeline_rows",
    "delta_days_from_drop",
    "layout",
]
