from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns ``moment``; used by tests and replays."""
    def _now() -> datetime:
        return moment

    return _now


__all__ = ["Clock", "system_clock", "fixed_clock"]
