from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class ProjectBaseline:
    """Frozen snapshot of a project's plan. Replaced wholesale, never edited."""

    start_date: date
    end_date: date
    budget: float
    progress: float
    timestamp: datetime


__all__ = ["ProjectBaseline"]
