"""Change notifications for projects, tasks, baselines, health and roles."""
from __future__ import annotations

from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal("project_changed")    # project_id
        self.tasks_changed: Signal[str] = Signal("tasks_changed")        # project_id
        self.baseline_changed: Signal[str] = Signal("baseline_changed")  # project_id
        self.health_changed: Signal[str] = Signal("health_changed")      # project_id
        self.roles_changed: Signal[str] = Signal("roles_changed")        # role_id


# SINGLE global instance
domain_events = DomainEvents()


__all__ = ["DomainEvents", "domain_events"]
