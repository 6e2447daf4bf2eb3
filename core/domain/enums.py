from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    VIEW = "VIEW"
    CREATE = "CREATE"
    EDIT = "EDIT"
    DELETE = "DELETE"
    APPROVE_REJECT = "APPROVE_REJECT"
    EXPORT = "EXPORT"
    MANAGE_TEMPLATES = "MANAGE_TEMPLATES"
    MANAGE_SETTINGS = "MANAGE_SETTINGS"
    MANAGE_USERS = "MANAGE_USERS"
    VIEW_AUDIT_LOGS = "VIEW_AUDIT_LOGS"


class Module(str, Enum):
    STRATEGY = "STRATEGY"
    KNOWLEDGE = "KNOWLEDGE"
    PROJECTS = "PROJECTS"
    MEETINGS = "MEETINGS"
    REPORTS = "REPORTS"
    ADMIN = "ADMIN"


class BuiltinRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    SECTOR_ADMIN = "SECTOR_ADMIN"
    SERVICE_OWNER = "SERVICE_OWNER"
    PMO_ANALYST = "PMO_ANALYST"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    CONTRIBUTOR = "CONTRIBUTOR"
    EXECUTIVE_VIEWER = "EXECUTIVE_VIEWER"
    EXTERNAL_PARTNER = "EXTERNAL_PARTNER"


class UserStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"
    REJECTED = "rejected"


class ProjectStatus(str, Enum):
    INITIATION = "Initiation"
    PLANNING = "Planning"
    EXECUTION = "Execution"
    MONITORING = "Monitoring"
    CLOSING = "Closing"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class RiskSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HealthTier(str, Enum):
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    OFF_TRACK = "off-track"

    @property
    def severity(self) -> int:
        return _HEALTH_SEVERITY[self]


_HEALTH_SEVERITY = {
    HealthTier.ON_TRACK: 0,
    HealthTier.AT_RISK: 1,
    HealthTier.OFF_TRACK: 2,
}


class VarianceDirection(str, Enum):
    AHEAD = "ahead"
    BEHIND = "behind"
    NONE = "none"


class AuditEventType(str, Enum):
    RBAC_CHANGE = "RBAC_CHANGE"
    DATA_ACCESS = "DATA_ACCESS"
    USER_MANAGEMENT = "USER_MANAGEMENT"
    LOGIN = "LOGIN"
    HEALTH_UPDATE = "HEALTH_UPDATE"
    PROJECT_BASELINE = "PROJECT_BASELINE"
    TASK_DRAG = "TASK_DRAG"


__all__ = [
    "Permission",
    "Module",
    "BuiltinRole",
    "UserStatus",
    "ProjectStatus",
    "TaskStatus",
    "RiskSeverity",
    "HealthTier",
    "VarianceDirection",
    "AuditEventType",
]
