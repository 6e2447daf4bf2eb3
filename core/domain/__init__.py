from core.domain.audit import AuditLogEntry
from core.domain.auth import RoleDefinition, UserAccount
from core.domain.baseline import ProjectBaseline
from core.domain.clock import Clock, fixed_clock, system_clock
from core.domain.enums import (
    AuditEventType,
    BuiltinRole,
    HealthTier,
    Module,
    Permission,
    ProjectStatus,
    RiskSeverity,
    TaskStatus,
    UserStatus,
    VarianceDirection,
)
from core.domain.identifiers import generate_id
from core.domain.project import Project, ProjectRisk
from core.domain.task import Task

__all__ = [
    "generate_id",
    "Clock",
    "system_clock",
    "fixed_clock",
    "Permission",
    "Module",
    "BuiltinRole",
    "UserStatus",
    "ProjectStatus",
    "TaskStatus",
    "RiskSeverity",
    "HealthTier",
    "AuditEventType",
    "VarianceDirection",
    "Project",
    "ProjectRisk",
    "Task",
    "ProjectBaseline",
    "UserAccount",
    "RoleDefinition",
    "AuditLogEntry",
]
