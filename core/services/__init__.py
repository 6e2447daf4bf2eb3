from .baseline import BaselineService
from .auth.service import AuthService
from .audit import AuditService
from .project import ProjectService
from .task import TaskService

__all__ = [
    "ProjectService",
    "AuthService",
    "AuditService",
    "TaskService",
    "BaselineService",
]
