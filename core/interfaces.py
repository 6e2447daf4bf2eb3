# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.audit import AuditLogEntry
from core.domain.auth import RoleDefinition, UserAccount
from core.domain.project import Project


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...
    @abstractmethod
    def update(self, project: Project) -> None: ...
    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...
    @abstractmethod
    def list_all(self) -> List[Project]: ...


class UserRepository(ABC):
    @abstractmethod
    def add(self, user: UserAccount) -> None: ...
    @abstractmethod
    def update(self, user: UserAccount) -> None: ...
    @abstractmethod
    def get(self, user_id: str) -> Optional[UserAccount]: ...
    @abstractmethod
    def get_by_email(self, email: str) -> Optional[UserAccount]: ...
    @abstractmethod
    def list_all(self) -> List[UserAccount]: ...


class RoleDefinitionRepository(ABC):
    @abstractmethod
    def upsert(self, definition: RoleDefinition) -> None: ...
    @abstractmethod
    def get(self, role_id: str) -> Optional[RoleDefinition]: ...
    @abstractmethod
    def list_all(self) -> List[RoleDefinition]: ...


class AuditLogRepository(ABC):
    @abstractmethod
    def add(self, entry: AuditLogEntry) -> None: ...
    @abstractmethod
    def list_recent(
        self,
        limit: int = 200,
        *,
        project_id: str | None = None,
        event_type: str | None = None,
    ) -> List[AuditLogEntry]: ...


__all__ = [
    "ProjectRepository",
    "UserRepository",
    "RoleDefinitionRepository",
    "AuditLogRepository",
]
