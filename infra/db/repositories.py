# infra/db/repositories.py
from infra.db.audit.repository import SqlAlchemyAuditLogRepository
from infra.db.auth.repository import SqlAlchemyRoleDefinitionRepository, SqlAlchemyUserRepository
from infra.db.project.repository import SqlAlchemyProjectRepository

__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyRoleDefinitionRepository",
    "SqlAlchemyAuditLogRepository",
]
