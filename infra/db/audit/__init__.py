from infra.db.audit.mapper import audit_from_orm, audit_to_orm
from infra.db.audit.repository import SqlAlchemyAuditLogRepository

__all__ = [
    "audit_to_orm",
    "audit_from_orm",
    "SqlAlchemyAuditLogRepository",
]

