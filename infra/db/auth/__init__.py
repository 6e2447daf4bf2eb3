from infra.db.auth.mapper import role_from_orm, role_to_orm, user_from_orm, user_to_orm
from infra.db.auth.repository import SqlAlchemyRoleDefinitionRepository, SqlAlchemyUserRepository

__all__ = [
    "user_to_orm",
    "user_from_orm",
    "role_to_orm",
    "role_from_orm",
    "SqlAlchemyUserRepository",
    "SqlAlchemyRoleDefinitionRepository",
]
