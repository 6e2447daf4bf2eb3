from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain.auth import RoleDefinition, UserAccount
from core.exceptions import NotFoundError
from core.interfaces import RoleDefinitionRepository, UserRepository
from infra.db.auth.mapper import role_from_orm, role_to_orm, user_from_orm, user_to_orm
from infra.db.models import RoleDefinitionORM, UserORM


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, user: UserAccount) -> None:
        self.session.add(user_to_orm(user))

    def update(self, user: UserAccount) -> None:
        if self.session.get(UserORM, user.id) is None:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        self.session.merge(user_to_orm(user))

    def get(self, user_id: str) -> Optional[UserAccount]:
        obj = self.session.get(UserORM, user_id)
        return user_from_orm(obj) if obj else None

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        stmt = select(UserORM).where(UserORM.email == email)
        obj = self.session.execute(stmt).scalars().first()
        return user_from_orm(obj) if obj else None

    def list_all(self) -> List[UserAccount]:
        rows = self.session.execute(select(UserORM).order_by(UserORM.name)).scalars().all()
        return [user_from_orm(row) for row in rows]


class SqlAlchemyRoleDefinitionRepository(RoleDefinitionRepository):
    def __init__(self, session: Session):
        self.session = session

    def upsert(self, definition: RoleDefinition) -> None:
        self.session.merge(role_to_orm(definition))

    def get(self, role_id: str) -> Optional[RoleDefinition]:
        obj = self.session.get(RoleDefinitionORM, role_id)
        return role_from_orm(obj) if obj else None

    def list_all(self) -> List[RoleDefinition]:
        rows = self.session.execute(select(RoleDefinitionORM).order_by(RoleDefinitionORM.role_id)).scalars().all()
        return [role_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyUserRepository", "SqlAlchemyRoleDefinitionRepository"]
