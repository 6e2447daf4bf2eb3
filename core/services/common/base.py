from __future__ import annotations

from sqlalchemy.orm import Session

from core.domain.enums import Module, Permission
from core.services.auth.authorization import require_permission
from core.services.auth.session import UserSessionContext


class ServiceBase:
    def __init__(self, session: Session, user_session: UserSessionContext | None = None):
        self._session = session
        self._user_session = user_session

    def commit(self):
        try:
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            raise e

    def _require(self, permission: Permission, module: Module | None, *, operation_label: str) -> None:
        # No session means a system context (bootstrap, migrations, tests).
        if self._user_session is None:
            return
        require_permission(
            self._user_session.resolver,
            self._user_session.user,
            permission,
            module,
            operation_label=operation_label,
        )
