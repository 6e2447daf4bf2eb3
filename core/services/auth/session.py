from __future__ import annotations

from core.domain.auth import UserAccount
from core.domain.enums import Module, Permission
from core.services.auth.authorization import AccessControlResolver, RoleDefinitionTable


class UserSessionContext:
    """Signed-in user plus the resolver built from the current role table."""

    def __init__(self, resolver: AccessControlResolver | None = None):
        self._user: UserAccount | None = None
        self._resolver = resolver or AccessControlResolver(RoleDefinitionTable.default())

    @property
    def user(self) -> UserAccount | None:
        return self._user

    @property
    def resolver(self) -> AccessControlResolver:
        return self._resolver

    def set_user(self, user: UserAccount) -> None:
        self._user = user

    def set_resolver(self, resolver: AccessControlResolver) -> None:
        self._resolver = resolver

    def clear(self) -> None:
        self._user = None

    def is_authenticated(self) -> bool:
        return self._user is not None

    def can(self, permission: Permission, module: Module | None = None) -> bool:
        return self._resolver.can_perform(self._user, permission, module)


__all__ = ["UserSessionContext"]
