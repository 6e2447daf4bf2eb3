from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from core.domain.auth import RoleDefinition, UserAccount
from core.domain.enums import BuiltinRole, Module, Permission
from core.exceptions import BusinessRuleError
from core.services.auth.policy import DEFAULT_NAVIGATION, DEFAULT_ROLE_DEFINITIONS, NavItem


class RoleDefinitionTable(Mapping[str, RoleDefinition]):
    """Immutable role id -> RoleDefinition lookup, built once at startup."""

    def __init__(self, definitions: Iterable[RoleDefinition]):
        self._by_id: Mapping[str, RoleDefinition] = MappingProxyType(
            {definition.role_id: definition for definition in definitions}
        )

    @classmethod
    def default(cls) -> "RoleDefinitionTable":
        return cls(DEFAULT_ROLE_DEFINITIONS)

    def with_definition(self, definition: RoleDefinition) -> "RoleDefinitionTable":
        merged = dict(self._by_id)
        merged[definition.role_id] = definition
        return RoleDefinitionTable(merged.values())

    def __getitem__(self, role_id: str) -> RoleDefinition:
        return self._by_id[role_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)


class AccessControlResolver:
    def __init__(self, role_table: RoleDefinitionTable):
        self._roles = role_table

    @property
    def role_table(self) -> RoleDefinitionTable:
        return self._roles

    def can_perform(
        self,
        user: UserAccount | None,
        permission: Permission,
        module: Module | None = None,
    ) -> bool:
        """
        Fail-closed permission check. Unknown roles and missing users are
        denied; SUPER_ADMIN is granted every capability. Does not look at
        the user's lifecycle status, which is enforced at sign in.
        """
        if user is None:
            return False
        definition = self._roles.get(user.role_id)
        if definition is None:
            return False
        if user.role_id == BuiltinRole.SUPER_ADMIN.value:
            return True
        return permission in definition.permissions_for(module)


def require_permission(
    resolver: AccessControlResolver,
    user: UserAccount | None,
    permission: Permission,
    module: Module | None = None,
    *,
    operation_label: str,
) -> None:
    if resolver.can_perform(user, permission, module):
        return
    scope = f"{module.value}:" if module is not None else ""
    raise BusinessRuleError(
        f"Permission denied for {operation_label}. Missing '{scope}{permission.value}'.",
        code="PERMISSION_DENIED",
    )


def visible_navigation(
    resolver: AccessControlResolver,
    user: UserAccount | None,
    items: Iterable[NavItem] = DEFAULT_NAVIGATION,
) -> list[NavItem]:
    visible: list[NavItem] = []
    for item in items:
        if item.required_permission is None:
            visible.append(item)
        elif resolver.can_perform(user, item.required_permission, item.required_module):
            visible.append(item)
    return visible


__all__ = [
    "RoleDefinitionTable",
    "AccessControlResolver",
    "require_permission",
    "visible_navigation",
]
