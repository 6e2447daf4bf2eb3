from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

from core.domain.enums import BuiltinRole, Module, Permission, UserStatus
from core.domain.identifiers import generate_id


def role_key(role_id: BuiltinRole | str) -> str:
    """Stored form of a role id; accepts a BuiltinRole member or a custom id."""
    return role_id.value if isinstance(role_id, Enum) else str(role_id)


@dataclass(frozen=True)
class UserAccount:
    id: str
    name: str
    email: str
    role_id: str
    status: UserStatus = UserStatus.PENDING

    @staticmethod
    def create(
        name: str,
        email: str,
        role_id: BuiltinRole | str,
        status: UserStatus = UserStatus.PENDING,
    ) -> "UserAccount":
        return UserAccount(
            id=generate_id(),
            name=name,
            email=email,
            role_id=role_key(role_id),
            status=status,
        )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


@dataclass(frozen=True)
class RoleDefinition:
    role_id: str
    name: str
    global_permissions: frozenset[Permission] = frozenset()
    module_permissions: Mapping[Module, frozenset[Permission]] = field(default_factory=dict)

    @staticmethod
    def create(
        role_id: BuiltinRole | str,
        name: str = "",
        global_permissions: Iterable[Permission] = (),
        module_permissions: Optional[Mapping[Module, Iterable[Permission]]] = None,
    ) -> "RoleDefinition":
        # Every module gets an entry, empty when the role has no access to it.
        given = dict(module_permissions or {})
        per_module = {
            module: frozenset(Permission(p) for p in given.get(module, ()))
            for module in Module
        }
        return RoleDefinition(
            role_id=role_key(role_id),
            name=name or role_key(role_id),
            global_permissions=frozenset(Permission(p) for p in global_permissions),
            module_permissions=per_module,
        )

    def permissions_for(self, module: Module | None) -> frozenset[Permission]:
        if module is None:
            return self.global_permissions
        return self.module_permissions.get(module, frozenset())


__all__ = ["role_key", "UserAccount", "RoleDefinition"]
