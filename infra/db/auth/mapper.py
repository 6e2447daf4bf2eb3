from __future__ import annotations

from core.domain.auth import RoleDefinition, UserAccount
from core.domain.enums import Module, Permission
from infra.db.json_fields import from_json, list_from_json, to_json
from infra.db.models import RoleDefinitionORM, UserORM


def user_to_orm(user: UserAccount) -> UserORM:
    return UserORM(
        id=user.id,
        name=user.name,
        email=user.email,
        role_id=user.role_id,
        status=user.status,
    )


def user_from_orm(obj: UserORM) -> UserAccount:
    return UserAccount(
        id=obj.id,
        name=obj.name,
        email=obj.email,
        role_id=obj.role_id,
        status=obj.status,
    )


def role_to_orm(definition: RoleDefinition) -> RoleDefinitionORM:
    return RoleDefinitionORM(
        role_id=definition.role_id,
        name=definition.name,
        global_permissions_json=to_json(sorted(p.value for p in definition.global_permissions)),
        module_permissions_json=to_json(
            {
                module.value: sorted(p.value for p in perms)
                for module, perms in definition.module_permissions.items()
            }
        ),
    )


def role_from_orm(obj: RoleDefinitionORM) -> RoleDefinition:
    known_permissions = {p.value for p in Permission}
    known_modules = {m.value for m in Module}
    modules = {
        Module(name): [Permission(p) for p in perms if p in known_permissions]
        for name, perms in from_json(obj.module_permissions_json).items()
        if name in known_modules and isinstance(perms, list)
    }
    return RoleDefinition.create(
        role_id=obj.role_id,
        name=obj.name,
        global_permissions=[
            Permission(p) for p in list_from_json(obj.global_permissions_json) if p in known_permissions
        ],
        module_permissions=modules,
    )


__all__ = ["user_to_orm", "user_from_orm", "role_to_orm", "role_from_orm"]
