from __future__ import annotations

import pytest

from core.domain.auth import RoleDefinition, UserAccount
from core.domain.enums import BuiltinRole, Module, Permission, UserStatus
from core.exceptions import BusinessRuleError
from core.services.auth import (
    AccessControlResolver,
    RoleDefinitionTable,
    UserSessionContext,
    require_permission,
    visible_navigation,
)

ALL_MODULES = [None, *Module]


def _user(role_id: str) -> UserAccount:
    return UserAccount.create("Dana", "dana@example.com", role_id, status=UserStatus.ACTIVE)


@pytest.fixture
def resolver():
    return AccessControlResolver(RoleDefinitionTable.default())


def test_no_user_is_denied(resolver):
    assert resolver.can_perform(None, Permission.VIEW) is False
    assert resolver.can_perform(None, Permission.VIEW, Module.PROJECTS) is False


def test_super_admin_is_granted_every_permission_everywhere(resolver):
    admin = _user(BuiltinRole.SUPER_ADMIN.value)
    for permission in Permission:
        for module in ALL_MODULES:
            assert resolver.can_perform(admin, permission, module), (permission, module)


def test_unknown_role_is_denied_everywhere(resolver):
    ghost = _user("ROLE_THAT_DOES_NOT_EXIST")
    for permission in Permission:
        for module in ALL_MODULES:
            assert not resolver.can_perform(ghost, permission, module)


def test_module_permissions_are_checked_against_module_set(resolver):
    pm = _user(BuiltinRole.PROJECT_MANAGER.value)
    assert resolver.can_perform(pm, Permission.EDIT, Module.PROJECTS)
    assert resolver.can_perform(pm, Permission.DELETE, Module.PROJECTS)
    assert not resolver.can_perform(pm, Permission.EDIT, Module.STRATEGY)
    assert not resolver.can_perform(pm, Permission.VIEW, Module.ADMIN)


def test_global_permissions_apply_only_without_module(resolver):
    viewer = _user(BuiltinRole.EXECUTIVE_VIEWER.value)
    assert resolver.can_perform(viewer, Permission.EXPORT)
    assert not resolver.can_perform(viewer, Permission.EDIT)
    # EXPORT is global for this role but not granted on PROJECTS
    assert not resolver.can_perform(viewer, Permission.EXPORT, Module.PROJECTS)


def test_permissions_have_no_implication_hierarchy(resolver):
    contributor = _user(BuiltinRole.CONTRIBUTOR.value)
    assert resolver.can_perform(contributor, Permission.EDIT, Module.PROJECTS)
    assert not resolver.can_perform(contributor, Permission.CREATE, Module.PROJECTS)
    assert not resolver.can_perform(contributor, Permission.DELETE, Module.PROJECTS)


def test_missing_module_key_is_treated_as_empty():
    partial = RoleDefinition(
        role_id="AUDITOR",
        name="Auditor",
        global_permissions=frozenset({Permission.VIEW}),
        module_permissions={Module.REPORTS: frozenset({Permission.VIEW})},
    )
    resolver = AccessControlResolver(RoleDefinitionTable([partial]))
    auditor = _user("AUDITOR")

    assert resolver.can_perform(auditor, Permission.VIEW, Module.REPORTS)
    assert not resolver.can_perform(auditor, Permission.VIEW, Module.PROJECTS)


def test_role_table_is_immutable_and_extended_by_copy():
    table = RoleDefinitionTable.default()
    custom = RoleDefinition.create("QA_LEAD", "QA Lead", module_permissions={Module.PROJECTS: [Permission.VIEW]})

    extended = table.with_definition(custom)

    assert "QA_LEAD" in extended
    assert "QA_LEAD" not in table
    with pytest.raises(TypeError):
        table._by_id["QA_LEAD"] = custom  # type: ignore[index]


def test_super_admin_grant_does_not_depend_on_table_contents():
    stripped = RoleDefinition.create(BuiltinRole.SUPER_ADMIN.value, "Super Admin")
    resolver = AccessControlResolver(RoleDefinitionTable([stripped]))
    admin = _user(BuiltinRole.SUPER_ADMIN.value)
    assert resolver.can_perform(admin, Permission.MANAGE_SETTINGS, Module.ADMIN)


def test_require_permission_raises_permission_denied(resolver):
    partner = _user(BuiltinRole.EXTERNAL_PARTNER.value)
    require_permission(resolver, partner, Permission.VIEW, Module.PROJECTS, operation_label="view project")

    with pytest.raises(BusinessRuleError, match="Permission denied") as exc:
        require_permission(resolver, partner, Permission.EDIT, Module.PROJECTS, operation_label="edit project")
    assert exc.value.code == "PERMISSION_DENIED"
    assert "PROJECTS:EDIT" in str(exc.value)


def test_visible_navigation_filters_by_module_view(resolver):
    partner = _user(BuiltinRole.EXTERNAL_PARTNER.value)
    ids = [item.id for item in visible_navigation(resolver, partner)]
    assert ids == ["home", "knowledge", "projects", "help"]

    admin = _user(BuiltinRole.SUPER_ADMIN.value)
    assert len(visible_navigation(resolver, admin)) == 8

    assert [item.id for item in visible_navigation(resolver, None)] == ["home", "help"]


def test_user_session_context_delegates_to_resolver():
    ctx = UserSessionContext()
    assert not ctx.is_authenticated()
    assert not ctx.can(Permission.VIEW, Module.PROJECTS)

    ctx.set_user(_user(BuiltinRole.PMO_ANALYST.value))
    assert ctx.is_authenticated()
    assert ctx.can(Permission.CREATE, Module.REPORTS)
    assert not ctx.can(Permission.MANAGE_USERS, Module.ADMIN)

    ctx.clear()
    assert ctx.user is None


def test_builtin_role_member_is_stored_by_value(resolver):
    user = UserAccount.create("Dana", "dana@example.com", BuiltinRole.CONTRIBUTOR, status=UserStatus.ACTIVE)
    role = RoleDefinition.create(BuiltinRole.PMO_ANALYST)

    assert user.role_id == "CONTRIBUTOR"
    assert role.role_id == "PMO_ANALYST"
    assert role.name == "PMO_ANALYST"
    assert resolver.can_perform(user, Permission.VIEW, Module.PROJECTS)
