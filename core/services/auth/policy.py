from __future__ import annotations

from dataclasses import dataclass

from core.domain.auth import RoleDefinition
from core.domain.enums import BuiltinRole, Module, Permission

P = Permission

_READ_ONLY = {P.VIEW}
_AUTHOR = {P.VIEW, P.CREATE, P.EDIT}
_OWNER = {P.VIEW, P.CREATE, P.EDIT, P.DELETE, P.APPROVE_REJECT, P.EXPORT}


DEFAULT_ROLE_DEFINITIONS: tuple[RoleDefinition, ...] = (
    # Exempt from the permission map; the resolver grants everything.
    RoleDefinition.create(BuiltinRole.SUPER_ADMIN.value, "Super Admin"),
    RoleDefinition.create(
        BuiltinRole.SECTOR_ADMIN.value,
        "Sector Admin",
        global_permissions={P.VIEW, P.EXPORT, P.MANAGE_USERS, P.VIEW_AUDIT_LOGS},
        module_permissions={
            Module.STRATEGY: _OWNER,
            Module.KNOWLEDGE: _OWNER | {P.MANAGE_TEMPLATES},
            Module.PROJECTS: _OWNER,
            Module.MEETINGS: _OWNER,
            Module.REPORTS: {P.VIEW, P.EXPORT},
            Module.ADMIN: {P.VIEW, P.MANAGE_USERS, P.VIEW_AUDIT_LOGS},
        },
    ),
    RoleDefinition.create(
        BuiltinRole.SERVICE_OWNER.value,
        "Service Owner",
        global_permissions={P.VIEW, P.EXPORT},
        module_permissions={
            Module.STRATEGY: {P.VIEW, P.EDIT, P.APPROVE_REJECT},
            Module.KNOWLEDGE: _AUTHOR,
            Module.PROJECTS: _AUTHOR | {P.APPROVE_REJECT, P.EXPORT},
            Module.MEETINGS: _AUTHOR,
            Module.REPORTS: {P.VIEW, P.EXPORT},
        },
    ),
    RoleDefinition.create(
        BuiltinRole.PMO_ANALYST.value,
        "PMO Analyst",
        global_permissions={P.VIEW, P.EXPORT},
        module_permissions={
            Module.STRATEGY: _READ_ONLY,
            Module.KNOWLEDGE: _AUTHOR | {P.MANAGE_TEMPLATES},
            Module.PROJECTS: _AUTHOR | {P.EXPORT},
            Module.MEETINGS: _READ_ONLY,
            Module.REPORTS: {P.VIEW, P.CREATE, P.EXPORT},
        },
    ),
    RoleDefinition.create(
        BuiltinRole.PROJECT_MANAGER.value,
        "Project Manager",
        global_permissions={P.VIEW},
        module_permissions={
            Module.KNOWLEDGE: _AUTHOR,
            Module.PROJECTS: _AUTHOR | {P.DELETE},
            Module.MEETINGS: _AUTHOR,
            Module.REPORTS: _READ_ONLY,
        },
    ),
    RoleDefinition.create(
        BuiltinRole.CONTRIBUTOR.value,
        "Contributor",
        global_permissions={P.VIEW},
        module_permissions={
            Module.KNOWLEDGE: {P.VIEW, P.CREATE},
            Module.PROJECTS: {P.VIEW, P.EDIT},
            Module.MEETINGS: _READ_ONLY,
        },
    ),
    RoleDefinition.create(
        BuiltinRole.EXECUTIVE_VIEWER.value,
        "Executive Viewer",
        global_permissions={P.VIEW, P.EXPORT},
        module_permissions={
            Module.STRATEGY: _READ_ONLY,
            Module.KNOWLEDGE: _READ_ONLY,
            Module.PROJECTS: _READ_ONLY,
            Module.MEETINGS: _READ_ONLY,
            Module.REPORTS: {P.VIEW, P.EXPORT},
        },
    ),
    RoleDefinition.create(
        BuiltinRole.EXTERNAL_PARTNER.value,
        "External Partner",
        module_permissions={
            Module.KNOWLEDGE: _READ_ONLY,
            Module.PROJECTS: _READ_ONLY,
        },
    ),
)


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    path: str
    required_permission: Permission | None = None
    required_module: Module | None = None


DEFAULT_NAVIGATION: tuple[NavItem, ...] = (
    NavItem("home", "Home", "/"),
    NavItem("strategy", "Strategy", "/strategy", P.VIEW, Module.STRATEGY),
    NavItem("knowledge", "Knowledge", "/knowledge", P.VIEW, Module.KNOWLEDGE),
    NavItem("projects", "Projects", "/projects", P.VIEW, Module.PROJECTS),
    NavItem("meetings", "Meetings", "/meetings", P.VIEW, Module.MEETINGS),
    NavItem("reports", "Reports", "/reports", P.VIEW, Module.REPORTS),
    NavItem("admin", "Admin", "/admin", P.VIEW, Module.ADMIN),
    NavItem("help", "Help", "/help"),
)


__all__ = ["DEFAULT_ROLE_DEFINITIONS", "DEFAULT_NAVIGATION", "NavItem"]
