from core.services.auth.authorization import (
    AccessControlResolver,
    RoleDefinitionTable,
    require_permission,
    visible_navigation,
)
from core.services.auth.policy import DEFAULT_NAVIGATION, DEFAULT_ROLE_DEFINITIONS, NavItem
from core.services.auth.session import UserSessionContext

__all__ = [
    "AccessControlResolver",
    "RoleDefinitionTable",
    "require_permission",
    "visible_navigation",
    "DEFAULT_NAVIGATION",
    "DEFAULT_ROLE_DEFINITIONS",
    "NavItem",
    "UserSessionContext",
]
