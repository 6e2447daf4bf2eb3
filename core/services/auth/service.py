from __future__ import annotations

import logging
import os
import re
from dataclasses import replace
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from core.domain.auth import RoleDefinition, UserAccount, role_key
from core.domain.enums import AuditEventType, BuiltinRole, Module, Permission, UserStatus
from core.events.domain_events import DomainEvents, domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import RoleDefinitionRepository, UserRepository
from core.services.audit.helpers import record_audit
from core.services.auth.authorization import AccessControlResolver, RoleDefinitionTable
from core.services.auth.policy import DEFAULT_ROLE_DEFINITIONS
from core.services.auth.session import UserSessionContext
from core.services.common.base import ServiceBase

if TYPE_CHECKING:
    from core.services.audit.service import AuditService


_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
logger = logging.getLogger(__name__)


class AuthService(ServiceBase):
    """User lifecycle, role assignment and the role definition table."""

    def __init__(
        self,
        session: Session,
        user_repo: UserRepository,
        role_repo: RoleDefinitionRepository,
        user_session: UserSessionContext | None = None,
        audit_service: "AuditService | None" = None,
        events: DomainEvents = domain_events,
    ):
        super().__init__(session, user_session)
        self._user_repo: UserRepository = user_repo
        self._role_repo: RoleDefinitionRepository = role_repo
        self._audit_service: AuditService | None = audit_service
        self._events = events

    def bootstrap_defaults(self) -> UserAccount:
        for definition in DEFAULT_ROLE_DEFINITIONS:
            if self._role_repo.get(definition.role_id) is None:
                self._role_repo.upsert(definition)
        self._session.flush()

        admin_email = (os.getenv("PM_ADMIN_EMAIL", "admin@example.com").strip() or "admin@example.com").lower()
        admin = self._user_repo.get_by_email(admin_email)
        if admin is None:
            admin = UserAccount.create(
                name="Administrator",
                email=admin_email,
                role_id=BuiltinRole.SUPER_ADMIN.value,
                status=UserStatus.ACTIVE,
            )
            self._user_repo.add(admin)
        self.commit()
        self.reload_role_table()
        return admin

    def reload_role_table(self) -> RoleDefinitionTable:
        table = RoleDefinitionTable(self._role_repo.list_all())
        if self._user_session is not None:
            self._user_session.set_resolver(AccessControlResolver(table))
        return table

    def sign_in(self, email: str) -> UserAccount:
        normalized = self._normalize_email(email)
        user = self._user_repo.get_by_email(normalized) if normalized else None
        if user is None or not user.is_active:
            reason = "unknown_user" if user is None else f"status_{user.status.value}"
            record_audit(
                self,
                event_type=AuditEventType.LOGIN,
                action="auth.login.failed",
                entity_id=user.id if user else normalized,
                details={"reason": reason},
            )
            self.commit()
            logger.info("Sign in rejected for %s (%s)", normalized, reason)
            raise BusinessRuleError("User is not active.", code="USER_NOT_ACTIVE")
        if self._user_session is not None:
            self._user_session.set_user(user)
        record_audit(
            self,
            event_type=AuditEventType.LOGIN,
            action="auth.login.success",
            entity_id=user.id,
        )
        self.commit()
        return user

    def sign_out(self) -> None:
        if self._user_session is not None:
            self._user_session.clear()

    def register_user(self, name: str, email: str, role_id: BuiltinRole | str) -> UserAccount:
        """Self-registration; the account stays pending until approved."""
        role_id = role_key(role_id)
        normalized = self._normalize_email(email)
        self._validate_email(normalized)
        if not (name or "").strip():
            raise ValidationError("Name is required.", code="NAME_REQUIRED")
        if self._user_repo.get_by_email(normalized):
            raise ValidationError("Email already registered.", code="EMAIL_EXISTS")
        if role_id == BuiltinRole.SUPER_ADMIN.value:
            raise BusinessRuleError(
                "The super-admin role cannot be requested at registration.",
                code="ROLE_NOT_ASSIGNABLE",
            )
        self._require_role(role_id)

        user = UserAccount.create(name=name.strip(), email=normalized, role_id=role_id)
        try:
            self._user_repo.add(user)
            record_audit(
                self,
                event_type=AuditEventType.USER_MANAGEMENT,
                action="user.register",
                module=Module.ADMIN.value,
                entity_id=user.id,
                details={"role_id": role_id},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return user

    def approve_user(self, user_id: str) -> UserAccount:
        return self._set_status(user_id, UserStatus.ACTIVE, action="user.approve")

    def reject_user(self, user_id: str) -> UserAccount:
        return self._set_status(user_id, UserStatus.REJECTED, action="user.reject")

    def deactivate_user(self, user_id: str) -> UserAccount:
        return self._set_status(user_id, UserStatus.INACTIVE, action="user.deactivate")

    def assign_role(self, user_id: str, role_id: BuiltinRole | str) -> UserAccount:
        self._require(Permission.MANAGE_USERS, Module.ADMIN, operation_label="assign role")
        role_id = role_key(role_id)
        user = self._require_user(user_id)
        self._require_role(role_id)
        # granting or revoking super-admin is reserved to super-admins
        if BuiltinRole.SUPER_ADMIN.value in (role_id, user.role_id):
            self._require_super_admin("assign super-admin role")
        if user.role_id == role_id:
            return user
        updated = replace(user, role_id=role_id)
        try:
            self._user_repo.update(updated)
            record_audit(
                self,
                event_type=AuditEventType.RBAC_CHANGE,
                action="user.role.assign",
                module=Module.ADMIN.value,
                entity_id=user.id,
                details={"from": user.role_id, "to": role_id},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return updated

    def save_role_definition(self, definition: RoleDefinition) -> RoleDefinitionTable:
        self._require(Permission.MANAGE_USERS, Module.ADMIN, operation_label="save role definition")
        if definition.role_id == BuiltinRole.SUPER_ADMIN.value:
            raise BusinessRuleError(
                "The super-admin role cannot be redefined.",
                code="ROLE_IMMUTABLE",
            )
        try:
            self._role_repo.upsert(definition)
            record_audit(
                self,
                event_type=AuditEventType.RBAC_CHANGE,
                action="role.save",
                module=Module.ADMIN.value,
                entity_id=definition.role_id,
                details={
                    "global": sorted(p.value for p in definition.global_permissions),
                    "modules": {
                        module.value: sorted(p.value for p in perms)
                        for module, perms in definition.module_permissions.items()
                    },
                },
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        table = self.reload_role_table()
        self._events.roles_changed.emit(definition.role_id)
        return table

    def list_users(self, status: UserStatus | None = None) -> list[UserAccount]:
        self._require(Permission.MANAGE_USERS, Module.ADMIN, operation_label="list users")
        users = self._user_repo.list_all()
        if status is not None:
            users = [u for u in users if u.status == status]
        return users

    def _set_status(self, user_id: str, status: UserStatus, *, action: str) -> UserAccount:
        self._require(Permission.MANAGE_USERS, Module.ADMIN, operation_label=action.replace(".", " "))
        user = self._require_user(user_id)
        if user.role_id == BuiltinRole.SUPER_ADMIN.value:
            self._require_super_admin(action.replace(".", " "))
        if user.status == status:
            return user
        updated = replace(user, status=status)
        try:
            self._user_repo.update(updated)
            record_audit(
                self,
                event_type=AuditEventType.USER_MANAGEMENT,
                action=action,
                module=Module.ADMIN.value,
                entity_id=user.id,
                details={"from": user.status.value, "to": status.value},
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        if self._user_session is not None and self._user_session.user and self._user_session.user.id == user.id:
            if status != UserStatus.ACTIVE:
                self._user_session.clear()
        return updated

    def _require_super_admin(self, operation_label: str) -> None:
        if self._user_session is None:
            return
        caller = self._user_session.user
        if caller is None or caller.role_id != BuiltinRole.SUPER_ADMIN.value:
            raise BusinessRuleError(
                f"Permission denied for {operation_label}: super-admin role required.",
                code="PERMISSION_DENIED",
            )

    def _require_user(self, user_id: str) -> UserAccount:
        user = self._user_repo.get(user_id)
        if not user:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        return user

    def _require_role(self, role_id: str) -> RoleDefinition:
        role = self._role_repo.get(role_id)
        if not role:
            raise NotFoundError("Role not found.", code="ROLE_NOT_FOUND")
        return role

    @staticmethod
    def _normalize_email(email: str | None) -> str:
        return (email or "").strip().lower()

    @staticmethod
    def _validate_email(email: str) -> None:
        if not _EMAIL_RE.match(email):
            raise ValidationError("Invalid email format.", code="INVALID_EMAIL")


__all__ = ["AuthService"]
