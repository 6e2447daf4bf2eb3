# infra/db/models.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.enums import HealthTier, ProjectStatus, RiskSeverity, TaskStatus, UserStatus
from infra.db.base import Base


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    owner: Mapped[str] = mapped_column(String, default="")
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus), default=ProjectStatus.INITIATION, nullable=False
    )
    progress: Mapped[float] = mapped_column(Float, default=0.0)
    health: Mapped[HealthTier] = mapped_column(
        SAEnum(HealthTier), default=HealthTier.ON_TRACK, nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    budget: Mapped[float] = mapped_column(Float, default=0.0)


class TaskORM(Base):
    __tablename__ = "tasks"

    # task ids are caller-chosen and only unique within their project
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    )
    id: Mapped[str] = mapped_column(String, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus), default=TaskStatus.TODO, nullable=False
    )
    assignee: Mapped[str] = mapped_column(String, default="")
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    # ordered task ids, same project only
    dependencies_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    parent_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

Index("idx_tasks_project_position", TaskORM.project_id, TaskORM.position)


class ProjectRiskORM(Base):
    __tablename__ = "project_risks"

    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    id: Mapped[str] = mapped_column(String, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str] = mapped_column(String, nullable=False)
    severity: Mapped[RiskSeverity] = mapped_column(
        SAEnum(RiskSeverity), default=RiskSeverity.LOW, nullable=False
    )

Index("idx_risks_project", ProjectRiskORM.project_id)


class ProjectBaselineORM(Base):
    """At most one active baseline per project; a snapshot overwrites it."""

    __tablename__ = "project_baselines"

    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    budget: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    role_id: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        SAEnum(UserStatus), default=UserStatus.PENDING, nullable=False
    )

Index("idx_users_role", UserORM.role_id)


class RoleDefinitionORM(Base):
    __tablename__ = "role_definitions"

    role_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    global_permissions_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    module_permissions_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")


class AuditLogORM(Base):
    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    actor_user_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    actor_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    module: Mapped[str] = mapped_column(String(32), nullable=False, default="SYSTEM")
    entity_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    project_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    details_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

Index("idx_audit_logs_occurred_at", AuditLogORM.occurred_at)
Index("idx_audit_logs_project", AuditLogORM.project_id)
Index("idx_audit_logs_event_type", AuditLogORM.event_type)
