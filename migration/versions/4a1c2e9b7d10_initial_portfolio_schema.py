"""initial portfolio schema

Revision ID: 4a1c2e9b7d10
Revises:
Create Date: 2026-10-16
"""

from alembic import op
import sqlalchemy as sa


revision = "4a1c2e9b7d10"
down_revision = None
branch_labels = None
depends_on = None


_PROJECT_STATUS = sa.Enum(
    "INITIATION", "PLANNING", "EXECUTION", "MONITORING", "CLOSING", name="projectstatus"
)
_HEALTH_TIER = sa.Enum("ON_TRACK", "AT_RISK", "OFF_TRACK", name="healthtier")
_TASK_STATUS = sa.Enum("TODO", "IN_PROGRESS", "DONE", name="taskstatus")
_RISK_SEVERITY = sa.Enum("LOW", "MEDIUM", "HIGH", name="riskseverity")
_USER_STATUS = sa.Enum("ACTIVE", "PENDING", "INACTIVE", "REJECTED", name="userstatus")


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("owner", sa.String(), nullable=True),
        sa.Column("status", _PROJECT_STATUS, nullable=False),
        sa.Column("progress", sa.Float(), nullable=True),
        sa.Column("health", _HEALTH_TIER, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("budget", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("status", _TASK_STATUS, nullable=False),
        sa.Column("assignee", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("dependencies_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("parent_id", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("project_id", "id"),
    )
    op.create_index("idx_tasks_project_position", "tasks", ["project_id", "position"], unique=False)

    op.create_table(
        "project_risks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("severity", _RISK_SEVERITY, nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("project_id", "id"),
    )
    op.create_index("idx_risks_project", "project_risks", ["project_id"], unique=False)

    op.create_table(
        "project_baselines",
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("budget", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("progress", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("project_id"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("role_id", sa.String(length=64), nullable=False),
        sa.Column("status", _USER_STATUS, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role_id"], unique=False)

    op.create_table(
        "role_definitions",
        sa.Column("role_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("global_permissions_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("module_permissions_json", sa.Text(), nullable=False, server_default=sa.text("'{}'")),
        sa.PrimaryKeyConstraint("role_id"),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("actor_user_id", sa.String(), nullable=True),
        sa.Column("actor_name", sa.String(length=128), nullable=True),
        sa.Column("module", sa.String(length=32), nullable=False, server_default=sa.text("'SYSTEM'")),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("details_json", sa.Text(), nullable=False, server_default=sa.text("'{}'")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_audit_logs_occurred_at", "audit_logs", ["occurred_at"], unique=False)
    op.create_index("idx_audit_logs_project", "audit_logs", ["project_id"], unique=False)
    op.create_index("idx_audit_logs_event_type", "audit_logs", ["event_type"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_audit_logs_event_type", table_name="audit_logs")
    op.drop_index("idx_audit_logs_project", table_name="audit_logs")
    op.drop_index("idx_audit_logs_occurred_at", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("role_definitions")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
    op.drop_table("project_baselines")
    op.drop_index("idx_risks_project", table_name="project_risks")
    op.drop_table("project_risks")
    op.drop_index("idx_tasks_project_position", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("projects")
