"""Initial schema: companies, membership, RBAC, tasks, history, timers, transfers

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _company_fk() -> sa.Column:
    return sa.Column(
        "company_id",
        sa.String(),
        sa.ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
    )


def _task_fk() -> sa.Column:
    return sa.Column(
        "task_id",
        sa.String(),
        sa.ForeignKey("task.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    """Create task lifecycle schema."""
    # Company and membership (backing data for eligibility)
    op.create_table(
        "company",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "department",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "name", name="uq_department_company_name"),
    )
    op.create_index(op.f("ix_department_company_id"), "department", ["company_id"])
    op.create_table(
        "company_member",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "user_id", name="uq_company_member"),
    )
    op.create_index(op.f("ix_company_member_company_id"), "company_member", ["company_id"])
    op.create_index("ix_company_member_user", "company_member", ["user_id", "company_id"])
    op.create_table(
        "department_member",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column(
            "department_id",
            sa.String(),
            sa.ForeignKey("department.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("department_id", "user_id", name="uq_department_member"),
    )
    op.create_index(
        "ix_department_member_user", "department_member", ["user_id", "department_id"]
    )

    # RBAC
    op.create_table(
        "role",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "code", name="uq_role_company_code"),
    )
    op.create_index(op.f("ix_role_company_id"), "role", ["company_id"])
    op.create_table(
        "role_permission",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        sa.Column(
            "role_id",
            sa.String(),
            sa.ForeignKey("role.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("permission", sa.String(length=64), nullable=False),
        sa.CheckConstraint(
            "permission IN ('manage_tasks', 'view_all_tasks', 'create_personal_tasks', "
            "'create_department_tasks', 'create_company_tasks', 'edit_tasks', "
            "'delete_tasks', 'assign_tasks', 'accept_public_tasks')",
            name="role_permission_code_check",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role_id", "permission", name="uq_role_permission"),
    )
    op.create_index(op.f("ix_role_permission_company_id"), "role_permission", ["company_id"])
    op.create_index(
        "ix_role_permission_lookup", "role_permission", ["company_id", "role_id"]
    )
    op.create_table(
        "user_role",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column(
            "role_id",
            sa.String(),
            sa.ForeignKey("role.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assigned_by", sa.String(), nullable=True),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_role"),
    )
    op.create_index(op.f("ix_user_role_company_id"), "user_role", ["company_id"])
    op.create_index("ix_user_role_lookup", "user_role", ["company_id", "user_id"])

    # Task
    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("priority", sa.String(length=16), nullable=False),
        sa.Column("task_type", sa.String(length=16), nullable=False),
        sa.Column(
            "department_id",
            sa.String(),
            sa.ForeignKey("department.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("assignee_id", sa.String(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("accepted_by", sa.String(), nullable=True),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_timer_running", sa.Boolean(), nullable=False),
        sa.Column("current_timer_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_time_minutes", sa.Integer(), nullable=False),
        sa.Column("delegated_by", sa.String(), nullable=True),
        sa.Column("delegate_id", sa.String(), nullable=True),
        sa.Column("delegated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("previous_assignee_id", sa.String(), nullable=True),
        sa.Column("transfer_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('todo', 'in_progress', 'done')", name="task_status_check"
        ),
        sa.CheckConstraint(
            "priority IN ('high', 'medium', 'low')", name="task_priority_check"
        ),
        sa.CheckConstraint(
            "task_type IN ('personal', 'department', 'company')", name="task_type_check"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_task_company_id"), "task", ["company_id"])
    op.create_index("ix_task_company_type", "task", ["company_id", "task_type"])
    op.create_index("ix_task_company_assignee", "task", ["company_id", "assignee_id"])
    op.create_index("ix_task_company_department", "task", ["company_id", "department_id"])

    # History
    op.create_table(
        "task_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _task_fk(),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("field_changed", sa.String(length=64), nullable=True),
        sa.Column("old_value", sa.Text(), nullable=True),
        sa.Column("new_value", sa.Text(), nullable=True),
        sa.Column("changed_by", sa.String(), nullable=False),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "action IN ('created', 'status_changed', 'priority_changed', "
            "'title_changed', 'timer_started', 'timer_stopped', 'comment_added', "
            "'attachment_added')",
            name="task_history_action_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_task_history_task_changed", "task_history", ["task_id", "changed_at", "id"]
    )

    # Time logs
    op.create_table(
        "task_time_log",
        sa.Column("id", sa.String(), nullable=False),
        _task_fk(),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_time_log_task", "task_time_log", ["task_id", "started_at"])
    op.create_index(
        "uq_task_time_log_open",
        "task_time_log",
        ["task_id", "user_id"],
        unique=True,
        postgresql_where=sa.text("ended_at IS NULL"),
    )

    # Transfers
    op.create_table(
        "task_transfer",
        sa.Column("id", sa.String(), nullable=False),
        _company_fk(),
        _task_fk(),
        sa.Column("from_user_id", sa.String(), nullable=False),
        sa.Column("to_user_id", sa.String(), nullable=False),
        sa.Column("transfer_type", sa.String(length=16), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("requested_by", sa.String(), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("response_reason", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "transfer_type IN ('delegation', 'transfer')",
            name="task_transfer_type_check",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="task_transfer_status_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_task_transfer_company_id"), "task_transfer", ["company_id"])
    op.create_index(
        "ix_task_transfer_recipient",
        "task_transfer",
        ["company_id", "to_user_id", "status"],
    )
    op.create_index("ix_task_transfer_task", "task_transfer", ["task_id"])

    # Comments and attachments
    op.create_table(
        "task_comment",
        sa.Column("id", sa.String(), nullable=False),
        _task_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_comment_task", "task_comment", ["task_id", "created_at"])
    op.create_table(
        "task_attachment",
        sa.Column("id", sa.String(), nullable=False),
        _task_fk(),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("file_type", sa.String(length=255), nullable=True),
        sa.Column("uploaded_by", sa.String(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_task_attachment_task", "task_attachment", ["task_id", "uploaded_at"]
    )


def downgrade() -> None:
    """Drop task lifecycle schema."""
    op.drop_table("task_attachment")
    op.drop_table("task_comment")
    op.drop_table("task_transfer")
    op.drop_table("task_time_log")
    op.drop_table("task_history")
    op.drop_table("task")
    op.drop_table("user_role")
    op.drop_table("role_permission")
    op.drop_table("role")
    op.drop_table("department_member")
    op.drop_table("company_member")
    op.drop_table("department")
    op.drop_table("company")
