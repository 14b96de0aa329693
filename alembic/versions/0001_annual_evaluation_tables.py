"""annual evaluation tables

Revision ID: 0001_annual_evaluation
Revises:
Create Date: 2026-10-19 09:12:40.118204
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001_annual_evaluation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_role"),
    )

    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("employee_number", sa.String(50), nullable=False),
        sa.Column("display_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("department", sa.String(200), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "supervisor_employee_id",
            sa.Uuid(),
            sa.ForeignKey("employees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_employees_employee_number", "employees", ["employee_number"], unique=True)
    op.create_index("ix_employees_supervisor_employee_id", "employees", ["supervisor_employee_id"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("actor_user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=False),
        sa.Column("event_metadata", JSON_TYPE, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "annual_evaluation_cycles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column(
            "created_by_user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("year", name="uq_annual_evaluation_cycles_year"),
        sa.CheckConstraint("status IN ('active','closed')", name="ck_annual_evaluation_cycles_status"),
    )

    op.create_table(
        "annual_evaluations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "cycle_id",
            sa.Uuid(),
            sa.ForeignKey("annual_evaluation_cycles.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "staff_employee_id",
            sa.Uuid(),
            sa.ForeignKey("employees.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "supervisor_employee_id",
            sa.Uuid(),
            sa.ForeignKey("employees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("staff_answers", JSON_TYPE, nullable=True),
        sa.Column("supervisor_answers", JSON_TYPE, nullable=True),
        sa.Column("staff_submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("supervisor_submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.UniqueConstraint("cycle_id", "staff_employee_id", name="uq_annual_evaluations_cycle_staff"),
        sa.CheckConstraint(
            "status IN ('pending_staff','pending_supervisor','completed')",
            name="ck_annual_evaluations_status",
        ),
        sa.CheckConstraint(
            "(status <> 'pending_staff') OR ("
            "staff_answers IS NULL AND staff_submitted_at IS NULL "
            "AND supervisor_answers IS NULL AND supervisor_submitted_at IS NULL)",
            name="ck_annual_eval_pending_staff",
        ),
        sa.CheckConstraint(
            "(status <> 'pending_supervisor') OR ("
            "staff_answers IS NOT NULL AND staff_submitted_at IS NOT NULL "
            "AND supervisor_answers IS NULL AND supervisor_submitted_at IS NULL)",
            name="ck_annual_eval_pending_supervisor",
        ),
        sa.CheckConstraint(
            "(status <> 'completed') OR ("
            "staff_answers IS NOT NULL AND staff_submitted_at IS NOT NULL "
            "AND supervisor_answers IS NOT NULL AND supervisor_submitted_at IS NOT NULL)",
            name="ck_annual_eval_completed",
        ),
    )
    op.create_index("ix_annual_evaluations_cycle_id", "annual_evaluations", ["cycle_id"])
    op.create_index("ix_annual_evaluations_staff_employee_id", "annual_evaluations", ["staff_employee_id"])
    op.create_index(
        "ix_annual_evaluations_supervisor_employee_id", "annual_evaluations", ["supervisor_employee_id"]
    )


def downgrade() -> None:
    op.drop_table("annual_evaluations")
    op.drop_table("annual_evaluation_cycles")
    op.drop_table("audit_events")
    op.drop_table("employees")
    op.drop_table("user_roles")
    op.drop_table("roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
