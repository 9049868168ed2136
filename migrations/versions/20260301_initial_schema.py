"""initial schema: admins, teachers, students, relations, payments, counters

Revision ID: 20260301_initial_schema
Revises:
Create Date: 2026-03-01 00:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20260301_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None

def _timestamps():
    return [
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]

def upgrade() -> None:
    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user", sa.String(80), nullable=False),
        sa.Column("email", sa.String(160), nullable=False),
        sa.Column("full_name", sa.String(160), nullable=False),
        sa.Column("role", sa.String(40), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("whatsapp_number", sa.String(30), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user", name="uq_admins_user"),
        sa.UniqueConstraint("email", name="uq_admins_email"),
    )
    op.create_table(
        "teachers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user", sa.String(80), nullable=False),
        sa.Column("email", sa.String(160), nullable=False),
        sa.Column("full_name", sa.String(160), nullable=False),
        sa.Column("category", sa.String(20), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("contact", sa.String(30), nullable=True),
        sa.Column("town", sa.String(80), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user", name="uq_teachers_user"),
        sa.UniqueConstraint("email", name="uq_teachers_email"),
    )
    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("identifier", sa.String(32), nullable=False),
        sa.Column("user", sa.String(32), nullable=False),
        sa.Column("full_name", sa.String(160), nullable=False),
        sa.Column("guardian_name", sa.String(160), nullable=False),
        sa.Column("guardian_phone", sa.String(30), nullable=False),
        sa.Column("class", sa.String(40), nullable=True),
        sa.Column("quarter", sa.String(80), nullable=True),
        sa.Column("days_per_week", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("category", sa.String(20), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("identifier", name="uq_students_identifier"),
        sa.UniqueConstraint("user", name="uq_students_user"),
    )
    op.create_table(
        "student_teacher_relations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("teacher_id", sa.Integer(), sa.ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("student_id", "teacher_id", name="uq_relation_student_teacher"),
    )
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.Column("teacher_id", sa.Integer(), sa.ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("next_payment_due", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
    op.create_table(
        "student_id_counters",
        sa.Column("prefix", sa.String(8), primary_key=True),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("last_value", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("category", name="uq_student_id_counters_category"),
    )

def downgrade() -> None:
    for table in ("student_id_counters", "payments", "student_teacher_relations", "students", "teachers", "admins"):
        op.drop_table(table)
