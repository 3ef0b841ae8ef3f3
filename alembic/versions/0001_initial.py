"""create reminder table

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "reminder",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=40), nullable=False),
        sa.Column(
            "type",
            sa.Enum("medication", "appointment", name="remindertype", native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column("medication", sa.Text(), nullable=True),
        sa.Column("doctor_name", sa.String(length=120), nullable=True),
        sa.Column("clinic_name", sa.String(length=160), nullable=True),
        sa.Column("appointment_date", sa.Date(), nullable=True),
        sa.Column("appointment_time", sa.String(length=40), nullable=True),
        sa.Column("send_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_reminder"),
        sa.CheckConstraint(
            "type != 'medication' OR (doctor_name IS NULL AND clinic_name IS NULL "
            "AND appointment_date IS NULL AND appointment_time IS NULL)",
            name="ck_reminder_medication_fields_only",
        ),
        sa.CheckConstraint(
            "type != 'appointment' OR medication IS NULL",
            name="ck_reminder_appointment_fields_only",
        ),
    )
    # Due-reminder scan: WHERE sent = false AND send_at <= now
    op.create_index("ix_reminder_due", "reminder", ["sent", "send_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_reminder_due", table_name="reminder")
    op.drop_table("reminder")
