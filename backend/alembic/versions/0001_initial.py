"""clinics, users, owners, pets and visits

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by_id", sa.Uuid(), sa.ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True),
        sa.Column("updated_by_id", sa.Uuid(), sa.ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "clinics",
        sa.Column("clinic_id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("timezone", sa.String(length=50), nullable=False, server_default="UTC"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_send_reminders", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reminder_monthly_limit", sa.Integer(), nullable=False, server_default="-1"),
        sa.Column("reminder_sent_this_cycle", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_cycle_start_date", sa.Date(), nullable=True),
        sa.Column("subscription_start_date", sa.Date(), nullable=True),
        sa.Column("subscription_end_date", sa.Date(), nullable=True),
        sa.Column("updated_by_id", sa.Uuid(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("user_id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("password", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("role", sa.String(), nullable=False, server_default="STAFF"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("clinic_id", sa.Uuid(), sa.ForeignKey("clinics.clinic_id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "owners",
        sa.Column("owner_id", sa.Uuid(), primary_key=True),
        sa.Column("clinic_id", sa.Uuid(), sa.ForeignKey("clinics.clinic_id", ondelete="CASCADE"), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("allow_automated_reminders", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        *_timestamps(),
        sa.UniqueConstraint("clinic_id", "phone", name="uq_owners_clinic_phone"),
    )
    op.create_index("ix_owners_clinic_id", "owners", ["clinic_id"])

    op.create_table(
        "pets",
        sa.Column("pet_id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("owners.owner_id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("species", sa.String(), nullable=True),
        sa.Column("breed", sa.String(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("color", sa.String(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_audit_columns(),
        *_timestamps(),
    )
    op.create_index("ix_pets_owner_id", "pets", ["owner_id"])

    op.create_table(
        "visits",
        sa.Column("visit_id", sa.Uuid(), primary_key=True),
        sa.Column("pet_id", sa.Uuid(), sa.ForeignKey("pets.pet_id", ondelete="CASCADE"), nullable=False),
        sa.Column("visit_date", sa.DateTime(), nullable=False),
        sa.Column("visit_type", sa.String(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("temperature", sa.Numeric(4, 1), nullable=True),
        sa.Column("weight", sa.Numeric(6, 2), nullable=True),
        sa.Column("weight_unit", sa.String(length=2), nullable=True),
        sa.Column("heart_rate", sa.Integer(), nullable=True),
        sa.Column("respiratory_rate", sa.Integer(), nullable=True),
        sa.Column("is_reminder_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("next_reminder_date", sa.DateTime(), nullable=True),
        sa.Column("reminder_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        *_timestamps(),
    )
    op.create_index("ix_visits_pet_id", "visits", ["pet_id"])
    op.create_index("ix_visits_next_reminder_date", "visits", ["next_reminder_date"])


def downgrade() -> None:
    op.drop_index("ix_visits_next_reminder_date", table_name="visits")
    op.drop_index("ix_visits_pet_id", table_name="visits")
    op.drop_table("visits")
    op.drop_index("ix_pets_owner_id", table_name="pets")
    op.drop_table("pets")
    op.drop_index("ix_owners_clinic_id", table_name="owners")
    op.drop_table("owners")
    op.drop_table("users")
    op.drop_table("clinics")
