"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-06-02 10:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

user_type = sa.Enum("patient", "caretaker", name="user_type")


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("user_type", user_type, nullable=False),
        sa.Column("caretaker_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("referral_code", sa.String(length=12), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("referral_code"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_caretaker_id", "users", ["caretaker_id"])

    op.create_table(
        "screenings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("unsteady", sa.Boolean(), nullable=False),
        sa.Column("worries", sa.Boolean(), nullable=False),
        sa.Column("fallen", sa.Boolean(), nullable=False),
        sa.Column("fall_count", sa.Integer(), nullable=True),
        sa.Column("fall_injured", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_screenings_id", "screenings", ["id"])
    op.create_index("ix_screenings_user_id", "screenings", ["user_id"])
    op.create_index("ix_screenings_created_at", "screenings", ["created_at"])

    op.create_table(
        "falls",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("fall_date", sa.Date(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("activity", sa.String(length=255), nullable=True),
        sa.Column("cause", sa.String(length=255), nullable=True),
        sa.Column("injuries", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_falls_id", "falls", ["id"])
    op.create_index("ix_falls_user_id", "falls", ["user_id"])
    op.create_index("ix_falls_fall_date", "falls", ["fall_date"])

    op.create_table(
        "exercise_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("week_start", sa.Date(), nullable=False),
        sa.Column("minutes", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "week_start", name="uq_exercise_logs_user_week"),
        sa.CheckConstraint("minutes >= 0", name="ck_exercise_logs_minutes_non_negative"),
    )
    op.create_index("ix_exercise_logs_id", "exercise_logs", ["id"])
    op.create_index("ix_exercise_logs_user_id", "exercise_logs", ["user_id"])

    op.create_table(
        "tai_chi_favorites",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("location_id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table("tai_chi_favorites")
    op.drop_table("exercise_logs")
    op.drop_table("falls")
    op.drop_table("screenings")
    op.drop_table("users")
    user_type.drop(op.get_bind(), checkfirst=True)
