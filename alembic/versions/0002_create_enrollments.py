"""Create enrollments table

Revision ID: b2c3d4e5f6a7
Revises: a1b2c3d4e5f6
Create Date: 2026-10-17

One row per student per school year and semester. The semester enum type
already exists from the students table.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "b2c3d4e5f6a7"
down_revision = "a1b2c3d4e5f6"
branch_labels = None
depends_on = None


SEMESTERS = ("1st", "2nd", "Summer")
ENROLLMENT_RECORD_STATUSES = ("Pending", "Enrolled", "Dropped", "Completed", "Cancelled")


def upgrade() -> None:
    op.create_table(
        "enrollments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "student_id",
            sa.Uuid(),
            sa.ForeignKey("students.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("student_number", sa.String(length=50), nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column(
            "semester",
            postgresql.ENUM(*SEMESTERS, name="semester", create_type=False),
            nullable=False,
        ),
        sa.Column("year_level", sa.Integer(), nullable=False),
        sa.Column("course", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*ENROLLMENT_RECORD_STATUSES, name="enrollment_record_status"),
            nullable=False,
        ),
        sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("remarks", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_enrollments_id", "enrollments", ["id"])
    op.create_index("ix_enrollments_student_id", "enrollments", ["student_id"])
    op.create_index("ix_enrollments_student_number", "enrollments", ["student_number"])
    op.create_index("ix_enrollments_is_current", "enrollments", ["is_current"])
    op.create_index(
        "ix_enrollments_student_term",
        "enrollments",
        ["student_id", "school_year", "semester", "is_current"],
    )


def downgrade() -> None:
    op.drop_index("ix_enrollments_student_term", table_name="enrollments")
    op.drop_index("ix_enrollments_is_current", table_name="enrollments")
    op.drop_index("ix_enrollments_student_number", table_name="enrollments")
    op.drop_index("ix_enrollments_student_id", table_name="enrollments")
    op.drop_index("ix_enrollments_id", table_name="enrollments")
    op.drop_table("enrollments")
    sa.Enum(name="enrollment_record_status").drop(op.get_bind(), checkfirst=True)
