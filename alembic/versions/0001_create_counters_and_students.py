"""Create counters and students tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17

Counters hold one row per student_{COURSE}_{YEAR} key. Student numbers are
{year}-{COURSE}-{NNNNN}, unique across all students.
"""
from alembic import op
import sqlalchemy as sa

revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


SEMESTERS = ("1st", "2nd", "Summer")
STUDENT_STATUSES = ("Regular", "Dropped", "Returnee", "Transferee")
ENROLLMENT_STATUSES = ("Enrolled", "Not Enrolled", "On Leave", "Dropped")


def upgrade() -> None:
    op.create_table(
        "counters",
        sa.Column("id", sa.String(length=100), primary_key=True),
        sa.Column("sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_updated", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_number", sa.String(length=50), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("middle_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("suffix", sa.String(length=20), nullable=True),
        sa.Column("course", sa.Integer(), nullable=False),
        sa.Column("major", sa.String(length=255), nullable=True),
        sa.Column("year_level", sa.Integer(), nullable=False),
        sa.Column("section", sa.String(length=50), nullable=True),
        sa.Column("semester", sa.Enum(*SEMESTERS, name="semester"), nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column(
            "student_status",
            sa.Enum(*STUDENT_STATUSES, name="student_status"),
            nullable=False,
        ),
        sa.Column(
            "enrollment_status",
            sa.Enum(*ENROLLMENT_STATUSES, name="enrollment_status"),
            nullable=False,
        ),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("contact_number", sa.String(length=50), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_students_id", "students", ["id"])
    op.create_index("ix_students_student_number", "students", ["student_number"], unique=True)
    op.create_index("ix_students_email", "students", ["email"], unique=True)
    op.create_index("ix_students_course", "students", ["course"])
    op.create_index("ix_students_semester", "students", ["semester"])
    op.create_index("ix_students_school_year", "students", ["school_year"])


def downgrade() -> None:
    op.drop_index("ix_students_school_year", table_name="students")
    op.drop_index("ix_students_semester", table_name="students")
    op.drop_index("ix_students_course", table_name="students")
    op.drop_index("ix_students_email", table_name="students")
    op.drop_index("ix_students_student_number", table_name="students")
    op.drop_index("ix_students_id", table_name="students")
    op.drop_table("students")
    op.drop_table("counters")
    sa.Enum(name="enrollment_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="student_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="semester").drop(op.get_bind(), checkfirst=True)
