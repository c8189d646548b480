"""Term Enrollment Model"""

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Index, Integer, String, Uuid

from registrar.models.base import BaseModel
from registrar.models.enums import EnrollmentRecordStatus, Semester, enum_values


class Enrollment(BaseModel):
    """
    One student's enrollment for a school year and semester.

    student_number, year_level and course are copied from the student at
    enrollment time so the history survives later edits to the student.
    """
    __tablename__ = "enrollments"
    __table_args__ = (
        Index("ix_enrollments_student_term", "student_id", "school_year", "semester", "is_current"),
    )

    student_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_number = Column(String(50), nullable=False, index=True)

    school_year = Column(String(9), nullable=False)
    semester = Column(
        Enum(Semester, name="semester", values_callable=enum_values),
        nullable=False,
    )
    year_level = Column(Integer, nullable=False)
    course = Column(Integer, nullable=False)

    status = Column(
        Enum(EnrollmentRecordStatus, name="enrollment_record_status", values_callable=enum_values),
        default=EnrollmentRecordStatus.PENDING,
        nullable=False,
    )
    is_current = Column(Boolean, default=True, nullable=False, index=True)
    remarks = Column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Enrollment {self.student_number} {self.school_year} {self.semester}>"
