"""Student Record Model"""

from sqlalchemy import Column, Enum, Integer, String

from registrar.models.base import BaseModel
from registrar.models.enums import EnrollmentStatus, Semester, StudentStatus, enum_values


class Student(BaseModel):
    """Student master record; student_number is issued by the allocator"""
    __tablename__ = "students"

    student_number = Column(String(50), unique=True, nullable=False, index=True)

    # Personal Information
    first_name = Column(String(255), nullable=False)
    middle_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=False)
    suffix = Column(String(20), nullable=True)

    # Academic Information
    course = Column(Integer, nullable=False, index=True)
    major = Column(String(255), nullable=True)
    year_level = Column(Integer, nullable=False)
    section = Column(String(50), nullable=True)
    semester = Column(
        Enum(Semester, name="semester", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    school_year = Column(String(9), nullable=False, index=True)
    student_status = Column(
        Enum(StudentStatus, name="student_status", values_callable=enum_values),
        default=StudentStatus.REGULAR,
        nullable=False,
    )
    enrollment_status = Column(
        Enum(EnrollmentStatus, name="enrollment_status", values_callable=enum_values),
        default=EnrollmentStatus.NOT_ENROLLED,
        nullable=False,
    )

    # Contact Information
    email = Column(String(255), unique=True, nullable=True, index=True)
    contact_number = Column(String(50), nullable=False)
    address = Column(String(500), nullable=False)

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name, self.suffix]
        return " ".join(p for p in parts if p)

    def __repr__(self) -> str:
        return f"<Student {self.student_number}>"
