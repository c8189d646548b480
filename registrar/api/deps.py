"""API Dependencies"""

from typing import Optional

from fastapi import Query

from registrar.database import get_db
from registrar.models.enums import EnrollmentStatus, Semester, StudentStatus
from registrar.schemas.student import StudentFilters

__all__ = ["get_db", "get_student_filters"]


def get_student_filters(
    course: Optional[int] = Query(None, description="Course id"),
    year_level: Optional[int] = Query(None, ge=1, le=5),
    semester: Optional[Semester] = Query(None),
    school_year: Optional[str] = Query(None),
    student_status: Optional[StudentStatus] = Query(None),
    enrollment_status: Optional[EnrollmentStatus] = Query(None),
) -> StudentFilters:
    """Collect list filters from query parameters."""
    return StudentFilters(
        course=course,
        year_level=year_level,
        semester=semester,
        school_year=school_year,
        student_status=student_status,
        enrollment_status=enrollment_status,
    )
