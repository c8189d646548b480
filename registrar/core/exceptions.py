"""Domain Exceptions"""

from typing import Optional


class RegistrarError(Exception):
    """Base class for errors raised by the registrar services"""

    code: str = "REGISTRAR_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidSchoolYearError(RegistrarError, ValueError):
    """School year is not in YYYY-YYYY form"""

    code = "INVALID_SCHOOL_YEAR"


class UnknownCourseError(RegistrarError, ValueError):
    """Course id is not in the course table"""

    code = "UNKNOWN_COURSE"


class StudentNumberAllocationError(RegistrarError):
    """
    Student number could not be allocated.

    The counter transaction has been rolled back when this is raised,
    so the caller may safely retry.
    """

    code = "STUDENT_NUMBER_ALLOCATION_FAILED"

    def __init__(self, message: str = "Failed to generate student number"):
        super().__init__(message)


class StudentConflictError(RegistrarError):
    """A student with the same unique attribute already exists"""

    code = "STUDENT_CONFLICT"


class InvalidCourseIdError(RegistrarError, ValueError):
    """Course id is not a positive integer"""

    code = "INVALID_COURSE_ID"


class EnrollmentConflictError(RegistrarError):
    """The student already has an active enrollment for the term"""

    code = "ENROLLMENT_CONFLICT"
