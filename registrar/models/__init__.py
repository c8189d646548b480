"""Models Package - Export all models for easy imports"""

from registrar.models.base import BaseModel, TimestampMixin
from registrar.models.enums import (
    EnrollmentRecordStatus,
    EnrollmentStatus,
    Semester,
    SequenceStrategy,
    StudentStatus,
)
from registrar.models.counter import Counter
from registrar.models.student import Student
from registrar.models.enrollment import Enrollment


__all__ = [
    # Base classes
    "BaseModel",
    "TimestampMixin",

    # Enums
    "EnrollmentRecordStatus",
    "EnrollmentStatus",
    "Semester",
    "SequenceStrategy",
    "StudentStatus",

    # Allocation
    "Counter",

    # Records
    "Student",
    "Enrollment",
]
