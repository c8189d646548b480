"""Centralized Enum Definitions"""

import enum


class Semester(str, enum.Enum):
    """Academic term"""
    FIRST = "1st"
    SECOND = "2nd"
    SUMMER = "Summer"


class StudentStatus(str, enum.Enum):
    """Admission status of a student"""
    REGULAR = "Regular"
    DROPPED = "Dropped"
    RETURNEE = "Returnee"
    TRANSFEREE = "Transferee"


class EnrollmentStatus(str, enum.Enum):
    """Enrollment state for the current term"""
    ENROLLED = "Enrolled"
    NOT_ENROLLED = "Not Enrolled"
    ON_LEAVE = "On Leave"
    DROPPED = "Dropped"


class SequenceStrategy(str, enum.Enum):
    """How the visible part of a student number is produced"""
    RANDOM = "random"
    COUNTER = "counter"


class EnrollmentRecordStatus(str, enum.Enum):
    """Lifecycle of a single term enrollment"""
    PENDING = "Pending"
    ENROLLED = "Enrolled"
    DROPPED = "Dropped"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def enum_values(enum_cls):
    """Persist enum values ("1st") rather than member names ("FIRST")."""
    return [member.value for member in enum_cls]
