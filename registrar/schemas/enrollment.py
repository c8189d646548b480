"""Enrollment Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from registrar.models.enums import EnrollmentRecordStatus, Semester
from registrar.schemas.student_number import SCHOOL_YEAR_REGEX


class EnrollmentCreate(BaseModel):
    """Enroll a student for a term; year level and course come from the student."""
    school_year: str = Field(..., pattern=SCHOOL_YEAR_REGEX, description="e.g. 2024-2025")
    semester: Semester
    remarks: Optional[str] = Field(None, max_length=500)


class EnrollmentResponse(BaseModel):
    id: UUID
    student_id: UUID
    student_number: str
    school_year: str
    semester: Semester
    year_level: int
    course: int
    status: EnrollmentRecordStatus
    is_current: bool
    remarks: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
