"""Student Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from registrar.models.enums import EnrollmentStatus, Semester, StudentStatus
from registrar.schemas.student_number import SCHOOL_YEAR_REGEX


class StudentBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    middle_name: Optional[str] = Field(None, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    suffix: Optional[str] = Field(None, max_length=20)
    major: Optional[str] = None
    year_level: int = Field(..., ge=1, le=5)
    section: Optional[str] = None
    semester: Semester
    student_status: StudentStatus = StudentStatus.REGULAR
    enrollment_status: EnrollmentStatus = EnrollmentStatus.NOT_ENROLLED
    email: Optional[EmailStr] = None
    contact_number: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1, max_length=500)

    @field_validator(
        "first_name", "middle_name", "last_name", "suffix", "contact_number", "address",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class StudentCreate(StudentBase):
    """Registrar creates a student; the student number is allocated server-side."""
    course: int = Field(..., gt=0, description="Numeric course id, e.g. 101")
    school_year: str = Field(..., pattern=SCHOOL_YEAR_REGEX)


class StudentUpdate(BaseModel):
    """Partial update. student_number, course and school_year cannot change."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    middle_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    suffix: Optional[str] = Field(None, max_length=20)
    major: Optional[str] = None
    year_level: Optional[int] = Field(None, ge=1, le=5)
    section: Optional[str] = None
    semester: Optional[Semester] = None
    student_status: Optional[StudentStatus] = None
    enrollment_status: Optional[EnrollmentStatus] = None
    email: Optional[EmailStr] = None
    contact_number: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[str] = Field(None, min_length=1, max_length=500)

    @field_validator(
        "first_name", "last_name", "year_level", "semester",
        "student_status", "enrollment_status", "contact_number", "address",
    )
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError("field cannot be null")
        return v


class StudentFilters(BaseModel):
    course: Optional[int] = None
    year_level: Optional[int] = None
    semester: Optional[Semester] = None
    school_year: Optional[str] = None
    student_status: Optional[StudentStatus] = None
    enrollment_status: Optional[EnrollmentStatus] = None


class StudentResponse(BaseModel):
    id: UUID
    student_number: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    suffix: Optional[str] = None
    full_name: str
    course: int
    major: Optional[str] = None
    year_level: int
    section: Optional[str] = None
    semester: Semester
    school_year: str
    student_status: StudentStatus
    enrollment_status: EnrollmentStatus
    email: Optional[str] = None
    contact_number: str
    address: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
