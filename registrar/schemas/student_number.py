"""Student Number Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


SCHOOL_YEAR_REGEX = r"^\d{4}-\d{4}$"


class StudentNumberRequest(BaseModel):
    """Allocate a student number for a course and school year"""
    course_id: int = Field(..., gt=0, description="Numeric course id, e.g. 101")
    # Format is checked by the service so malformed years get a 400 with a clear message
    school_year: str = Field(..., description="School year, e.g. 2024-2025")


class StudentNumberResponse(BaseModel):
    student_number: str
    course_code: str
    start_year: str
    counter_key: str


class NextSequenceResponse(BaseModel):
    """Estimate only; concurrent allocations may take this value first"""
    counter_key: str
    next_sequence: int


class CounterResponse(BaseModel):
    id: str
    sequence: int
    last_updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CounterReset(BaseModel):
    value: int = Field(0, ge=0, description="New counter value")
