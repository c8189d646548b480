"""Course Pydantic Schemas"""

from pydantic import BaseModel


class CourseResponse(BaseModel):
    id: int
    code: str
    label: str
