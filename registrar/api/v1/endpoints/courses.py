from typing import Any, List
from fastapi import APIRouter

from registrar.constants.courses import COURSE_CODES, COURSE_LABELS
from registrar.schemas.course import CourseResponse
from registrar.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[CourseResponse]])
async def list_courses() -> Any:
    """
    Static course table used for student numbers.
    """
    courses = [
        CourseResponse(id=course_id, code=code, label=COURSE_LABELS.get(course_id, code))
        for course_id, code in sorted(COURSE_CODES.items())
    ]
    return SuccessResponse(data=courses)
