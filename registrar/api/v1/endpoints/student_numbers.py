"""Student Number Allocation Endpoints"""

from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.api import deps
from registrar.core.exceptions import InvalidCourseIdError, InvalidSchoolYearError
from registrar.core.rate_limit import ALLOCATION_RATE_LIMIT, limiter
from registrar.schemas.responses import SuccessResponse
from registrar.schemas.student_number import (
    CounterReset,
    CounterResponse,
    NextSequenceResponse,
    StudentNumberRequest,
    StudentNumberResponse,
)
from registrar.services.student_number_service import (
    StudentNumberService,
    build_counter_key,
    normalize_course_code,
    parse_start_year,
)

router = APIRouter()


@router.post("", response_model=SuccessResponse[StudentNumberResponse])
@limiter.limit(ALLOCATION_RATE_LIMIT)
async def allocate_student_number(
    request: Request,
    body: StudentNumberRequest,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Allocate a new student number for a course and school year.

    Allocation failures are rolled back and reported as 503; retrying is safe.
    """
    try:
        allocation = await StudentNumberService.allocate_detailed(
            db, body.course_id, body.school_year
        )
    except (InvalidCourseIdError, InvalidSchoolYearError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SuccessResponse(
        data=StudentNumberResponse(
            student_number=allocation.student_number,
            course_code=allocation.course_code,
            start_year=allocation.start_year,
            counter_key=allocation.counter_key,
        ),
        message="Student number allocated",
    )


@router.get("/next", response_model=SuccessResponse[NextSequenceResponse])
async def peek_next_sequence(
    course_code: str = Query(..., min_length=1),
    school_year: str = Query(...),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Estimate the next counter value. Not reserved and not a student number.
    """
    try:
        next_sequence = await StudentNumberService.peek_next_sequence(db, course_code, school_year)
        key = build_counter_key(normalize_course_code(course_code), parse_start_year(school_year))
    except InvalidSchoolYearError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SuccessResponse(
        data=NextSequenceResponse(counter_key=key, next_sequence=next_sequence)
    )


@router.get("/counters/{counter_key}", response_model=SuccessResponse[CounterResponse])
async def get_counter(
    counter_key: str,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Current counter value; 0 for counters that were never used.
    """
    sequence = await StudentNumberService.get_current_sequence(db, counter_key)
    return SuccessResponse(data=CounterResponse(id=counter_key, sequence=sequence))


@router.put("/counters/{counter_key}", response_model=SuccessResponse[CounterResponse])
async def reset_counter(
    counter_key: str,
    body: CounterReset,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Reset a counter to an explicit value (default 0).
    """
    counter = await StudentNumberService.reset_counter(db, counter_key, body.value)
    return SuccessResponse(
        data=CounterResponse.model_validate(counter),
        message="Counter reset",
    )
