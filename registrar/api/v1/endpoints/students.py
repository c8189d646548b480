from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.api import deps
from registrar.core.exceptions import EnrollmentConflictError, StudentConflictError, UnknownCourseError
from registrar.models.enums import Semester
from registrar.schemas.enrollment import EnrollmentCreate, EnrollmentResponse
from registrar.schemas.responses import PaginatedResponse, SuccessResponse
from registrar.schemas.student import StudentCreate, StudentFilters, StudentResponse, StudentUpdate
from registrar.schemas.student_number import SCHOOL_YEAR_REGEX
from registrar.services.enrollment_service import EnrollmentService
from registrar.services.student_service import StudentService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[StudentResponse])
async def list_students(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    filters: StudentFilters = Depends(deps.get_student_filters),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    List students, newest first.
    """
    skip = (page - 1) * page_size
    students, total = await StudentService.list_students(db, filters, skip=skip, limit=page_size)
    total_pages = (total + page_size - 1) // page_size

    return PaginatedResponse(
        data=[StudentResponse.model_validate(s) for s in students],
        meta={
            "page": page,
            "page_size": page_size,
            "total": total,
            "total_pages": total_pages,
        },
    )


@router.post("", response_model=SuccessResponse[StudentResponse])
async def create_student(
    student_in: StudentCreate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Create a student. The student number is allocated from the course and school year.
    """
    try:
        student = await StudentService.create_student(db, student_in)
    except UnknownCourseError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StudentConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return SuccessResponse(
        data=StudentResponse.model_validate(student),
        message="Student account created successfully",
    )


@router.get("/number/{student_number}", response_model=SuccessResponse[StudentResponse])
async def get_student_by_number(
    student_number: str,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    student = await StudentService.get_student_by_number(db, student_number)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(data=StudentResponse.model_validate(student))


@router.get("/{student_id}", response_model=SuccessResponse[StudentResponse])
async def get_student(
    student_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    student = await StudentService.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(data=StudentResponse.model_validate(student))


@router.put("/{student_id}", response_model=SuccessResponse[StudentResponse])
async def update_student(
    student_id: UUID,
    student_in: StudentUpdate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Update student details. Student number, course and school year are fixed.
    """
    try:
        student = await StudentService.update_student(db, student_id, student_in)
    except StudentConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(data=StudentResponse.model_validate(student), message="Student updated")


@router.post(
    "/{student_id}/enroll",
    response_model=SuccessResponse[EnrollmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def enroll_student(
    student_id: UUID,
    enrollment_in: EnrollmentCreate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Enroll a student for a school year and semester.

    One active enrollment per term; dropped or cancelled ones do not count.
    """
    try:
        enrollment = await EnrollmentService.enroll_student(db, student_id, enrollment_in)
    except EnrollmentConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(
        data=EnrollmentResponse.model_validate(enrollment),
        message="Enrollment successful",
    )


@router.get("/{student_id}/current-enrollment", response_model=SuccessResponse[EnrollmentResponse])
async def get_current_enrollment(
    student_id: UUID,
    school_year: str = Query(..., pattern=SCHOOL_YEAR_REGEX),
    semester: Semester = Query(...),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    enrollment = await EnrollmentService.get_current_enrollment(db, student_id, school_year, semester)
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active enrollment found")
    return SuccessResponse(data=EnrollmentResponse.model_validate(enrollment))


@router.get("/{student_id}/enrollments", response_model=SuccessResponse[List[EnrollmentResponse]])
async def get_enrollment_history(
    student_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Enrollment history, latest school year and semester first.
    """
    student = await StudentService.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    enrollments = await EnrollmentService.get_enrollment_history(db, student_id)
    return SuccessResponse(data=[EnrollmentResponse.model_validate(e) for e in enrollments])
