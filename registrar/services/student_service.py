"""Student Service - Business Logic Layer"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.config import settings
from registrar.constants.courses import COURSE_CODES
from registrar.core.exceptions import (
    StudentConflictError,
    StudentNumberAllocationError,
    UnknownCourseError,
)
from registrar.models.student import Student
from registrar.schemas.student import StudentCreate, StudentFilters, StudentUpdate
from registrar.services.student_number_service import StudentNumberService

logger = logging.getLogger(__name__)


class StudentService:
    """Service layer for student records"""

    @staticmethod
    async def get_student(db: AsyncSession, student_id: UUID) -> Optional[Student]:
        result = await db.execute(select(Student).where(Student.id == student_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_student_by_number(db: AsyncSession, student_number: str) -> Optional[Student]:
        result = await db.execute(
            select(Student).where(Student.student_number == student_number)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_student_by_email(db: AsyncSession, email: str) -> Optional[Student]:
        result = await db.execute(select(Student).where(Student.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_students(
        db: AsyncSession,
        filters: Optional[StudentFilters] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Student], int]:
        """
        Get students matching filters, newest first.

        Returns:
            Tuple of (students, total matching)
        """
        conditions = []
        if filters is not None:
            if filters.course is not None:
                conditions.append(Student.course == filters.course)
            if filters.year_level is not None:
                conditions.append(Student.year_level == filters.year_level)
            if filters.semester is not None:
                conditions.append(Student.semester == filters.semester)
            if filters.school_year is not None:
                conditions.append(Student.school_year == filters.school_year)
            if filters.student_status is not None:
                conditions.append(Student.student_status == filters.student_status)
            if filters.enrollment_status is not None:
                conditions.append(Student.enrollment_status == filters.enrollment_status)

        count_result = await db.execute(
            select(func.count()).select_from(Student).where(*conditions)
        )
        total = count_result.scalar_one()

        result = await db.execute(
            select(Student)
            .where(*conditions)
            .order_by(Student.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def create_student(db: AsyncSession, student_in: StudentCreate) -> Student:
        """
        Create a student with a freshly allocated student number.

        Random sequences can collide with an existing student; the number is
        re-allocated up to STUDENT_NUMBER_MAX_ATTEMPTS times.

        Raises:
            UnknownCourseError: Course id not in the course table
            StudentConflictError: Email already used by another student
            StudentNumberAllocationError: No free number could be allocated
        """
        if student_in.course not in COURSE_CODES:
            raise UnknownCourseError(f"Unknown course id {student_in.course}")

        if student_in.email:
            existing = await StudentService.get_student_by_email(db, student_in.email)
            if existing:
                raise StudentConflictError("A student with this email already exists")

        student_number = await StudentService._allocate_free_number(
            db, student_in.course, student_in.school_year
        )

        student = Student(student_number=student_number, **student_in.model_dump())
        db.add(student)
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            raise StudentConflictError("Student number or email already in use") from exc
        await db.refresh(student)

        logger.info(
            "Student created",
            extra={"student_id": str(student.id), "student_number": student_number},
        )
        return student

    @staticmethod
    async def _allocate_free_number(db: AsyncSession, course: int, school_year: str) -> str:
        attempts = settings.STUDENT_NUMBER_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            student_number = await StudentNumberService.allocate(db, course, school_year)
            if await StudentService.get_student_by_number(db, student_number) is None:
                return student_number
            logger.warning(
                "Allocated student number already taken",
                extra={"student_number": student_number, "attempt": attempt},
            )
        raise StudentNumberAllocationError(
            f"Failed to generate a free student number after {attempts} attempts"
        )

    @staticmethod
    async def update_student(
        db: AsyncSession, student_id: UUID, student_in: StudentUpdate
    ) -> Optional[Student]:
        """Partial update. Returns None when the student does not exist."""
        student = await StudentService.get_student(db, student_id)
        if not student:
            return None

        update_data: Dict[str, Any] = student_in.model_dump(exclude_unset=True)
        new_email = update_data.get("email")
        if new_email and new_email != student.email:
            existing = await StudentService.get_student_by_email(db, new_email)
            if existing and existing.id != student.id:
                raise StudentConflictError("A student with this email already exists")

        for field, value in update_data.items():
            setattr(student, field, value)

        await db.commit()
        await db.refresh(student)
        return student
