"""Enrollment Service - term enrollments for existing students"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.core.exceptions import EnrollmentConflictError
from registrar.models.enrollment import Enrollment
from registrar.models.enums import EnrollmentRecordStatus, Semester
from registrar.schemas.enrollment import EnrollmentCreate
from registrar.services.student_service import StudentService

logger = logging.getLogger(__name__)

# Enrollments in these states do not block a new enrollment for the same term
INACTIVE_STATUSES = (EnrollmentRecordStatus.DROPPED, EnrollmentRecordStatus.CANCELLED)


class EnrollmentService:
    """Service layer for term enrollments"""

    @staticmethod
    async def get_active_enrollment(
        db: AsyncSession, student_id: UUID, school_year: str, semester: Semester
    ) -> Optional[Enrollment]:
        """Any enrollment for the term that is not dropped or cancelled."""
        result = await db.execute(
            select(Enrollment)
            .where(
                Enrollment.student_id == student_id,
                Enrollment.school_year == school_year,
                Enrollment.semester == semester,
                Enrollment.status.notin_(INACTIVE_STATUSES),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def enroll_student(
        db: AsyncSession, student_id: UUID, enrollment_in: EnrollmentCreate
    ) -> Optional[Enrollment]:
        """
        Create a pending enrollment for a term and make it the current one.

        Returns None when the student does not exist.

        Raises:
            EnrollmentConflictError: The student already has an active
                enrollment for the same school year and semester
        """
        student = await StudentService.get_student(db, student_id)
        if not student:
            return None

        existing = await EnrollmentService.get_active_enrollment(
            db, student_id, enrollment_in.school_year, enrollment_in.semester
        )
        if existing:
            raise EnrollmentConflictError("Student is already enrolled for this semester")

        await db.execute(
            update(Enrollment)
            .where(Enrollment.student_id == student_id, Enrollment.is_current.is_(True))
            .values(is_current=False)
            .execution_options(synchronize_session=False)
        )

        enrollment = Enrollment(
            student_id=student.id,
            student_number=student.student_number,
            school_year=enrollment_in.school_year,
            semester=enrollment_in.semester,
            year_level=student.year_level,
            course=student.course,
            status=EnrollmentRecordStatus.PENDING,
            is_current=True,
            remarks=enrollment_in.remarks,
        )
        db.add(enrollment)
        await db.commit()
        await db.refresh(enrollment)

        logger.info(
            "Student enrolled",
            extra={
                "student_id": str(student.id),
                "student_number": student.student_number,
                "school_year": enrollment.school_year,
                "semester": enrollment.semester.value,
            },
        )
        return enrollment

    @staticmethod
    async def get_current_enrollment(
        db: AsyncSession, student_id: UUID, school_year: str, semester: Semester
    ) -> Optional[Enrollment]:
        result = await db.execute(
            select(Enrollment)
            .where(
                Enrollment.student_id == student_id,
                Enrollment.school_year == school_year,
                Enrollment.semester == semester,
                Enrollment.status != EnrollmentRecordStatus.DROPPED,
                Enrollment.is_current.is_(True),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_enrollment_history(db: AsyncSession, student_id: UUID) -> List[Enrollment]:
        """All enrollments of a student, latest school year and semester first."""
        result = await db.execute(
            select(Enrollment)
            .where(Enrollment.student_id == student_id)
            .order_by(
                Enrollment.school_year.desc(),
                # Enum order and stored text both sort 1st < 2nd < Summer
                Enrollment.semester.desc(),
                Enrollment.created_at.desc(),
            )
        )
        return list(result.scalars().all())
