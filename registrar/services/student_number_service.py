"""Student Number Service - allocation of {year}-{COURSE}-{NNNNN} identifiers"""

import logging
import re
import secrets
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from registrar.config import settings
from registrar.constants.courses import COURSE_CODES, FALLBACK_COURSE_PREFIX
from registrar.core.exceptions import (
    InvalidCourseIdError,
    InvalidSchoolYearError,
    StudentNumberAllocationError,
)
from registrar.models.enums import SequenceStrategy
from registrar.services.counter_service import CounterService

logger = logging.getLogger(__name__)

SCHOOL_YEAR_PATTERN = re.compile(r"^(\d{4})-(\d{4})$")
STUDENT_NUMBER_PATTERN = re.compile(r"^\d{4}-[A-Z0-9]+-\d{5}$")

SEQUENCE_MIN = 10000
SEQUENCE_MAX = 99999
SEQUENCE_WIDTH = 5


@dataclass(frozen=True)
class StudentNumberAllocation:
    """Everything known about one allocation."""
    student_number: str
    course_code: str
    start_year: str
    counter_key: str
    counter_value: int


def parse_start_year(school_year: str) -> str:
    """
    Return the start year of a ``YYYY-YYYY`` school year.

    Raises:
        InvalidSchoolYearError: If school_year is not in YYYY-YYYY form
    """
    match = SCHOOL_YEAR_PATTERN.match((school_year or "").strip())
    if not match:
        raise InvalidSchoolYearError(
            f"Invalid school year format: {school_year!r} (expected YYYY-YYYY)"
        )
    return match.group(1)


def normalize_course_code(code: str) -> str:
    """Upper-case and drop anything outside A-Z0-9 (e.g. BSEd-English -> BSEDENGLISH)."""
    return re.sub(r"[^A-Z0-9]", "", str(code).upper())


def resolve_course_code(course_id: int) -> str:
    """
    Course id -> normalized course code, with COURSE{id} for unknown ids.

    Raises:
        InvalidCourseIdError: If course_id is not a positive integer
    """
    if isinstance(course_id, bool) or not isinstance(course_id, int) or course_id <= 0:
        raise InvalidCourseIdError(f"Invalid course id: {course_id!r} (expected a positive integer)")
    code =COURSE_CODES.get(course_id) or f"{FALLBACK_COURSE_PREFIX}{course_id}"
    return normalize_course_code(code)


def build_counter_key(course_code: str, start_year: str) -> str:
    return f"student_{course_code}_{start_year}"


def format_student_number(start_year: str, course_code: str, sequence: int) -> str:
    return f"{start_year}-{course_code}-{sequence:0{SEQUENCE_WIDTH}d}"


def draw_sequence(counter_value: int, strategy: Optional[str] = None) -> int:
    """
    Pick the visible sequence for an allocation.

    random: uniform in [10000, 99999], independent of the counter.
    counter: the counter value itself; must fit in five digits.
    """
    strategy = SequenceStrategy(strategy or settings.STUDENT_NUMBER_STRATEGY)
    if strategy == SequenceStrategy.COUNTER:
        if counter_value > SEQUENCE_MAX:
            raise OverflowError(
                f"Counter value {counter_value} does not fit in {SEQUENCE_WIDTH} digits"
            )
        return counter_value
    return SEQUENCE_MIN + secrets.randbelow(SEQUENCE_MAX - SEQUENCE_MIN + 1)


class StudentNumberService:
    """Service layer for student number allocation"""

    @staticmethod
    async def allocate_detailed(
        db: AsyncSession,
        course_id: int,
        school_year: str,
        strategy: Optional[str] = None,
    ) -> StudentNumberAllocation:
        """
        Allocate a student number and record it on the course/year counter.

        The counter increment and the commit form one transaction on ``db``.
        Anything pending on the session is committed with it.

        Args:
            db: Database session
            course_id: Numeric course id (unknown ids map to COURSE{id})
            school_year: School year in YYYY-YYYY form
            strategy: Override for STUDENT_NUMBER_STRATEGY

        Returns:
            StudentNumberAllocation

        Raises:
            InvalidSchoolYearError: If school_year is malformed (nothing is written)
            InvalidCourseIdError: If course_id is not positive (nothing is written)
            StudentNumberAllocationError: If the counter could not be incremented
                or committed; the transaction has been rolled back
        """
        start_year = parse_start_year(school_year)
        course_code = resolve_course_code(course_id)
        counter_key = build_counter_key(course_code, start_year)

        try:
            counter_value = await CounterService.find_and_increment(db, counter_key)
            sequence = draw_sequence(counter_value, strategy)
            await db.commit()
        except BaseException as exc:
            # Cancellation and timeouts roll back too
            try:
                await db.rollback()
            except Exception:
                logger.exception(
                    "Rollback failed after student number allocation error",
                    extra={"counter_key": counter_key},
                )
            if not isinstance(exc, Exception):
                raise
            logger.error(
                "Error generating student number",
                extra={"counter_key": counter_key, "course_id": course_id},
                exc_info=True,
            )
            raise StudentNumberAllocationError() from exc

        student_number = format_student_number(start_year, course_code, sequence)
        logger.info(
            "Allocated student number",
            extra={
                "student_number": student_number,
                "counter_key": counter_key,
                "counter_value": counter_value,
            },
        )
        return StudentNumberAllocation(
            student_number=student_number,
            course_code=course_code,
            start_year=start_year,
            counter_key=counter_key,
            counter_value=counter_value,
        )

    @staticmethod
    async def allocate(db: AsyncSession, course_id: int, school_year: str) -> str:
        """Allocate a student number, e.g. allocate(db, 101, "2024-2025") -> "2024-BEED-48213"."""
        allocation = await StudentNumberService.allocate_detailed(db, course_id, school_year)
        return allocation.student_number

    @staticmethod
    async def peek_next_sequence(db: AsyncSession, course_code: str, school_year: str) -> int:
        """
        Current counter value + 1 for a course code and school year.

        Non-transactional and only an estimate under concurrent allocation;
        never use it to build an actual student number.
        """
        start_year = parse_start_year(school_year)
        key = build_counter_key(normalize_course_code(course_code), start_year)
        return await CounterService.get_sequence(db, key) + 1

    @staticmethod
    async def get_current_sequence(db: AsyncSession, counter_key: str) -> int:
        return await CounterService.get_sequence(db, counter_key)

    @staticmethod
    async def reset_counter(db: AsyncSession, counter_key: str, value: int = 0):
        """Set a counter to an explicit value and commit."""
        try:
            counter = await CounterService.set_sequence(db, counter_key, value)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.warning(
            "Counter reset",
            extra={"counter_key": counter_key, "counter_value": value},
        )
        return counter
