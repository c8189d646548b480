"""Integration tests: allocator against a real SQLite counter table."""

import asyncio
import re
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from registrar.core.exceptions import (
    InvalidCourseIdError,
    InvalidSchoolYearError,
    StudentNumberAllocationError,
)
from registrar.services.counter_service import CounterService
from registrar.services.student_number_service import StudentNumberService

STUDENT_NUMBER_RE = re.compile(r"^\d{4}-[A-Z0-9]+-\d{5}$")


@pytest.mark.asyncio
async def test_fresh_store_scenario(db_session):
    first = await StudentNumberService.allocate(db_session, 101, "2024-2025")
    second = await StudentNumberService.allocate(db_session, 101, "2024-2025")

    for number in (first, second):
        assert STUDENT_NUMBER_RE.match(number)
        assert number.startswith("2024-BEED-")
    assert first != second
    assert await StudentNumberService.get_current_sequence(db_session, "student_BEED_2024") == 2


@pytest.mark.asyncio
async def test_unknown_course_fallback(db_session):
    number = await StudentNumberService.allocate(db_session, 999, "2024-2025")
    assert number.startswith("2024-COURSE999-")
    assert await StudentNumberService.get_current_sequence(db_session, "student_COURSE999_2024") == 1


@pytest.mark.asyncio
async def test_hyphenated_course_codes_keep_format(db_session):
    number = await StudentNumberService.allocate(db_session, 102, "2024-2025")
    assert number.startswith("2024-BSEDENGLISH-")
    assert STUDENT_NUMBER_RE.match(number)


@pytest.mark.asyncio
async def test_sequential_allocations_increment_counter_by_n(db_session):
    key = "student_BSEDMATH_2026"
    before = await StudentNumberService.get_current_sequence(db_session, key)

    for _ in range(7):
        await StudentNumberService.allocate(db_session, 103, "2026-2027")

    assert await StudentNumberService.get_current_sequence(db_session, key) == before + 7


@pytest.mark.asyncio
async def test_counters_are_per_course_and_year(db_session):
    await StudentNumberService.allocate(db_session, 101, "2024-2025")
    await StudentNumberService.allocate(db_session, 101, "2025-2026")
    await StudentNumberService.allocate(db_session, 201, "2024-2025")

    assert await StudentNumberService.get_current_sequence(db_session, "student_BEED_2024") == 1
    assert await StudentNumberService.get_current_sequence(db_session, "student_BEED_2025") == 1
    assert await StudentNumberService.get_current_sequence(db_session, "student_BSBAHRM_2024") == 1


@pytest.mark.asyncio
async def test_concurrent_allocations_observe_distinct_counter_values(session_factory):
    async def allocate_once():
        async with session_factory() as session:
            return await StudentNumberService.allocate_detailed(session, 101, "2024-2025")

    allocations = await asyncio.gather(*(allocate_once() for _ in range(10)))

    values = sorted(a.counter_value for a in allocations)
    assert values == list(range(1, 11))

    async with session_factory() as session:
        assert await StudentNumberService.get_current_sequence(session, "student_BEED_2024") == 10


@pytest.mark.asyncio
async def test_counter_strategy_numbers_are_unique(session_factory):
    async def allocate_once():
        async with session_factory() as session:
            return await StudentNumberService.allocate_detailed(
                session, 201, "2024-2025", strategy="counter"
            )

    allocations = await asyncio.gather(*(allocate_once() for _ in range(5)))

    numbers = sorted(a.student_number for a in allocations)
    assert numbers == [f"2024-BSBAHRM-{n:05d}" for n in range(1, 6)]


@pytest.mark.asyncio
async def test_commit_failure_leaves_counter_unchanged(db_session, session_factory, monkeypatch):
    await StudentNumberService.allocate(db_session, 101, "2024-2025")

    async def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

    monkeypatch.setattr(db_session, "commit", failing_commit)
    with pytest.raises(StudentNumberAllocationError):
        await StudentNumberService.allocate(db_session, 101, "2024-2025")

    async with session_factory() as other:
        assert await StudentNumberService.get_current_sequence(other, "student_BEED_2024") == 1


@pytest.mark.asyncio
async def test_commit_and_rollback_failure_still_raises_allocation_error(
    db_session, session_factory, monkeypatch
):
    async def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

    async def failing_rollback():
        raise OperationalError("ROLLBACK", {}, Exception("server closed the connection"))

    monkeypatch.setattr(db_session, "commit", failing_commit)
    monkeypatch.setattr(db_session, "rollback", failing_rollback)
    with pytest.raises(StudentNumberAllocationError) as exc_info:
        await StudentNumberService.allocate(db_session, 101, "2024-2025")
    assert isinstance(exc_info.value.__cause__, OperationalError)

    monkeypatch.undo()
    await db_session.rollback()
    async with session_factory() as other:
        assert await StudentNumberService.get_current_sequence(other, "student_BEED_2024") == 0


@pytest.mark.asyncio
async def test_non_positive_course_id_writes_nothing(db_session):
    with pytest.raises(InvalidCourseIdError):
        await StudentNumberService.allocate(db_session, -1, "2024-2025")

    assert await CounterService.get_counter(db_session, "student_COURSE1_2024") is None


@pytest.mark.asyncio
async def test_retry_after_failure_succeeds(db_session, monkeypatch):
    original_commit = db_session.commit
    calls = {"n": 0}

    async def flaky_commit():
        calls["n"] += 1
        if calls["n"] == 1:
            raise OperationalError("COMMIT", {}, Exception("timeout"))
        await original_commit()

    monkeypatch.setattr(db_session, "commit", flaky_commit)
    with pytest.raises(StudentNumberAllocationError):
        await StudentNumberService.allocate(db_session, 101, "2024-2025")

    number = await StudentNumberService.allocate(db_session, 101, "2024-2025")
    assert number.startswith("2024-BEED-")
    assert await StudentNumberService.get_current_sequence(db_session, "student_BEED_2024") == 1


@pytest.mark.asyncio
async def test_invalid_school_year_writes_nothing(db_session):
    with pytest.raises(InvalidSchoolYearError):
        await StudentNumberService.allocate(db_session, 101, "2024")

    assert await CounterService.get_counter(db_session, "student_BEED_2024") is None


@pytest.mark.asyncio
async def test_peek_next_sequence(db_session):
    assert await StudentNumberService.peek_next_sequence(db_session, "BEED", "2024-2025") == 1

    await StudentNumberService.allocate(db_session, 101, "2024-2025")
    await StudentNumberService.allocate(db_session, 101, "2024-2025")

    assert await StudentNumberService.peek_next_sequence(db_session, "beed", "2024-2025") == 3
    # Peeking reserves nothing
    assert await StudentNumberService.get_current_sequence(db_session, "student_BEED_2024") == 2


@pytest.mark.asyncio
async def test_reset_counter(db_session):
    for _ in range(3):
        await StudentNumberService.allocate(db_session, 101, "2024-2025")

    counter = await StudentNumberService.reset_counter(db_session, "student_BEED_2024", 0)
    assert counter.sequence == 0

    allocation = await StudentNumberService.allocate_detailed(db_session, 101, "2024-2025")
    assert allocation.counter_value == 1


@pytest.mark.asyncio
async def test_reset_creates_missing_counter(db_session):
    counter = await StudentNumberService.reset_counter(db_session, "student_BEED_2030", 41)
    assert counter.sequence == 41

    allocation = await StudentNumberService.allocate_detailed(db_session, 101, "2030-2031")
    assert allocation.counter_value == 42


@pytest.mark.asyncio
async def test_reset_rejects_negative(db_session):
    with pytest.raises(ValueError):
        await StudentNumberService.reset_counter(db_session, "student_BEED_2024", -1)


@pytest.mark.asyncio
async def test_store_failure_during_increment(db_session):
    with patch.object(
        CounterService,
        "find_and_increment",
        side_effect=OperationalError("INSERT", {}, Exception("database is unreachable")),
    ):
        with pytest.raises(StudentNumberAllocationError):
            await StudentNumberService.allocate(db_session, 101, "2024-2025")

    assert await StudentNumberService.get_current_sequence(db_session, "student_BEED_2024") == 0
