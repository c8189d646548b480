"""Counter Service - atomic increment primitive over the counters table"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.models.counter import Counter
from registrar.utils.time import get_utc_now

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CounterService:
    """
    Counters are touched only through these methods. None of them commit;
    the caller owns the transaction.
    """

    @staticmethod
    async def find_and_increment(db: AsyncSession, key: str) -> int:
        """
        Atomically increment the counter at ``key`` and return the new value.

        A missing counter is created at 0 and incremented, so the first call
        for a key returns 1.

        Args:
            db: Database session (inside the caller's transaction)
            key: Counter key, e.g. ``student_BEED_2024``

        Returns:
            The post-increment sequence value
        """
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            return await CounterService._locked_increment(db, key)

        now = get_utc_now()
        stmt = insert(Counter).values(
            id=key,
            sequence=1,
            last_updated=now,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Counter.id],
            set_={
                "sequence": Counter.sequence + 1,
                "last_updated": now,
                "updated_at": now,
            },
        ).returning(Counter.sequence)
        result = await db.execute(stmt)
        return result.scalar_one()

    @staticmethod
    async def _locked_increment(db: AsyncSession, key: str) -> int:
        """Row-lock fallback for dialects without INSERT ... ON CONFLICT"""
        result = await db.execute(
            select(Counter).where(Counter.id == key).with_for_update()
        )
        counter = result.scalar_one_or_none()
        now = get_utc_now()
        if counter is None:
            counter = Counter(id=key, sequence=0)
            db.add(counter)
        counter.sequence += 1
        counter.last_updated = now
        await db.flush()
        return counter.sequence

    @staticmethod
    async def get_counter(db: AsyncSession, key: str) -> Optional[Counter]:
        """Plain read, no locking."""
        result = await db.execute(select(Counter).where(Counter.id == key))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_sequence(db: AsyncSession, key: str) -> int:
        """Current value of the counter at ``key``; 0 when it does not exist."""
        result = await db.execute(select(Counter.sequence).where(Counter.id == key))
        value = result.scalar_one_or_none()
        return value or 0

    @staticmethod
    async def set_sequence(db: AsyncSession, key: str, value: int) -> Counter:
        """Upsert the counter at ``key`` to an explicit value."""
        if value < 0:
            raise ValueError("Counter value cannot be negative")

        now = get_utc_now()
        result = await db.execute(
            update(Counter)
            .where(Counter.id == key)
            .values(sequence=value, last_updated=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.add(Counter(id=key, sequence=value, last_updated=now))
        await db.flush()

        counter = await db.get(Counter, key, populate_existing=True)
        return counter
