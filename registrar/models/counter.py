"""Allocation counters keyed by course code and start year"""

from sqlalchemy import Column, DateTime, Integer, String

from registrar.database import Base
from registrar.models.base import TimestampMixin
from registrar.utils.time import get_utc_now


class Counter(TimestampMixin, Base):
    """
    One row per counter key, e.g. ``student_BEED_2024``.

    Rows are created on first allocation and only ever incremented
    (or explicitly reset by an operator); they are never deleted.
    """
    __tablename__ = "counters"

    id = Column(String(100), primary_key=True)
    sequence = Column(Integer, default=0, nullable=False)
    last_updated = Column(DateTime, default=get_utc_now, nullable=False)

    def __repr__(self) -> str:
        return f"<Counter {self.id}: {self.sequence}>"
