"""Base Models and Mixins"""

import uuid
from sqlalchemy import Column, DateTime, Uuid

from registrar.database import Base
from registrar.utils.time import get_utc_now


class TimestampMixin:
    """
    Mixin for created/updated timestamps.

    Provides:
    - created_at timestamp
    - updated_at timestamp
    """
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class BaseModel(TimestampMixin, Base):
    """
    Base model class with common fields for UUID-keyed models.

    Provides:
    - UUID primary key
    - created_at / updated_at timestamps
    """
    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
