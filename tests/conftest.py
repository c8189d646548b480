"""Shared pytest fixtures for unit and integration tests."""

import os

import pytest

# Configure the app before it is imported
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["DEBUG"] = "false"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import registrar.models  # noqa: F401
from registrar.config import settings
from registrar.database import Base, get_db
from registrar.main import app


@pytest.fixture
async def db_engine(tmp_path):
    """File-backed SQLite so concurrent sessions get their own connections."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'registrar.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def api_base() -> str:
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def async_client(session_factory, api_base: str):
    """Async HTTP client against the ASGI app, with get_db bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
def student_payload() -> dict:
    return {
        "first_name": "Maria",
        "middle_name": "Luna",
        "last_name": "Santos",
        "course": 101,
        "year_level": 1,
        "section": "A",
        "semester": "1st",
        "school_year": "2024-2025",
        "email": "maria.santos@example.com",
        "contact_number": "09171234567",
        "address": "123 Mabini St, Quezon City",
    }
