"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import app.models  # noqa: F401
from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.core.deps import get_now
from app.models.enrollment import Enrollment
from app.models.grade import Grade
from app.models.student import Student
from app.models.subject import Subject
from main import app

# Wednesday morning; every request sees this unless a test moves the clock
FROZEN_NOW = datetime(2024, 5, 1, 8, 0)


class Clock:
    """Settable replacement for the `get_now` dependency."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest_asyncio.fixture
async def test_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite file database private to a single test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )
    enable_sqlite_foreign_keys(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def clock() -> Clock:
    """Clock used by the API; set `clock.now` to move time."""
    return Clock(FROZEN_NOW)


@pytest_asyncio.fixture(scope="function")
async def setup_database(
    test_engine: AsyncEngine,
    test_session_maker: async_sessionmaker[AsyncSession],
    clock: Clock,
) -> AsyncGenerator[None, None]:
    """Create tables and point the app at the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = clock

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_now, None)


@pytest_asyncio.fixture
async def db(
    setup_database: None,
    test_session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_database: None) -> AsyncGenerator[AsyncClient, None]:
    """Get async HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ============== Reference data ==============


@pytest_asyncio.fixture
async def science(db: AsyncSession) -> Subject:
    subject = Subject(name="Science")
    db.add(subject)
    await db.commit()
    await db.refresh(subject)
    return subject


@pytest_asyncio.fixture
async def maths(db: AsyncSession) -> Subject:
    subject = Subject(name="Maths")
    db.add(subject)
    await db.commit()
    await db.refresh(subject)
    return subject


@pytest_asyncio.fixture
async def grade_8(db: AsyncSession) -> Grade:
    grade = Grade(name="Grade 8", level=8)
    db.add(grade)
    await db.commit()
    await db.refresh(grade)
    return grade


@pytest_asyncio.fixture
async def grade_9(db: AsyncSession) -> Grade:
    grade = Grade(name="Grade 9", level=9)
    db.add(grade)
    await db.commit()
    await db.refresh(grade)
    return grade


# ============== Students ==============


@pytest_asyncio.fixture
async def make_student(db: AsyncSession) -> Callable[..., Awaitable[Student]]:
    """Factory creating a student row without going through the API."""
    counter = 0

    async def _make(first_name: str = "Ama", last_name: str = "Mensah", **kwargs) -> Student:
        nonlocal counter
        counter += 1
        student = Student(
            student_uid=kwargs.pop("student_uid", f"uid-{counter:04d}"),
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )
        db.add(student)
        await db.commit()
        await db.refresh(student)
        return student

    return _make


@pytest_asyncio.fixture
async def student(make_student) -> Student:
    """Create a test student."""
    return await make_student("Ama", "Mensah", student_uid="qr-ama", school="Hilltop High")


@pytest_asyncio.fixture
async def enroll(db: AsyncSession) -> Callable[..., Awaitable[Enrollment]]:
    """Factory inserting an enrollment row directly."""

    async def _enroll(student: Student, subject: Subject, grade: Grade, active: bool = True) -> Enrollment:
        enrollment = Enrollment(
            student_id=student.id,
            subject_id=subject.id,
            grade_id=grade.id,
            active=active,
        )
        db.add(enrollment)
        await db.commit()
        await db.refresh(enrollment)
        return enrollment

    return _enroll
