"""Reference data service - subjects and grades."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import upsert_statement
from app.core.logging import get_logger
from app.models.grade import Grade
from app.models.subject import Subject

logger = get_logger(__name__)


async def get_subjects(db: AsyncSession) -> list[Subject]:
    """Get all subjects ordered by name."""
    result = await db.execute(select(Subject).order_by(Subject.name))
    return list(result.scalars().all())


async def get_grades(db: AsyncSession) -> list[Grade]:
    """Get all grades ordered by level."""
    result = await db.execute(select(Grade).order_by(Grade.level))
    return list(result.scalars().all())


async def get_subject_by_id(db: AsyncSession, subject_id: int) -> Subject | None:
    """Get subject by ID."""
    result = await db.execute(select(Subject).where(Subject.id == subject_id))
    return result.scalar_one_or_none()


async def get_grade_by_id(db: AsyncSession, grade_id: int) -> Grade | None:
    """Get grade by ID."""
    result = await db.execute(select(Grade).where(Grade.id == grade_id))
    return result.scalar_one_or_none()


async def seed_reference_data(
    db: AsyncSession,
    subjects: list[str],
    grades: dict[str, int],
) -> None:
    """Insert default subjects and grades, ignoring the ones already present."""
    for name in subjects:
        stmt = upsert_statement(db, Subject).values(name=name)
        await db.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))

    for name, level in grades.items():
        stmt = upsert_statement(db, Grade).values(name=name, level=level)
        await db.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))

    await db.commit()
    logger.info("Reference data seeded", subjects=len(subjects), grades=len(grades))
