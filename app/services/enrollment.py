"""Enrollment service - which students may attend and pay for which subjects."""

from collections.abc import Iterable

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.core.database import upsert_statement
from app.core.exceptions import NotFoundError, UnknownReferenceError
from app.core.logging import get_logger
from app.models.enrollment import Enrollment
from app.models.grade import Grade
from app.models.student import Student
from app.models.subject import Subject

logger = get_logger(__name__)

ClassPair = tuple[int, int]


def _dedupe(classes: Iterable[ClassPair]) -> list[ClassPair]:
    """Drop repeated (subject_id, grade_id) pairs, keeping submission order."""
    return list(dict.fromkeys((subject_id, grade_id) for subject_id, grade_id in classes))


async def _check_references(db: AsyncSession, pairs: list[ClassPair]) -> None:
    """Raise UnknownReferenceError if any subject or grade id does not exist."""
    subject_ids = {subject_id for subject_id, _ in pairs}
    grade_ids = {grade_id for _, grade_id in pairs}

    if subject_ids:
        result = await db.execute(select(Subject.id).where(Subject.id.in_(subject_ids)))
        missing = subject_ids - set(result.scalars().all())
        if missing:
            raise UnknownReferenceError(f"Subject not found: {', '.join(map(str, sorted(missing)))}")

    if grade_ids:
        result = await db.execute(select(Grade.id).where(Grade.id.in_(grade_ids)))
        missing = grade_ids - set(result.scalars().all())
        if missing:
            raise UnknownReferenceError(f"Grade not found: {', '.join(map(str, sorted(missing)))}")


async def apply_enrollments(
    db: AsyncSession,
    student_id: int,
    classes: Iterable[ClassPair],
) -> None:
    """
    Make the student's active enrollments equal `classes` without committing.

    Active pairs missing from `classes` are deactivated. Submitted pairs are
    upserted on (student, subject, grade), so a historical row is reactivated
    instead of duplicated. References are checked before anything is written.
    """
    wanted = _dedupe(classes)
    await _check_references(db, wanted)

    result = await db.execute(
        select(Enrollment.id, Enrollment.subject_id, Enrollment.grade_id).where(
            Enrollment.student_id == student_id,
            Enrollment.active.is_(True),
        )
    )
    current = {(row.subject_id, row.grade_id): row.id for row in result}

    wanted_keys = set(wanted)
    removed_ids = [enrollment_id for key, enrollment_id in current.items() if key not in wanted_keys]
    if removed_ids:
        await db.execute(
            update(Enrollment)
            .where(Enrollment.id.in_(removed_ids))
            .values(active=False, updated_at=func.now())
        )

    added = [key for key in wanted if key not in current]
    for subject_id, grade_id in added:
        stmt = upsert_statement(db, Enrollment).values(
            student_id=student_id,
            subject_id=subject_id,
            grade_id=grade_id,
            active=True,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["student_id", "subject_id", "grade_id"],
            set_={"active": True, "updated_at": func.now()},
        )
        await db.execute(stmt)

    if removed_ids or added:
        logger.info(
            "Enrollments changed",
            student_id=student_id,
            activated=added,
            deactivated=len(removed_ids),
        )


async def set_enrollments(
    db: AsyncSession,
    student_id: int,
    classes: Iterable[ClassPair],
) -> list[Enrollment]:
    """Replace the student's active enrollment set in one transaction."""
    result = await db.execute(select(Student.id).where(Student.id == student_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Student not found")

    await apply_enrollments(db, student_id, classes)
    await db.commit()

    return await list_active(db, student_id)


async def is_actively_enrolled(db: AsyncSession, student_id: int, subject_id: int) -> bool:
    """True if the student has an active enrollment for the subject in any grade."""
    result = await db.execute(
        select(Enrollment.id)
        .where(
            Enrollment.student_id == student_id,
            Enrollment.subject_id == subject_id,
            Enrollment.active.is_(True),
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def list_active(db: AsyncSession, student_id: int) -> list[Enrollment]:
    """Get a student's active enrollments with subject and grade loaded."""
    query = (
        select(Enrollment)
        .join(Enrollment.subject)
        .join(Enrollment.grade)
        .where(
            Enrollment.student_id == student_id,
            Enrollment.active.is_(True),
        )
        .options(contains_eager(Enrollment.subject), contains_eager(Enrollment.grade))
        .order_by(Grade.level, Subject.name)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    return list(result.scalars().all())
