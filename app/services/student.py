"""Student service."""

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.enrollment import Enrollment
from app.models.student import Student
from app.schemas.student import StudentCreate, StudentUpdate
from app.services import enrollment as enrollment_service

logger = get_logger(__name__)


async def get_student_by_id(db: AsyncSession, student_id: int) -> Student | None:
    """Get student by ID."""
    result = await db.execute(select(Student).where(Student.id == student_id))
    return result.scalar_one_or_none()


async def get_student_by_uid(db: AsyncSession, student_uid: str) -> Student | None:
    """Get student by the external identifier carried on the scannable credential."""
    result = await db.execute(select(Student).where(Student.student_uid == student_uid))
    return result.scalar_one_or_none()


async def get_students(
    db: AsyncSession,
    *,
    subject_id: int | None = None,
    grade_id: int | None = None,
    search: str | None = None,
) -> list[Student]:
    """Get students, optionally only those actively enrolled in a subject and/or grade."""
    query = select(Student)

    if subject_id is not None or grade_id is not None:
        enrolled = select(Enrollment.id).where(
            Enrollment.student_id == Student.id,
            Enrollment.active.is_(True),
        )
        if subject_id is not None:
            enrolled = enrolled.where(Enrollment.subject_id == subject_id)
        if grade_id is not None:
            enrolled = enrolled.where(Enrollment.grade_id == grade_id)
        query = query.where(enrolled.exists())

    if search:
        query = query.where(
            or_(
                Student.first_name.ilike(f"%{search}%"),
                Student.last_name.ilike(f"%{search}%"),
                Student.school.ilike(f"%{search}%"),
            )
        )

    result = await db.execute(query.order_by(Student.first_name, Student.last_name))
    return list(result.scalars().all())


async def create_student(db: AsyncSession, student_data: StudentCreate) -> Student:
    """Create a new student together with their class list."""
    student = Student(
        student_uid=str(uuid.uuid4()),
        first_name=student_data.first_name,
        last_name=student_data.last_name,
        school=student_data.school,
        birthdate=student_data.birthdate,
        parent_name=student_data.parent_name,
        parent_contact=student_data.parent_contact,
    )
    db.add(student)
    await db.flush()

    await enrollment_service.apply_enrollments(
        db,
        student.id,
        [(c.subject_id, c.grade_id) for c in student_data.classes],
    )
    await db.commit()
    await db.refresh(student)

    logger.info("Student created", student_id=student.id, classes=len(student_data.classes))
    return student


async def update_student(
    db: AsyncSession,
    student: Student,
    student_data: StudentUpdate,
) -> Student:
    """Update a student; a submitted class list replaces the active one."""
    update_data = student_data.model_dump(exclude_unset=True, exclude={"classes"})

    for field, value in update_data.items():
        setattr(student, field, value)

    if student_data.classes is not None:
        await enrollment_service.apply_enrollments(
            db,
            student.id,
            [(c.subject_id, c.grade_id) for c in student_data.classes],
        )

    await db.commit()
    await db.refresh(student)

    return student


async def delete_student(db: AsyncSession, student: Student) -> None:
    """Delete a student with their enrollments, attendance and payments."""
    student_id = student.id
    await db.delete(student)
    await db.commit()
    logger.info("Student deleted", student_id=student_id)
