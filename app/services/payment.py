"""Payment service - business logic for payment operations."""

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.database import upsert_statement
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.payment import PaymentRecord
from app.models.student import Student
from app.models.subject import Subject

logger = get_logger(__name__)


async def get_payment_by_id(db: AsyncSession, payment_id: int) -> PaymentRecord | None:
    """Get payment by ID."""
    query = (
        select(PaymentRecord)
        .where(PaymentRecord.id == payment_id)
        .options(selectinload(PaymentRecord.subject))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def upsert_payment(
    db: AsyncSession,
    *,
    student_id: int | None,
    subject_id: int | None,
    month: int | None,
    year: int | None,
    amount: float | None = None,
    notes: str | None = None,
    paid_at: datetime | None = None,
) -> PaymentRecord:
    """
    Record the payment for a student, subject and month.

    One atomic INSERT .. ON CONFLICT keyed on (student, subject, month, year):
    a repeated submission overwrites amount, notes and paid_at. Enrollment is
    not checked, so past periods can be settled after a student leaves a class.
    `paid_at` defaults to the database clock.
    """
    if not student_id or not subject_id or not month or not year:
        raise ValidationError("Student ID, subject ID, month, and year are required")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")

    student_result = await db.execute(select(Student.id).where(Student.id == student_id))
    if student_result.scalar_one_or_none() is None:
        raise NotFoundError("Student not found")
    subject_result = await db.execute(select(Subject.id).where(Subject.id == subject_id))
    if subject_result.scalar_one_or_none() is None:
        raise NotFoundError("Subject not found")

    stmt = upsert_statement(db, PaymentRecord).values(
        student_id=student_id,
        subject_id=subject_id,
        month=month,
        year=year,
        amount=amount or 0,
        notes=notes or None,
        paid_at=paid_at or func.now(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["student_id", "subject_id", "month", "year"],
        set_={
            "amount": stmt.excluded.amount,
            "notes": stmt.excluded.notes,
            "paid_at": stmt.excluded.paid_at,
            "updated_at": func.now(),
        },
    ).returning(PaymentRecord.id)

    result = await db.execute(stmt)
    payment_id = result.scalar_one()
    await db.commit()

    logger.info(
        "Payment recorded",
        payment_id=payment_id,
        student_id=student_id,
        subject_id=subject_id,
        period=f"{year}-{month:02d}",
        amount=amount or 0,
    )
    return await get_payment_by_id(db, payment_id)


async def delete_payment(db: AsyncSession, payment_id: int) -> None:
    """Undo a payment. Deleting an unknown id is not an error."""
    result = await db.execute(delete(PaymentRecord).where(PaymentRecord.id == payment_id))
    await db.commit()
    logger.info("Payment deleted", payment_id=payment_id, deleted=result.rowcount)


async def get_payments_for_student(
    db: AsyncSession,
    student_id: int,
    year: int,
) -> list[PaymentRecord]:
    """Get a student's payments for a year, ordered by month."""
    query = (
        select(PaymentRecord)
        .where(
            PaymentRecord.student_id == student_id,
            PaymentRecord.year == year,
        )
        .options(selectinload(PaymentRecord.subject))
        .order_by(PaymentRecord.month, PaymentRecord.subject_id)
    )
    result = await db.execute(query)
    return list(result.scalars().all())
