"""Payment routes."""

from fastapi import APIRouter, HTTPException, Query, status

from app.core.deps import DbSession, Now
from app.schemas.payment import (
    PaymentCreate,
    PaymentDeleted,
    PaymentRecorded,
    PaymentResponse,
)
from app.services import payment as payment_service
from app.services import student as student_service

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=PaymentRecorded)
async def record_payment(
    payment_data: PaymentCreate,
    db: DbSession,
    now: Now,
) -> PaymentRecorded:
    """
    Record a payment for a student, subject and month.

    Submitting again for the same period overwrites amount, notes and
    payment time instead of adding a second payment.
    """
    payment = await payment_service.upsert_payment(
        db,
        student_id=payment_data.student_id,
        subject_id=payment_data.subject_id,
        month=payment_data.month,
        year=payment_data.year,
        amount=payment_data.amount,
        notes=payment_data.notes,
        paid_at=now,
    )
    return PaymentRecorded(id=payment.id)


@router.get("/student/{student_id}", response_model=list[PaymentResponse])
async def get_payments_for_student(
    student_id: int,
    db: DbSession,
    now: Now,
    year: int | None = Query(None, description="Year, defaults to the current one"),
) -> list[PaymentResponse]:
    """Get a student's payments for a year, ordered by month."""
    student = await student_service.get_student_by_id(db, student_id)
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )

    payments = await payment_service.get_payments_for_student(db, student_id, year or now.year)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    db: DbSession,
) -> PaymentResponse:
    """Get a payment by ID."""
    payment = await payment_service.get_payment_by_id(db, payment_id)
    if not payment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )
    return PaymentResponse.model_validate(payment)


@router.delete("/{payment_id}", response_model=PaymentDeleted)
async def delete_payment(
    payment_id: int,
    db: DbSession,
) -> PaymentDeleted:
    """
    Undo a payment.

    The period goes back to unpaid. Unknown ids succeed as well.
    """
    await payment_service.delete_payment(db, payment_id)
    return PaymentDeleted()
