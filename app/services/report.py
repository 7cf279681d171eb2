"""Report service - business logic for generating reports."""

from datetime import date

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.attendance import AttendanceRecord
from app.models.enrollment import Enrollment
from app.models.grade import Grade
from app.models.payment import PaymentRecord
from app.models.student import Student
from app.models.subject import Subject


def _payment_for_period(month: int, year: int):
    """Join condition matching an enrollment to its payment for a period."""
    return and_(
        PaymentRecord.student_id == Enrollment.student_id,
        PaymentRecord.subject_id == Enrollment.subject_id,
        PaymentRecord.month == month,
        PaymentRecord.year == year,
    )


async def get_dashboard_stats(db: AsyncSession, today: date) -> dict:
    """
    Headline counters for `today`.

    Paid/unpaid are counted per active enrollment unit: a student with two
    active classes and one payment this month contributes one to each.
    """
    total_students = (
        await db.execute(select(func.count()).select_from(Student))
    ).scalar() or 0

    today_attendance = (
        await db.execute(
            select(func.count())
            .select_from(AttendanceRecord)
            .where(AttendanceRecord.scan_date == today)
        )
    ).scalar() or 0

    total_enrollments = (
        await db.execute(
            select(func.count())
            .select_from(Enrollment)
            .where(Enrollment.active.is_(True))
        )
    ).scalar() or 0

    paid_this_month = (
        await db.execute(
            select(func.count())
            .select_from(Enrollment)
            .join(PaymentRecord, _payment_for_period(today.month, today.year))
            .where(Enrollment.active.is_(True))
        )
    ).scalar() or 0

    return {
        "as_of": today,
        "total_students": total_students,
        "today_attendance": today_attendance,
        "total_enrollments": total_enrollments,
        "paid_this_month": paid_this_month,
        "unpaid_this_month": total_enrollments - paid_this_month,
    }


async def get_payment_report(
    db: AsyncSession,
    month: int,
    year: int,
    subject_id: int | None = None,
    grade_id: int | None = None,
) -> list[dict]:
    """
    One row per active enrollment, left-joined with its payment for the period.

    Rows with `payment_id` None are unpaid. Paid/unpaid filtering is left to
    the caller.
    """
    query = select(
        Student.id.label("student_id"),
        Student.first_name,
        Student.last_name,
        Student.student_uid,
        Enrollment.subject_id,
        Subject.name.label("subject_name"),
        Enrollment.grade_id,
        Grade.name.label("grade_name"),
        PaymentRecord.id.label("payment_id"),
        PaymentRecord.amount,
        PaymentRecord.paid_at,
        PaymentRecord.notes,
    ).select_from(
        Enrollment
    ).join(
        Student, Enrollment.student_id == Student.id
    ).join(
        Subject, Enrollment.subject_id == Subject.id
    ).join(
        Grade, Enrollment.grade_id == Grade.id
    ).outerjoin(
        PaymentRecord, _payment_for_period(month, year)
    ).where(
        Enrollment.active.is_(True)
    )

    if subject_id is not None:
        query = query.where(Enrollment.subject_id == subject_id)
    if grade_id is not None:
        query = query.where(Enrollment.grade_id == grade_id)

    query = query.order_by(Student.first_name, Student.last_name, Subject.name, Grade.level)

    result = await db.execute(query)
    return [dict(row._mapping) for row in result]


async def get_monthly_income(db: AsyncSession, year: int) -> dict:
    """Income per month and per subject for a year. Months without payments are absent."""

    # Total per month
    monthly_query = select(
        PaymentRecord.month,
        func.sum(PaymentRecord.amount).label("total"),
        func.count(PaymentRecord.id).label("count"),
    ).where(
        PaymentRecord.year == year
    ).group_by(
        PaymentRecord.month
    ).order_by(
        PaymentRecord.month
    )
    monthly_result = await db.execute(monthly_query)
    monthly_totals = [
        {"month": row.month, "total": row.total or 0, "count": row.count}
        for row in monthly_result
    ]

    # Subject-wise breakdown per month
    breakdown_query = select(
        PaymentRecord.month,
        Subject.id.label("subject_id"),
        Subject.name.label("subject_name"),
        func.sum(PaymentRecord.amount).label("total"),
        func.count(PaymentRecord.id).label("count"),
    ).join(
        Subject, PaymentRecord.subject_id == Subject.id
    ).where(
        PaymentRecord.year == year
    ).group_by(
        PaymentRecord.month, Subject.id, Subject.name
    ).order_by(
        PaymentRecord.month, Subject.name
    )
    breakdown_result = await db.execute(breakdown_query)
    subject_breakdown = [
        {
            "month": row.month,
            "subject_id": row.subject_id,
            "subject_name": row.subject_name,
            "total": row.total or 0,
            "count": row.count,
        }
        for row in breakdown_result
    ]

    # Yearly total
    yearly_query = select(
        func.coalesce(func.sum(PaymentRecord.amount), 0).label("total"),
        func.count(PaymentRecord.id).label("count"),
    ).where(
        PaymentRecord.year == year
    )
    yearly_row = (await db.execute(yearly_query)).one()

    return {
        "year": year,
        "monthly_totals": monthly_totals,
        "subject_breakdown": subject_breakdown,
        "yearly_total": yearly_row.total or 0,
        "total_payments": yearly_row.count or 0,
    }
