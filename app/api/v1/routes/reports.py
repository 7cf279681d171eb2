"""Report API routes."""

from fastapi import APIRouter, Query

from app.core.deps import DbSession, Now
from app.schemas.report import (
    DashboardStats,
    IncomeReport,
    PaymentReport,
    PaymentReportRow,
    PaymentStatus,
)
from app.services import report as report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    db: DbSession,
    now: Now,
) -> DashboardStats:
    """
    Get dashboard counters.

    Returns total students, today's attendance, active enrollments and how
    many of them are paid/unpaid for the current month.
    """
    stats = await report_service.get_dashboard_stats(db, now.date())
    return DashboardStats(**stats)


@router.get("/payments", response_model=PaymentReport)
async def get_payment_report(
    db: DbSession,
    now: Now,
    month: int | None = Query(None, ge=1, le=12, description="Month, defaults to the current one"),
    year: int | None = Query(None, description="Year, defaults to the current one"),
    subject_id: int | None = Query(None, description="Filter by subject ID"),
    grade_id: int | None = Query(None, description="Filter by grade ID"),
    payment_status: PaymentStatus | None = Query(None, alias="status", description="paid or unpaid"),
) -> PaymentReport:
    """
    Get the payment status of every active enrollment for a month.

    `paid_count` and `unpaid_count` cover every matching enrollment; the
    `status` filter only narrows `items`.
    """
    month = month or now.month
    year = year or now.year

    rows = [
        PaymentReportRow(**r)
        for r in await report_service.get_payment_report(
            db, month, year, subject_id=subject_id, grade_id=grade_id
        )
    ]
    paid_count = sum(1 for r in rows if r.is_paid)

    if payment_status is PaymentStatus.PAID:
        items = [r for r in rows if r.is_paid]
    elif payment_status is PaymentStatus.UNPAID:
        items = [r for r in rows if not r.is_paid]
    else:
        items = rows

    return PaymentReport(
        month=month,
        year=year,
        items=items,
        paid_count=paid_count,
        unpaid_count=len(rows) - paid_count,
    )


@router.get("/income", response_model=IncomeReport)
async def get_monthly_income(
    db: DbSession,
    now: Now,
    year: int | None = Query(None, description="Year, defaults to the current one"),
) -> IncomeReport:
    """
    Get income per month and per subject for a year.

    Months without payments are left out.
    """
    income = await report_service.get_monthly_income(db, year or now.year)
    return IncomeReport(**income)
