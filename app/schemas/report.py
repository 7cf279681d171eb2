"""Report schemas."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


# ============== Dashboard ==============


class DashboardStats(BaseModel):
    """Headline counters for the dashboard."""

    as_of: date
    total_students: int
    today_attendance: int
    total_enrollments: int = Field(description="Active enrollment units")
    paid_this_month: int = Field(description="Active enrollment units paid for the current month")
    unpaid_this_month: int = Field(description="Active enrollment units without a payment this month")


# ============== Payment Status Report ==============


class PaymentStatus(str, Enum):
    """Paid/unpaid filter applied over the payment report."""

    PAID = "paid"
    UNPAID = "unpaid"


class PaymentReportRow(BaseModel):
    """One active enrollment unit with its payment for the period, if any."""

    student_id: int
    first_name: str
    last_name: str
    student_uid: str
    subject_id: int
    subject_name: str
    grade_id: int
    grade_name: str
    payment_id: int | None = None
    amount: float | None = None
    paid_at: datetime | None = None
    notes: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.payment_id is not None


class PaymentReport(BaseModel):
    """Payment status of every active enrollment for a month."""

    month: int
    year: int
    items: list[PaymentReportRow]
    paid_count: int
    unpaid_count: int


# ============== Income ==============


class MonthlyIncome(BaseModel):
    """Income collected in a single month."""

    month: int
    total: float
    count: int


class SubjectIncome(BaseModel):
    """Income collected for one subject in a single month."""

    month: int
    subject_id: int
    subject_name: str
    total: float
    count: int


class IncomeReport(BaseModel):
    """
    Yearly income breakdown.

    Months without payments are absent from both sequences.
    """

    year: int
    monthly_totals: list[MonthlyIncome]
    subject_breakdown: list[SubjectIncome]
    yearly_total: float
    total_payments: int
