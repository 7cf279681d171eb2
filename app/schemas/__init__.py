"""Pydantic schemas."""

from app.schemas.attendance import (
    AttendanceResponse,
    AttendanceStub,
    ScanRequest,
    ScanResponse,
)
from app.schemas.enrollment import (
    ClassAssignment,
    EnrollmentResponse,
    EnrollmentSet,
)
from app.schemas.payment import (
    PaymentCreate,
    PaymentDeleted,
    PaymentRecorded,
    PaymentResponse,
)
from app.schemas.reference import GradeResponse, SubjectResponse
from app.schemas.report import (
    DashboardStats,
    IncomeReport,
    PaymentReport,
    PaymentReportRow,
)
from app.schemas.student import (
    StudentBrief,
    StudentCreate,
    StudentDetailResponse,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    # Attendance
    "AttendanceResponse",
    "AttendanceStub",
    "ScanRequest",
    "ScanResponse",
    # Enrollment
    "ClassAssignment",
    "EnrollmentResponse",
    "EnrollmentSet",
    # Payment
    "PaymentCreate",
    "PaymentDeleted",
    "PaymentRecorded",
    "PaymentResponse",
    # Reference data
    "GradeResponse",
    "SubjectResponse",
    # Reports
    "DashboardStats",
    "IncomeReport",
    "PaymentReport",
    "PaymentReportRow",
    # Student
    "StudentBrief",
    "StudentCreate",
    "StudentDetailResponse",
    "StudentResponse",
    "StudentUpdate",
]
