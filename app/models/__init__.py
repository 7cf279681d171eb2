# Database models

from app.models.subject import Subject
from app.models.grade import Grade
from app.models.student import Student
from app.models.enrollment import Enrollment
from app.models.attendance import AttendanceRecord, ScanStatus
from app.models.payment import PaymentRecord

__all__ = [
    "Subject",
    "Grade",
    "Student",
    "Enrollment",
    "AttendanceRecord",
    "ScanStatus",
    "PaymentRecord",
]
