"""Attendance model."""

from datetime import date
from enum import Enum

from sqlalchemy import Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class ScanStatus(str, Enum):
    """Outcome of a scan attempt."""

    STUDENT_NOT_FOUND = "student_not_found"
    NOT_ENROLLED = "not_enrolled"
    ALREADY_SCANNED = "already_scanned"
    SCANNED = "scanned"


class AttendanceRecord(BaseModel):
    """One presence mark per student, subject and day."""

    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "scan_date", name="uq_attendance_student_subject_date"),
    )

    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject_id: Mapped[int] = mapped_column(
        ForeignKey("subjects.id"),
        nullable=False,
        index=True,
    )
    scan_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    scan_time: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    student: Mapped["Student"] = relationship("Student", back_populates="attendance_records")
    subject: Mapped["Subject"] = relationship("Subject")

    def __repr__(self) -> str:
        return (
            f"<AttendanceRecord(student_id={self.student_id}, subject_id={self.subject_id}, "
            f"scan_date={self.scan_date}, scan_time={self.scan_time})>"
        )
