"""Enrollment model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, UniqueConstraint, func, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class Enrollment(BaseModel):
    """Student x subject x grade. Deactivated, never deleted, on class changes."""

    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "grade_id", name="uq_enrollment_student_subject_grade"),
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
    grade_id: Mapped[int] = mapped_column(
        ForeignKey("grades.id"),
        nullable=False,
        index=True,
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=true(),
        nullable=False,
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    student: Mapped["Student"] = relationship("Student", back_populates="enrollments")
    subject: Mapped["Subject"] = relationship("Subject", back_populates="enrollments")
    grade: Mapped["Grade"] = relationship("Grade", back_populates="enrollments")

    @property
    def subject_name(self) -> str:
        return self.subject.name

    @property
    def grade_name(self) -> str:
        return self.grade.name

    def __repr__(self) -> str:
        return (
            f"<Enrollment(student_id={self.student_id}, subject_id={self.subject_id}, "
            f"grade_id={self.grade_id}, active={self.active})>"
        )
