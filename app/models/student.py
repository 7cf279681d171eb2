"""Student model."""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class Student(BaseModel):
    """Student model - owns its enrollments, attendance and payments."""

    __tablename__ = "students"

    # Opaque identifier carried by the scannable credential
    student_uid: Mapped[str] = mapped_column(String(36), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    school: Mapped[str | None] = mapped_column(String(200))
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Parent information
    parent_name: Mapped[str | None] = mapped_column(String(200))
    parent_contact: Mapped[str | None] = mapped_column(String(50))

    # Relationships
    enrollments: Mapped[list["Enrollment"]] = relationship(
        "Enrollment",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    attendance_records: Mapped[list["AttendanceRecord"]] = relationship(
        "AttendanceRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    payments: Mapped[list["PaymentRecord"]] = relationship(
        "PaymentRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.full_name})>"
