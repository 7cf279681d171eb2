"""Payment model."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class PaymentRecord(BaseModel):
    """Tuition payment for one student, subject and calendar month."""

    __tablename__ = "payments"
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "month", "year", name="uq_payment_student_subject_period"),
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
    month: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-12
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(
        Float,
        default=0,
        server_default="0",
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(Text)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    student: Mapped["Student"] = relationship("Student", back_populates="payments")
    subject: Mapped["Subject"] = relationship("Subject")

    @property
    def subject_name(self) -> str:
        return self.subject.name

    def __repr__(self) -> str:
        return (
            f"<PaymentRecord(student_id={self.student_id}, subject_id={self.subject_id}, "
            f"period={self.year}-{self.month:02d}, amount={self.amount})>"
        )
