"""Payment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PaymentCreate(BaseModel):
    """
    Schema for recording a payment.

    A second submission for the same student, subject, month and year
    overwrites the first.
    """

    student_id: int = Field(..., gt=0)
    subject_id: int = Field(..., gt=0)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900, le=9999)
    amount: float | None = Field(default=0, ge=0, description="Payment amount; null is stored as 0")
    notes: str | None = None


class PaymentRecorded(BaseModel):
    """Response for a recorded payment."""

    success: bool = True
    id: int


class PaymentDeleted(BaseModel):
    """Response for an undone payment."""

    success: bool = True


class PaymentResponse(BaseModel):
    """Payment record with subject name."""

    id: int
    student_id: int
    subject_id: int
    subject_name: str
    month: int
    year: int
    amount: float
    notes: str | None
    paid_at: datetime

    model_config = ConfigDict(from_attributes=True)
