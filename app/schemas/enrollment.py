"""Enrollment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClassAssignment(BaseModel):
    """One (subject, grade) pair a student is enrolled in."""

    subject_id: int = Field(..., gt=0)
    grade_id: int = Field(..., gt=0)


class EnrollmentSet(BaseModel):
    """Replacement class list for a student."""

    classes: list[ClassAssignment] = Field(default_factory=list)


class EnrollmentResponse(BaseModel):
    """Active enrollment with subject and grade names."""

    id: int
    student_id: int
    subject_id: int
    subject_name: str
    grade_id: int
    grade_name: str
    active: bool
    enrolled_at: datetime

    model_config = ConfigDict(from_attributes=True)
