"""Student schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.enrollment import ClassAssignment, EnrollmentResponse


class StudentCreate(BaseModel):
    """Schema for creating a new student."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    school: str | None = Field(None, max_length=200)
    birthdate: date | None = None

    # Parent information
    parent_name: str | None = Field(None, max_length=200)
    parent_contact: str | None = Field(None, max_length=50)

    classes: list[ClassAssignment] = Field(default_factory=list)


class StudentUpdate(BaseModel):
    """
    Schema for updating a student.

    `classes`, when present, replaces the student's active class list.
    """

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    school: str | None = Field(None, max_length=200)
    birthdate: date | None = None

    # Parent information
    parent_name: str | None = Field(None, max_length=200)
    parent_contact: str | None = Field(None, max_length=50)

    classes: list[ClassAssignment] | None = None


class StudentBrief(BaseModel):
    """Identity fields echoed back by the scan endpoint."""

    id: int
    student_uid: str
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class StudentResponse(BaseModel):
    """Student response schema."""

    id: int
    student_uid: str
    first_name: str
    last_name: str
    school: str | None
    birthdate: date | None

    # Parent information
    parent_name: str | None
    parent_contact: str | None

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentDetailResponse(StudentResponse):
    """Student with active classes."""

    classes: list[EnrollmentResponse] = Field(default_factory=list)
