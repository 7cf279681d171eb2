"""Attendance schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.student import StudentBrief


class ScanRequest(BaseModel):
    """Payload sent by the scanner."""

    student_uid: str = Field(..., min_length=1)
    subject_id: int = Field(..., gt=0)


class AttendanceStub(BaseModel):
    """Minimal attendance record returned on scan."""

    id: int
    scan_date: date
    scan_time: str

    model_config = ConfigDict(from_attributes=True)


class ScanResponse(BaseModel):
    """Outcome of a scan; domain-level failures are not errors."""

    success: bool
    message: str
    not_enrolled: bool = False
    already_scanned: bool = False
    student: StudentBrief
    attendance: AttendanceStub | None = None


class AttendanceResponse(BaseModel):
    """Attendance record joined with student and subject names."""

    id: int
    student_id: int
    subject_id: int
    scan_date: date
    scan_time: str
    first_name: str
    last_name: str
    student_uid: str
    subject_name: str
