"""Attendance routes."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from app.core.config import settings
from app.core.deps import DbSession, Now
from app.models.attendance import ScanStatus
from app.schemas.attendance import (
    AttendanceResponse,
    AttendanceStub,
    ScanRequest,
    ScanResponse,
)
from app.schemas.student import StudentBrief
from app.services import attendance as attendance_service

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/scan", response_model=ScanResponse)
async def scan(
    scan_data: ScanRequest,
    db: DbSession,
    now: Now,
) -> ScanResponse:
    """
    Record attendance from a scanned student credential.

    Not-enrolled and already-scanned are reported with `success: false`
    and a flag; they are not errors. An unknown `student_uid` is a 404.
    """
    outcome = await attendance_service.record_scan(
        db,
        scan_data.student_uid,
        scan_data.subject_id,
        scan_date=now.date(),
        scan_time=now.strftime(settings.SCAN_TIME_FORMAT),
    )

    if outcome.status is ScanStatus.STUDENT_NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )

    attendance = None
    if outcome.attendance is not None:
        attendance = AttendanceStub.model_validate(outcome.attendance)

    return ScanResponse(
        success=outcome.success,
        message=outcome.message,
        not_enrolled=outcome.status is ScanStatus.NOT_ENROLLED,
        already_scanned=outcome.status is ScanStatus.ALREADY_SCANNED,
        student=StudentBrief.model_validate(outcome.student),
        attendance=attendance,
    )


@router.get("", response_model=list[AttendanceResponse])
async def list_attendance(
    db: DbSession,
    subject_id: int | None = Query(None, description="Filter by subject ID"),
    grade_id: int | None = Query(None, description="Filter by grade of the active enrollment"),
    scan_date: date | None = Query(None, alias="date", description="Filter by scan date"),
    student_id: int | None = Query(None, description="Filter by student ID"),
) -> list[AttendanceResponse]:
    """List attendance records, newest first."""
    records = await attendance_service.get_attendance(
        db,
        subject_id=subject_id,
        grade_id=grade_id,
        scan_date=scan_date,
        student_id=student_id,
    )
    return [AttendanceResponse(**r) for r in records]


@router.get("/today", response_model=list[AttendanceResponse])
async def list_today_attendance(
    db: DbSession,
    now: Now,
    subject_id: int | None = Query(None, description="Filter by subject ID"),
) -> list[AttendanceResponse]:
    """List today's attendance, latest scan first."""
    records = await attendance_service.get_today_attendance(db, now.date(), subject_id)
    return [AttendanceResponse(**r) for r in records]
