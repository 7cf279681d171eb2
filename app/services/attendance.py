"""Attendance service - one presence mark per student, subject and day."""

from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StorageError
from app.core.logging import get_logger
from app.models.attendance import AttendanceRecord, ScanStatus
from app.models.enrollment import Enrollment
from app.models.student import Student
from app.models.subject import Subject
from app.services import enrollment as enrollment_service
from app.services import reference as reference_service
from app.services import student as student_service

logger = get_logger(__name__)


@dataclass
class ScanOutcome:
    """Result of a scan attempt. Every status is terminal."""

    status: ScanStatus
    student: Student | None = None
    subject_name: str | None = None
    attendance: AttendanceRecord | None = None

    @property
    def success(self) -> bool:
        return self.status is ScanStatus.SCANNED

    @property
    def message(self) -> str:
        if self.status is ScanStatus.STUDENT_NOT_FOUND:
            return "Student not found"
        name = self.student.full_name
        if self.status is ScanStatus.NOT_ENROLLED:
            return f"{name} is not registered for {self.subject_name}"
        if self.status is ScanStatus.ALREADY_SCANNED:
            return f"{name} already marked present today at {self.attendance.scan_time}"
        return f"{name} marked present at {self.attendance.scan_time}"


async def _get_record(
    db: AsyncSession,
    student_id: int,
    subject_id: int,
    scan_date: date,
) -> AttendanceRecord | None:
    result = await db.execute(
        select(AttendanceRecord).where(
            AttendanceRecord.student_id == student_id,
            AttendanceRecord.subject_id == subject_id,
            AttendanceRecord.scan_date == scan_date,
        )
    )
    return result.scalar_one_or_none()


async def record_scan(
    db: AsyncSession,
    student_uid: str,
    subject_id: int,
    scan_date: date,
    scan_time: str,
) -> ScanOutcome:
    """
    Mark a student present for a subject on `scan_date`.

    Only students actively enrolled in the subject can be marked. A second
    scan on the same day writes nothing and reports the first scan's time.
    The unique (student, subject, date) constraint decides races between
    concurrent scans.
    """
    student = await student_service.get_student_by_uid(db, student_uid)
    if student is None:
        logger.info("Scan rejected", reason="student_not_found", student_uid=student_uid)
        return ScanOutcome(ScanStatus.STUDENT_NOT_FOUND)

    subject = await reference_service.get_subject_by_id(db, subject_id)
    subject_name = subject.name if subject else "this subject"

    if not await enrollment_service.is_actively_enrolled(db, student.id, subject_id):
        logger.info("Scan rejected", reason="not_enrolled", student_id=student.id, subject_id=subject_id)
        return ScanOutcome(ScanStatus.NOT_ENROLLED, student, subject_name)

    existing = await _get_record(db, student.id, subject_id, scan_date)
    if existing is not None:
        return ScanOutcome(ScanStatus.ALREADY_SCANNED, student, subject_name, existing)

    record = AttendanceRecord(
        student_id=student.id,
        subject_id=subject_id,
        scan_date=scan_date,
        scan_time=scan_time,
    )
    db.add(record)
    try:
        await db.commit()
    except IntegrityError as exc:
        # A concurrent scan inserted the row first
        await db.rollback()
        await db.refresh(student)
        existing = await _get_record(db, student.id, subject_id, scan_date)
        if existing is None:
            raise StorageError("Attendance could not be recorded") from exc
        return ScanOutcome(ScanStatus.ALREADY_SCANNED, student, subject_name, existing)

    await db.refresh(record)
    logger.info(
        "Attendance recorded",
        student_id=student.id,
        subject_id=subject_id,
        scan_date=str(scan_date),
        scan_time=scan_time,
    )
    return ScanOutcome(ScanStatus.SCANNED, student, subject_name, record)


async def get_attendance(
    db: AsyncSession,
    *,
    subject_id: int | None = None,
    grade_id: int | None = None,
    scan_date: date | None = None,
    student_id: int | None = None,
) -> list[dict]:
    """Get attendance records with student and subject names, newest first."""
    query = select(
        AttendanceRecord.id,
        AttendanceRecord.student_id,
        AttendanceRecord.subject_id,
        AttendanceRecord.scan_date,
        AttendanceRecord.scan_time,
        Student.first_name,
        Student.last_name,
        Student.student_uid,
        Subject.name.label("subject_name"),
    ).join(
        Student, AttendanceRecord.student_id == Student.id
    ).join(
        Subject, AttendanceRecord.subject_id == Subject.id
    )

    # Apply filters
    if student_id is not None:
        query = query.where(AttendanceRecord.student_id == student_id)
    if subject_id is not None:
        query = query.where(AttendanceRecord.subject_id == subject_id)
    if scan_date is not None:
        query = query.where(AttendanceRecord.scan_date == scan_date)
    if grade_id is not None:
        in_grade = select(Enrollment.id).where(
            Enrollment.student_id == AttendanceRecord.student_id,
            Enrollment.subject_id == AttendanceRecord.subject_id,
            Enrollment.grade_id == grade_id,
            Enrollment.active.is_(True),
        ).exists()
        query = query.where(in_grade)

    query = query.order_by(
        AttendanceRecord.scan_date.desc(),
        AttendanceRecord.scan_time.desc(),
        AttendanceRecord.id.desc(),
    )

    result = await db.execute(query)
    return [dict(row._mapping) for row in result]


async def get_today_attendance(
    db: AsyncSession,
    today: date,
    subject_id: int | None = None,
) -> list[dict]:
    """Get today's attendance, latest scan first."""
    return await get_attendance(db, subject_id=subject_id, scan_date=today)
