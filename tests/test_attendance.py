"""Tests for attendance scanning and listing."""

from datetime import date, datetime

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.attendance import AttendanceRecord, ScanStatus
from app.models.grade import Grade
from app.models.student import Student
from app.models.subject import Subject
from app.services import attendance as attendance_service


async def _count_attendance(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(AttendanceRecord))
    return result.scalar()


@pytest.fixture
async def enrolled_student(student: Student, science: Subject, grade_8: Grade, enroll) -> Student:
    """Student actively enrolled in Science, Grade 8."""
    await enroll(student, science, grade_8)
    return student


@pytest.fixture
async def add_record(db: AsyncSession):
    """Factory inserting an attendance row directly."""

    async def _add(student: Student, subject: Subject, scan_date: date, scan_time: str) -> AttendanceRecord:
        record = AttendanceRecord(
            student_id=student.id,
            subject_id=subject.id,
            scan_date=scan_date,
            scan_time=scan_time,
        )
        db.add(record)
        await db.commit()
        await db.refresh(record)
        return record

    return _add


class TestScan:
    """Tests for POST /attendance/scan."""

    async def test_first_scan_marks_present(
        self,
        client: AsyncClient,
        db: AsyncSession,
        enrolled_student: Student,
        science: Subject,
    ):
        """Test an enrolled student is marked present with the scan time."""
        response = await client.post(
            "/api/v1/attendance/scan",
            json={"student_uid": "qr-ama", "subject_id": science.id},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["not_enrolled"] is False
        assert data["already_scanned"] is False
        assert data["message"] == "Ama Mensah marked present at 08:00"
        assert data["student"]["id"] == enrolled_student.id
        assert data["student"]["student_uid"] == "qr-ama"
        assert data["attendance"]["scan_date"] == "2024-05-01"
        assert data["attendance"]["scan_time"] == "08:00"
        assert await _count_attendance(db) == 1

    async def test_second_scan_same_day(
        self,
        client: AsyncClient,
        db: AsyncSession,
        clock,
        enrolled_student: Student,
        science: Subject,
    ):
        """Test a repeated scan reports the first scan's time and writes nothing."""
        payload = {"student_uid": "qr-ama", "subject_id": science.id}
        first = await client.post("/api/v1/attendance/scan", json=payload)
        assert first.json()["success"] is True

        clock.now = datetime(2024, 5, 1, 8, 5)
        response = await client.post("/api/v1/attendance/scan", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["already_scanned"] is True
        assert data["not_enrolled"] is False
        assert data["message"] == "Ama Mensah already marked present today at 08:00"
        assert data["attendance"]["id"] == first.json()["attendance"]["id"]
        assert data["attendance"]["scan_time"] == "08:00"
        assert await _count_attendance(db) == 1

    async def test_scan_next_day(
        self,
        client: AsyncClient,
        db: AsyncSession,
        clock,
        enrolled_student: Student,
        science: Subject,
    ):
        """Test the one-per-day rule resets on a new date."""
        payload = {"student_uid": "qr-ama", "subject_id": science.id}
        await client.post("/api/v1/attendance/scan", json=payload)

        clock.now = datetime(2024, 5, 2, 9, 30)
        response = await client.post("/api/v1/attendance/scan", json=payload)

        data = response.json()
        assert data["success"] is True
        assert data["attendance"]["scan_date"] == "2024-05-02"
        assert data["attendance"]["scan_time"] == "09:30"
        assert await _count_attendance(db) == 2

    async def test_scan_other_subject_same_day(
        self,
        client: AsyncClient,
        db: AsyncSession,
        enrolled_student: Student,
        science: Subject,
        maths: Subject,
        grade_8: Grade,
        enroll,
    ):
        """Test each subject gets its own mark on the same day."""
        await enroll(enrolled_student, maths, grade_8)

        for subject in (science, maths):
            response = await client.post(
                "/api/v1/attendance/scan",
                json={"student_uid": "qr-ama", "subject_id": subject.id},
            )
            assert response.json()["success"] is True

        assert await _count_attendance(db) == 2

    async def test_not_enrolled(
        self,
        client: AsyncClient,
        db: AsyncSession,
        enrolled_student: Student,
        maths: Subject,
    ):
        """Test a student without an enrollment in the subject is refused."""
        response = await client.post(
            "/api/v1/attendance/scan",
            json={"student_uid": "qr-ama", "subject_id": maths.id},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["not_enrolled"] is True
        assert data["already_scanned"] is False
        assert data["message"] == "Ama Mensah is not registered for Maths"
        assert data["attendance"] is None
        assert await _count_attendance(db) == 0

    async def test_inactive_enrollment_is_not_enrolled(
        self,
        client: AsyncClient,
        db: AsyncSession,
        student: Student,
        science: Subject,
        grade_8: Grade,
        enroll,
    ):
        """Test a deactivated enrollment no longer admits scans."""
        await enroll(student, science, grade_8, active=False)

        response = await client.post(
            "/api/v1/attendance/scan",
            json={"student_uid": "qr-ama", "subject_id": science.id},
        )
        assert response.json()["not_enrolled"] is True
        assert await _count_attendance(db) == 0

    async def test_unknown_subject(
        self,
        client: AsyncClient,
        enrolled_student: Student,
    ):
        """Test an unknown subject id is reported as not enrolled."""
        response = await client.post(
            "/api/v1/attendance/scan",
            json={"student_uid": "qr-ama", "subject_id": 9999},
        )
        data = response.json()
        assert data["not_enrolled"] is True
        assert data["message"] == "Ama Mensah is not registered for this subject"

    async def test_unknown_student(
        self,
        client: AsyncClient,
        db: AsyncSession,
        science: Subject,
    ):
        """Test an unknown credential returns 404 and writes nothing."""
        response = await client.post(
            "/api/v1/attendance/scan",
            json={"student_uid": "nobody", "subject_id": science.id},
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Student not found"
        assert await _count_attendance(db) == 0

    async def test_missing_fields(self, client: AsyncClient):
        """Test an incomplete payload is rejected."""
        response = await client.post("/api/v1/attendance/scan", json={"student_uid": "qr-ama"})
        assert response.status_code == 422


class TestRecordScanService:
    """Tests for the attendance service."""

    async def test_unknown_student_outcome(self, db: AsyncSession, science: Subject):
        """Test the service reports a missing student as a terminal status."""
        outcome = await attendance_service.record_scan(db, "nobody", science.id, date(2024, 5, 1), "08:00")

        assert outcome.status is ScanStatus.STUDENT_NOT_FOUND
        assert outcome.success is False
        assert outcome.message == "Student not found"

    async def test_lost_race_reports_already_scanned(
        self,
        monkeypatch: pytest.MonkeyPatch,
        test_session_maker: async_sessionmaker,
        enrolled_student: Student,
        science: Subject,
        add_record,
    ):
        """Test a unique-constraint clash is turned into already scanned."""
        subject_id = science.id
        await add_record(enrolled_student, science, date(2024, 5, 1), "07:55")

        real_get_record = attendance_service._get_record
        calls = []

        async def stale_get_record(db, student_id, subject_id, scan_date):
            # First lookup misses, as if the other scan had not committed yet
            calls.append(scan_date)
            if len(calls) == 1:
                return None
            return await real_get_record(db, student_id, subject_id, scan_date)

        monkeypatch.setattr(attendance_service, "_get_record", stale_get_record)

        async with test_session_maker() as session:
            outcome = await attendance_service.record_scan(
                session, "qr-ama", subject_id, date(2024, 5, 1), "08:00"
            )

            assert outcome.status is ScanStatus.ALREADY_SCANNED
            assert outcome.attendance.scan_time == "07:55"
            assert outcome.message == "Ama Mensah already marked present today at 07:55"
        assert len(calls) == 2


class TestListAttendance:
    """Tests for GET /attendance and /attendance/today."""

    async def test_list_newest_first(
        self,
        client: AsyncClient,
        enrolled_student: Student,
        science: Subject,
        add_record,
    ):
        """Test records are ordered by date then time, newest first."""
        await add_record(enrolled_student, science, date(2024, 4, 30), "10:00")
        await add_record(enrolled_student, science, date(2024, 5, 1), "08:00")
        await add_record(enrolled_student, science, date(2024, 4, 29), "16:00")

        response = await client.get("/api/v1/attendance")
        assert response.status_code == 200
        data = response.json()
        assert [r["scan_date"] for r in data] == ["2024-05-01", "2024-04-30", "2024-04-29"]
        assert data[0]["first_name"] == "Ama"
        assert data[0]["student_uid"] == "qr-ama"
        assert data[0]["subject_name"] == "Science"

    async def test_filter_by_date_and_student(
        self,
        client: AsyncClient,
        make_student,
        enrolled_student: Student,
        science: Subject,
        add_record,
    ):
        """Test filtering by scan date and by student."""
        other = await make_student("Kofi", "Boateng")
        await add_record(enrolled_student, science, date(2024, 5, 1), "08:00")
        await add_record(other, science, date(2024, 5, 1), "08:10")
        await add_record(other, science, date(2024, 4, 30), "08:10")

        response = await client.get("/api/v1/attendance", params={"date": "2024-05-01"})
        data = response.json()
        # Same day, later scan first
        assert [r["first_name"] for r in data] == ["Kofi", "Ama"]

        response = await client.get("/api/v1/attendance", params={"student_id": other.id})
        assert len(response.json()) == 2

    async def test_filter_by_subject(
        self,
        client: AsyncClient,
        enrolled_student: Student,
        science: Subject,
        maths: Subject,
        add_record,
    ):
        """Test filtering by subject."""
        await add_record(enrolled_student, science, date(2024, 5, 1), "08:00")
        await add_record(enrolled_student, maths, date(2024, 5, 1), "10:00")

        response = await client.get("/api/v1/attendance", params={"subject_id": maths.id})
        data = response.json()
        assert len(data) == 1
        assert data[0]["subject_name"] == "Maths"

    async def test_filter_by_grade_matches_subject(
        self,
        client: AsyncClient,
        make_student,
        student: Student,
        science: Subject,
        maths: Subject,
        grade_8: Grade,
        grade_9: Grade,
        enroll,
        add_record,
    ):
        """Test the grade filter uses the enrollment for the record's own subject."""
        await enroll(student, science, grade_8)
        await enroll(student, maths, grade_9)
        other = await make_student("Kofi", "Boateng")
        await enroll(other, science, grade_9)

        await add_record(student, science, date(2024, 5, 1), "08:00")
        await add_record(student, maths, date(2024, 5, 1), "09:00")
        await add_record(other, science, date(2024, 5, 1), "08:30")

        response = await client.get("/api/v1/attendance", params={"grade_id": grade_8.id})
        data = response.json()
        assert [(r["first_name"], r["subject_name"]) for r in data] == [("Ama", "Science")]

        response = await client.get("/api/v1/attendance", params={"grade_id": grade_9.id})
        data = response.json()
        assert [(r["first_name"], r["subject_name"]) for r in data] == [
            ("Ama", "Maths"),
            ("Kofi", "Science"),
        ]

    async def test_today(
        self,
        client: AsyncClient,
        enrolled_student: Student,
        science: Subject,
        maths: Subject,
        add_record,
    ):
        """Test today's list only holds records for the current date."""
        await add_record(enrolled_student, science, date(2024, 4, 30), "08:00")
        await add_record(enrolled_student, science, date(2024, 5, 1), "08:00")
        await add_record(enrolled_student, maths, date(2024, 5, 1), "11:00")

        response = await client.get("/api/v1/attendance/today")
        assert response.status_code == 200
        data = response.json()
        assert [r["scan_time"] for r in data] == ["11:00", "08:00"]
        assert all(r["scan_date"] == "2024-05-01" for r in data)

        response = await client.get("/api/v1/attendance/today", params={"subject_id": science.id})
        assert len(response.json()) == 1
