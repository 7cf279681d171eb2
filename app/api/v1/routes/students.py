"""Student routes."""

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import DbSession
from app.models.student import Student
from app.schemas.enrollment import EnrollmentResponse, EnrollmentSet
from app.schemas.student import (
    StudentCreate,
    StudentDetailResponse,
    StudentResponse,
    StudentUpdate,
)
from app.services import enrollment as enrollment_service
from app.services import student as student_service

router = APIRouter(prefix="/students", tags=["Students"])


# ============== Helper Functions ==============


async def _get_student_or_404(db: AsyncSession, student_id: int) -> Student:
    student = await student_service.get_student_by_id(db, student_id)
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )
    return student


async def _build_student_detail(db: AsyncSession, student: Student) -> StudentDetailResponse:
    """Build student response with active classes."""
    classes = await enrollment_service.list_active(db, student.id)
    return StudentDetailResponse(
        **StudentResponse.model_validate(student).model_dump(),
        classes=[EnrollmentResponse.model_validate(e) for e in classes],
    )


# ============== Endpoints ==============


@router.get("", response_model=list[StudentResponse])
async def list_students(
    db: DbSession,
    subject_id: int | None = Query(None, description="Only students actively enrolled in this subject"),
    grade_id: int | None = Query(None, description="Only students actively enrolled in this grade"),
    search: str | None = Query(None, description="Search by name or school"),
) -> list[StudentResponse]:
    """List students with optional filters."""
    students = await student_service.get_students(
        db,
        subject_id=subject_id,
        grade_id=grade_id,
        search=search,
    )
    return [StudentResponse.model_validate(s) for s in students]


@router.post("", response_model=StudentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    db: DbSession,
) -> StudentDetailResponse:
    """
    Create a new student.

    A random `student_uid` is generated for the student's scannable credential.
    """
    student = await student_service.create_student(db, student_data)
    return await _build_student_detail(db, student)


@router.get("/{student_id}", response_model=StudentDetailResponse)
async def get_student(
    student_id: int,
    db: DbSession,
) -> StudentDetailResponse:
    """Get a student with their active classes."""
    student = await _get_student_or_404(db, student_id)
    return await _build_student_detail(db, student)


@router.patch("/{student_id}", response_model=StudentDetailResponse)
async def update_student(
    student_id: int,
    student_data: StudentUpdate,
    db: DbSession,
) -> StudentDetailResponse:
    """
    Update a student.

    When `classes` is sent it replaces the active class list; classes left
    out are deactivated but their attendance and payments are kept.
    """
    student = await _get_student_or_404(db, student_id)
    updated_student = await student_service.update_student(db, student, student_data)
    return await _build_student_detail(db, updated_student)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: int,
    db: DbSession,
) -> None:
    """Delete a student along with their enrollments, attendance and payments."""
    student = await _get_student_or_404(db, student_id)
    await student_service.delete_student(db, student)


@router.get("/{student_id}/enrollments", response_model=list[EnrollmentResponse])
async def list_enrollments(
    student_id: int,
    db: DbSession,
) -> list[EnrollmentResponse]:
    """List a student's active enrollments."""
    await _get_student_or_404(db, student_id)
    enrollments = await enrollment_service.list_active(db, student_id)
    return [EnrollmentResponse.model_validate(e) for e in enrollments]


@router.put("/{student_id}/enrollments", response_model=list[EnrollmentResponse])
async def set_enrollments(
    student_id: int,
    enrollment_data: EnrollmentSet,
    db: DbSession,
) -> list[EnrollmentResponse]:
    """
    Replace a student's active enrollments.

    An empty list deactivates every class. Unknown subject or grade ids abort
    the whole change.
    """
    enrollments = await enrollment_service.set_enrollments(
        db,
        student_id,
        [(c.subject_id, c.grade_id) for c in enrollment_data.classes],
    )
    return [EnrollmentResponse.model_validate(e) for e in enrollments]
