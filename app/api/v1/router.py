"""API v1 router aggregating all route modules."""

from fastapi import APIRouter

from app.api.v1.routes import (
    attendance,
    grades,
    payments,
    reports,
    students,
    subjects,
)

api_router = APIRouter()

api_router.include_router(subjects.router)
api_router.include_router(grades.router)
api_router.include_router(students.router)
api_router.include_router(attendance.router)
api_router.include_router(payments.router)
api_router.include_router(reports.router)
