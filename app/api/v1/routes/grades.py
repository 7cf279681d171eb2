"""Grade routes."""

from fastapi import APIRouter

from app.core.deps import DbSession
from app.schemas.reference import GradeResponse
from app.services import reference as reference_service

router = APIRouter(prefix="/grades", tags=["Grades"])


@router.get("", response_model=list[GradeResponse])
async def list_grades(db: DbSession) -> list[GradeResponse]:
    """List all grades ordered by level."""
    grades = await reference_service.get_grades(db)
    return [GradeResponse.model_validate(g) for g in grades]
