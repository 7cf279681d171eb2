"""Subject routes."""

from fastapi import APIRouter

from app.core.deps import DbSession
from app.schemas.reference import SubjectResponse
from app.services import reference as reference_service

router = APIRouter(prefix="/subjects", tags=["Subjects"])


@router.get("", response_model=list[SubjectResponse])
async def list_subjects(db: DbSession) -> list[SubjectResponse]:
    """List all subjects ordered by name."""
    subjects = await reference_service.get_subjects(db)
    return [SubjectResponse.model_validate(s) for s in subjects]
