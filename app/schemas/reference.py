"""Subject and grade schemas."""

from pydantic import BaseModel, ConfigDict


class SubjectResponse(BaseModel):
    """Subject response schema."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class GradeResponse(BaseModel):
    """Grade response schema."""

    id: int
    name: str
    level: int

    model_config = ConfigDict(from_attributes=True)
