"""Subject model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class Subject(BaseModel):
    """Subject taught at the institute (e.g. Science, Maths)."""

    __tablename__ = "subjects"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    # Relationships
    enrollments: Mapped[list["Enrollment"]] = relationship("Enrollment", back_populates="subject")

    def __repr__(self) -> str:
        return f"<Subject(id={self.id}, name={self.name})>"
