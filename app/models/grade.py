"""Grade model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class Grade(BaseModel):
    """Grade cohort; `level` gives the display ordering."""

    __tablename__ = "grades"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    enrollments: Mapped[list["Enrollment"]] = relationship("Enrollment", back_populates="grade")

    def __repr__(self) -> str:
        return f"<Grade(id={self.id}, name={self.name}, level={self.level})>"
