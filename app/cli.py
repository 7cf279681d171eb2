"""CLI commands for management tasks."""

import asyncio
import sys

from app.core.config import settings
from app.core.database import async_session_maker, create_tables
from app.services import reference as reference_service


async def seed() -> None:
    """Insert the default subjects and grades."""
    async with async_session_maker() as db:
        await reference_service.seed_reference_data(
            db, settings.SEED_SUBJECTS, settings.SEED_GRADES
        )
        subjects = await reference_service.get_subjects(db)
        grades = await reference_service.get_grades(db)

    print("✓ Reference data ready")
    print(f"  Subjects: {', '.join(s.name for s in subjects)}")
    print(f"  Grades: {', '.join(g.name for g in grades)}")


async def init_db() -> None:
    """Create all tables, then seed reference data."""
    await create_tables()
    print("✓ Tables created")
    await seed()


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m app.cli <command>")
        print("Commands:")
        print("  init-db    Create tables and seed subjects/grades")
        print("  seed       Seed subjects/grades only")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_db())
    elif command == "seed":
        asyncio.run(seed())
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
