"""Application settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration."""

    APP_NAME: str = "Tuition Ledger"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./tuition_ledger.db"
    AUTO_CREATE_TABLES: bool = True

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Attendance
    SCAN_TIME_FORMAT: str = "%H:%M"

    # Reference data seeded on startup
    SEED_SUBJECTS: list[str] = ["Science", "Maths"]
    SEED_GRADES: dict[str, int] = {
        "Grade 6": 6,
        "Grade 7": 7,
        "Grade 8": 8,
        "Grade 9": 9,
        "Grade 10": 10,
        "Grade 11": 11,
    }

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
