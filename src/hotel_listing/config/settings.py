from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    # Any SQLAlchemy async URL works, e.g. postgresql+asyncpg://user:pw@host:5432/hotels
    DATABASE_URL: str = "sqlite+aiosqlite:///./hotel_listing.db"

    # Test database configuration
    TEST_DATABASE_URL: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    # Create missing tables on startup (local runs only; schema migration is handled elsewhere)
    DB_CREATE_ALL: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/hotel-listing")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def database_url(self) -> str:
        """
        Return the database URL for the current environment.

        When `TESTING` is enabled and `TEST_DATABASE_URL` is provided the test
        database is used, so a test run never touches the application database.
        """
        if self.TESTING and self.TEST_DATABASE_URL:
            return self.TEST_DATABASE_URL
        return self.DATABASE_URL

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        # logging expects upper-case level names ("debug" -> "DEBUG")
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        # .env sits next to the package root (src/hotel_listing/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings only depend on the environment, so one instance per process is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
