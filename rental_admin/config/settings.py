from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, computed_field

# Load .env file from the working directory
load_dotenv()


class Settings(BaseSettings):
    """Base settings for the application."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    APP_NAME: str = "Rental Admin"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Moderation backend for car-rental listings"

    DATABASE_URL: str = ""
    LOCAL_SQLITE_PATH: str = "sqlite+aiosqlite:///./database.db"

    # Token auth
    JWT_SECRET: str = Field(default="JWT_SECRET_KEY", description="HS256 signing secret for session tokens")
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXP_SECONDS: int = 24 * 60 * 60

    # Bootstrap data
    SEED_ADMIN_USERNAME: str = "admin"
    SEED_ADMIN_PASSWORD: str = "admin123"
    SEED_SAMPLE_LISTINGS: bool = True

    # Moderation / audit policy
    AUDIT_LOG_LIMIT: int = Field(default=100, ge=1)
    AUDIT_REQUIRES_ADMIN: bool = Field(
        default=False,
        description="Restrict GET /audit to admins (default: any authenticated user)",
    )
    AUDIT_LISTING_EDITS: bool = Field(
        default=False,
        description="Record a 'listing_updated' audit entry for listing edits",
    )
    LISTING_EDIT_DENIED_STATUS: int = 403
    LISTING_STATUS_DENIED_STATUS: int = 401

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    CORS_ORIGINS: list[str] = ["*"]

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """Resolve the database URL for the application.

        Priority:
        1. Explicit DATABASE_URL (Postgres, SQLite, etc.)
        2. Local SQLite fallback for development: LOCAL_SQLITE_PATH
        """
        if self.DATABASE_URL and self.DATABASE_URL.strip():
            return self.DATABASE_URL.strip()
        if self.LOCAL_SQLITE_PATH and self.LOCAL_SQLITE_PATH.strip():
            return self.LOCAL_SQLITE_PATH.strip()
        return "sqlite+aiosqlite:///./database.db"


settings = Settings()
