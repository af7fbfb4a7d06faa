"""Configuration management for the application."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./postboard.db")
    auto_create_tables: bool = Field(default=True)

    # Sessions
    session_cookie_name: str = Field(default="postboard_session")
    session_ttl_minutes: int = Field(default=10080)  # 7 days
    session_cookie_secure: bool = Field(default=False)

    # Profiles
    default_bio: str = Field(default="Welcome to my profile!")

    # Rendering
    templates_dir: str = Field(default=str(PACKAGE_DIR / "templates"))
    static_dir: str = Field(default=str(PACKAGE_DIR / "static"))

    # App
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
            if not self.session_cookie_secure:
                raise ValueError("SESSION_COOKIE_SECURE must be enabled in production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
