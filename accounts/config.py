"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at startup and handed to the collaborators that need it;
    instances are frozen.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    # Database
    database_url: str = Field(default="sqlite:///./accounts.db")

    # JWT
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")

    # Session cookie
    cookie_name: str = Field(default="token")
    cookie_max_age_seconds: int = Field(default=24 * 60 * 60, gt=0)

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Whether user payloads carry the stored password hash
    expose_password_hash: bool = Field(default=True)

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=8005)
    log_level: str = Field(default="INFO")

    # API
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.is_production:
            if self.jwt_secret == DEFAULT_JWT_SECRET:
                raise ValueError("JWT_SECRET must be changed in production")
            if "sqlite" in self.database_url:
                raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
