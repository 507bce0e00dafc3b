"""Application configuration with Pydantic Settings.

This module provides centralized configuration management using pydantic-settings.
Settings are loaded from environment variables and .env files.

Examples:
    >>> from blogbliss.config import get_settings
    >>> get_settings().STORAGE_BACKEND
    <StorageBackendType.LOCAL: 'local'>

Tests:
    - tests/unit/test_config.py::TestSettings
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"


class StorageBackendType(str, Enum):
    """Supported blob storage backends."""

    LOCAL = "local"
    S3 = "s3"


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        DATABASE_URL: Database connection string (SQLite or PostgreSQL)
        JWT_SECRET_KEY: HS256 signing secret for access tokens
        JWT_EXPIRE_DAYS: Access token lifetime in days
        BCRYPT_ROUNDS: bcrypt cost factor for password hashes
        MAX_THUMBNAIL_BYTES: Upper bound for post thumbnails
        MAX_AVATAR_BYTES: Upper bound for user avatars
        STORAGE_BACKEND: Where blobs live (local filesystem or S3)
        STORAGE_ROOT: Root directory for the local backend
        STORAGE_PUBLIC_BASE_URL: Prefix used to render bare locators as links
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./blogbliss.db",
        description="Database connection string",
    )

    # Application Settings
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo, error details, API docs)",
    )
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:5173"],
        description="Origins allowed to call the API with credentials",
    )

    # Credentials
    JWT_SECRET_KEY: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret used to sign access tokens",
    )
    JWT_EXPIRE_DAYS: int = Field(
        default=1,
        ge=1,
        description="Access token lifetime in days",
    )
    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt cost factor",
    )

    # Upload limits
    MAX_THUMBNAIL_BYTES: int = Field(
        default=2_000_000,
        gt=0,
        description="Maximum post thumbnail size in bytes",
    )
    MAX_AVATAR_BYTES: int = Field(
        default=500_000,
        gt=0,
        description="Maximum avatar size in bytes",
    )

    # Blob storage
    STORAGE_BACKEND: StorageBackendType = Field(
        default=StorageBackendType.LOCAL,
        description="Blob storage backend",
    )
    STORAGE_ROOT: str = Field(
        default="./uploads",
        description="Root directory for the local storage backend",
    )
    STORAGE_PUBLIC_BASE_URL: str | None = Field(
        default=None,
        description="Public URL prefix for stored blobs (derived when unset)",
    )
    S3_BUCKET: str | None = Field(default=None, description="S3 bucket name")
    S3_REGION: str = Field(default="us-east-1", description="S3 region")
    S3_ENDPOINT_URL: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores (MinIO, R2, COS)",
    )
    S3_ACCESS_KEY_ID: str | None = Field(default=None, description="S3 access key")
    S3_SECRET_ACCESS_KEY: str | None = Field(default=None, description="S3 secret key")

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format."""
        valid_prefixes = ("sqlite", "postgresql", "postgres")
        if not any(v.startswith(prefix) for prefix in valid_prefixes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {valid_prefixes}"
            )
        return v

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        """The S3 backend cannot work without a bucket."""
        if self.STORAGE_BACKEND == StorageBackendType.S3 and not self.S3_BUCKET:
            raise ValueError("S3_BUCKET is required when STORAGE_BACKEND=s3")
        return self

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """Refuse to sign tokens with the default secret in production."""
        if self.is_production and self.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def public_base_url(self) -> str:
        """Prefix for rendering stored locators as links.

        Falls back to ``/uploads`` for the local backend and to the
        virtual-hosted bucket URL for S3.
        """
        if self.STORAGE_PUBLIC_BASE_URL:
            return self.STORAGE_PUBLIC_BASE_URL.rstrip("/")
        if self.STORAGE_BACKEND == StorageBackendType.S3:
            if self.S3_ENDPOINT_URL:
                return f"{self.S3_ENDPOINT_URL.rstrip('/')}/{self.S3_BUCKET}"
            return f"https://{self.S3_BUCKET}.s3.{self.S3_REGION}.amazonaws.com"
        return "/uploads"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings.
    """
    return Settings()
