"""
Configuration management using Pydantic settings.
Handles database URL, token secrets, object storage and rate limits from the environment.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    # Application configuration
    app_name: str = "CityHom API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Individual database components used when DATABASE_URL is not set
    postgres_db: str = "cityhom"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "db"
    postgres_port: int = 5432

    database_url: Optional[str] = None

    # Token configuration
    access_token_secret: str = "change-me-access-secret"
    refresh_token_secret: str = "change-me-refresh-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 90
    refresh_cookie_name: str = "jwtToken"
    cookie_secure: Optional[bool] = None

    # API configuration
    api_v1_prefix: str = "/api/v1"
    frontend_url: Optional[str] = None
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    max_request_size: int = 10 * 1024 * 1024

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_minutes: int = 10

    # Object storage (S3 or an S3-compatible endpoint such as R2)
    aws_region: str = "ap-south-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    storage_bucket_name: str = "cityhom"
    storage_endpoint_url: Optional[str] = None
    storage_public_base_url: Optional[str] = None
    presigned_post_expires_seconds: int = 600

    # Upload limits
    max_upload_files: int = 20
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    allowed_file_types: List[str] = ["image/jpeg", "image/jpg", "image/png", "image/webp"]

    # Pagination defaults
    default_page_size: int = 10
    owner_page_size: int = 15
    max_page_size: int = 100

    # Admin dashboard
    dashboard_default_days: int = 7
    dashboard_max_days: int = 730
    dashboard_latest_count: int = 5

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        """Ensure the async driver is used."""
        if v and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("access_token_secret", "refresh_token_secret")
    @classmethod
    def validate_token_secret(cls, v):
        """Token secrets must be present."""
        if not v:
            raise ValueError("Token secrets are required")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @property
    def sqlalchemy_database_url(self) -> str:
        """Database URL, built from the individual components when not set directly."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def refresh_cookie_secure(self) -> bool:
        """Secure cookies everywhere except development unless set explicitly."""
        if self.cookie_secure is not None:
            return self.cookie_secure
        return not self.is_development

    @property
    def allowed_origins(self) -> List[str]:
        """CORS allow-list including the configured frontend."""
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.insert(0, self.frontend_url)
        return origins

    @property
    def storage_public_base(self) -> str:
        """Base URL under which uploaded objects are publicly reachable."""
        if self.storage_public_base_url:
            return self.storage_public_base_url.rstrip("/")
        return f"https://s3.{self.aws_region}.amazonaws.com/{self.storage_bucket_name}"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
