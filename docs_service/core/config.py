"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import List


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


DEFAULT_JWT_SECRET = "dev-insecure-key-change-me"


class Settings(BaseSettings):
    """
    Application settings read from the environment (or ``.env``).

    Validation happens once at import time; ``validate_production_config``
    adds the stricter checks that only apply to production deployments.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./docs_service.db",
        description="Database connection URL"
    )
    # Pool tuning applies to PostgreSQL only.
    db_pool_size: int = Field(default=5, description="Persistent database connections")
    db_max_overflow: int = Field(default=10, description="Extra connections during bursts")
    db_pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    db_pool_recycle: int = Field(default=1800, description="Seconds before a connection is recycled")

    # Authentication
    # AUTH_ENABLED=false makes every request act as DEV_USER_ID.
    jwt_secret_key: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="JWT signing secret (override in production)"
    )
    jwt_algorithm: str = Field(default="HS256")
    auth_enabled: bool = Field(
        default=False,
        description="Require bearer tokens on every endpoint"
    )
    dev_user_id: int = Field(
        default=1,
        description="Acting user id when authentication is disabled"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """Parse the comma-separated origin list. Wildcards are rejected."""
        origins = [origin.strip() for origin in self.cors_allowed_origins.split(',') if origin.strip()]
        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in CORS_ALLOWED_ORIGINS"
            )
        return origins

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ('json', 'text'):
            raise ValueError("Invalid log format. Must be 'json' or 'text'")
        return v_lower

    def validate_production_config(self) -> None:
        """Fail startup in production when security settings use insecure defaults.

        Raises:
            ConfigurationError: If production config is insecure.
        """
        if self.environment != Environment.PRODUCTION:
            return

        errors: list[str] = []
        if self.jwt_secret_key == DEFAULT_JWT_SECRET:
            errors.append(
                "JWT_SECRET_KEY is using the default insecure value. "
                "Generate a secure key: openssl rand -hex 32"
            )
        if not self.auth_enabled:
            errors.append("AUTH_ENABLED is false. Authentication must be enabled in production.")
        if self.database_url.startswith("sqlite"):
            errors.append("DATABASE_URL points at SQLite. Use PostgreSQL in production.")

        if errors:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(errors)
            )


# Global settings instance
settings = Settings()
