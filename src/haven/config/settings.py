"""
HAVEN Application Settings

Configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration for the crisis event store."""

    model_config = SettingsConfigDict(env_prefix="HAVEN_DB_")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="haven_db", description="Database name")
    user: str = Field(default="haven_user", description="Database user")
    password: SecretStr = Field(default=SecretStr("dev_password"), description="Database password")
    pool_size: int = Field(default=10, ge=1, le=100, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, le=100, description="Max overflow connections")
    url: Optional[str] = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides host/port/name when set",
    )

    @property
    def async_url(self) -> str:
        """Generate async database URL for SQLAlchemy."""
        if self.url:
            return self.url
        password = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"


class CrisisSettings(BaseSettings):
    """
    Crisis engine configuration.

    CLINICAL_REVIEW_REQUIRED: Changing the intervention threshold
    changes who receives crisis resources and who is escalated.
    """

    model_config = SettingsConfigDict(env_prefix="HAVEN_CRISIS_")

    intervention_threshold: int = Field(
        default=8, ge=1, le=10,
        description="Risk level at which crisis handling starts",
    )
    persistence_timeout_seconds: float = Field(
        default=5.0, gt=0,
        description="Upper bound for recording a crisis event",
    )
    notification_timeout_seconds: float = Field(
        default=5.0, gt=0,
        description="Upper bound for dispatching a human escalation",
    )
    resources_config_path: Optional[str] = Field(
        default=None,
        description="Optional JSON file replacing the built-in resource list",
    )
    notifier: Literal["logging", "sentry"] = Field(
        default="logging",
        description="Human escalation channel",
    )


class MonitoringSettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="HAVEN_SENTRY_")

    dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN; empty disables Sentry")
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with HAVEN_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        threshold = settings.crisis.intervention_threshold
    """

    model_config = SettingsConfigDict(
        env_prefix="HAVEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    crisis: CrisisSettings = Field(default_factory=CrisisSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    For testing, construct Settings directly and pass it in.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
