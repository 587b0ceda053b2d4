"""Configuration management using Pydantic Settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HOUSEHOLD_HEALTH_",
        extra="ignore",
    )

    # Service
    service_name: str = "household-health"
    log_level: str = "INFO"

    # Engine
    lookback_months: int = Field(default=6, ge=1, le=24)


settings = Settings()
