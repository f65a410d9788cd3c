"""Library configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tidyhq import __version__


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="tidyhq", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # API
    api_host: str = Field(default="https://api.tidyhq.com", alias="TIDYHQ_API_HOST")
    accounts_host: str = Field(
        default="https://accounts.tidyhq.com", alias="TIDYHQ_ACCOUNTS_HOST"
    )
    access_token: Optional[str] = Field(default=None, alias="TIDYHQ_ACCESS_TOKEN")
    request_timeout: int = Field(default=30, alias="TIDYHQ_REQUEST_TIMEOUT")
    user_agent: str = Field(
        default=f"tidyhq-python/{__version__}", alias="TIDYHQ_USER_AGENT"
    )

    # Webhooks
    webhook_id: Optional[str] = Field(default=None, alias="TIDYHQ_WEBHOOK_ID")
    webhook_signing_key: Optional[str] = Field(
        default=None, alias="TIDYHQ_WEBHOOK_SIGNING_KEY"
    )
    webhook_tolerance: int = Field(default=300, alias="TIDYHQ_WEBHOOK_TOLERANCE")

    @property
    def webhook_configured(self) -> bool:
        """Whether both webhook identity and signing key are set."""
        return bool(self.webhook_id and self.webhook_signing_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
