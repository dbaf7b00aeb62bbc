"""Application configuration."""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    APP_NAME: str = "Workflow Orchestrator"
    APP_VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"
    ENVIRONMENT: str = "development"  # development, staging, production

    # Database Settings (workflow store + execution log sink)
    DATABASE_URL: str = "sqlite+aiosqlite:///./orchestrator.db"
    SQLALCHEMY_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10

    # AI processor (text-completion service)
    AI_PROCESSOR_URL: str = ""
    AI_PROCESSOR_API_KEY: str = ""
    AI_PROCESSOR_TIMEOUT: float = 120.0

    # Outbound HTTP for api_call steps
    HTTP_DEFAULT_TIMEOUT: float = 30.0

    # Email notifications
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    EMAIL_FROM: str = "workflows@localhost"

    # Slack notifications
    SLACK_WEBHOOK_URL: str = ""

    # SMS notifications (HTTP gateway)
    SMS_GATEWAY_URL: str = ""
    SMS_GATEWAY_TOKEN: str = ""

    # Engine behaviour
    DEPENDENCY_ORDERED_EXECUTION: bool = False
    ENFORCE_STEP_TIMEOUTS: bool = True
    DEFAULT_STEP_TIMEOUT: Optional[float] = None
    RECORD_STEP_RESULTS: bool = False

    # CORS Settings
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "auto"  # auto (text in development, json elsewhere), json or text

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse ALLOWED_ORIGINS string into a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def notification_channel_config(self) -> dict:
        """Build per-channel config for the notification manager.

        Only channels with their transport configured are included.
        """
        config: dict = {}
        if self.SMTP_HOST:
            config["email"] = {
                "smtp_host": self.SMTP_HOST,
                "smtp_port": self.SMTP_PORT,
                "smtp_user": self.SMTP_USER,
                "smtp_password": self.SMTP_PASSWORD,
                "from_address": self.EMAIL_FROM,
                "use_tls": self.SMTP_USE_TLS,
            }
        if self.SLACK_WEBHOOK_URL:
            config["slack"] = {"webhook_url": self.SLACK_WEBHOOK_URL}
        if self.SMS_GATEWAY_URL:
            config["sms"] = {
                "gateway_url": self.SMS_GATEWAY_URL,
                "token": self.SMS_GATEWAY_TOKEN,
            }
        return config

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Uses caching to ensure settings are loaded only once.

    Returns:
        Settings object with all configuration values
    """
    return Settings()
