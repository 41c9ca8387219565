"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

Production Secrets Management:
- Local: .env file (gitignored)
- Production: injected by the deployment platform's secret store
  (e.g. `doppler run -- uvicorn apps.assistant_api.main:app`)
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings documented in .env.example.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================
    ENVIRONMENT: str = Field(
        default="development", pattern="^(development|staging|production)$"
    )

    # ========================================================================
    # PLATFORM BUSINESS API
    # ========================================================================
    PLATFORM_API_URL: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the platform API that tool handlers call into",
    )
    PLATFORM_SERVICE_TOKEN: str = Field(
        default="",
        description="Service token sent alongside the forwarded user identity",
    )
    PLATFORM_TIMEOUT_SECONDS: float = Field(
        default=30.0, gt=0, description="HTTP timeout for platform calls"
    )

    # ========================================================================
    # CONFIRMATION GATE
    # ========================================================================
    CONFIRMATION_EXPIRY_MINUTES: int = Field(
        default=30,
        ge=1,
        description="How long a pending confirmation stays valid",
    )
    CONFIRMATION_RETENTION_MINUTES: int = Field(
        default=10,
        ge=0,
        description="How long resolved confirmations are kept before being dropped",
    )

    # ========================================================================
    # AUTH (api channel)
    # ========================================================================
    JWT_SECRET_KEY: str = Field(
        default="CHANGE_ME_dev_secret_key_min_32_chars",
        description="JWT signing key (rotate in production!)",
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_MINUTES: int = Field(default=60)

    # ========================================================================
    # API SERVER
    # ========================================================================
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_CORS_ORIGINS: str = Field(default="http://localhost:5173")

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")
