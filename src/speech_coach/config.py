"""Application configuration loaded from environment variables."""

import os
import sys

from pydantic import BaseModel, Field, computed_field

from speech_coach.exceptions import ConfigurationError
from speech_coach.logging import setup_logging

logger = setup_logging()


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    base_url: str = "https://api.assemblyai.com/v2"
    request_timeout_seconds: float = 30.0


class PollingConfig(BaseModel, frozen=True):
    """Transcription job polling budget."""

    interval_seconds: float = Field(default=3.0, ge=0)
    max_attempts: int = Field(default=20, ge=1)


class ServerConfig(BaseModel, frozen=True):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "production"
    cors_allow_origins: tuple[str, ...] = ("*",)
    upload_dir: str = "uploads"

    @computed_field
    @property
    def is_production(self) -> bool:
        """Whether raw error details must be withheld from responses."""
        return self.environment.lower() == "production"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    assemblyai: AssemblyAIConfig
    polling: PollingConfig = PollingConfig()
    server: ServerConfig = ServerConfig()


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return origins or ("*",)


def load_config() -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        ConfigurationError: If ASSEMBLYAI_API_KEY is missing or blank.
    """
    api_key = os.getenv("ASSEMBLYAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("ASSEMBLYAI_API_KEY", "is not set or empty")

    return AppConfig(
        assemblyai=AssemblyAIConfig(
            api_key=api_key,
            base_url=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2"),
            request_timeout_seconds=float(os.getenv("ASSEMBLYAI_REQUEST_TIMEOUT", "30")),
        ),
        polling=PollingConfig(
            interval_seconds=float(os.getenv("POLL_INTERVAL_SECONDS", "3")),
            max_attempts=int(os.getenv("MAX_POLL_ATTEMPTS", "20")),
        ),
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            environment=os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "production",
            cors_allow_origins=_parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
            upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        ),
    )


def load_config_or_exit() -> AppConfig:
    """Loads configuration, or logs the problem and exits with status 1."""
    try:
        return load_config()
    except ConfigurationError as e:
        logger.critical(
            "Invalid configuration", extra={"setting": e.setting, "reason": e.reason}
        )
        sys.exit(1)
