from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from project root (parent of web/)
_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=str(_ENV_FILE), env_file_encoding="utf-8", extra="ignore")

    # App
    ENVIRONMENT: str = "dev"
    LOG_LEVEL: str = "INFO"
    APP_TITLE: str = "CLAIRE.AI"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Remote document Q&A service
    QA_BASE_URL: str = "http://127.0.0.1:8000"
    QA_RUN_PATH: str = "/api/v1/hackrx/run"
    QA_API_TOKEN: SecretStr = SecretStr("dev-token-change-in-production")
    QA_TIMEOUT_SECONDS: float | None = None  # None disables the timeout
    QA_HEALTH_TIMEOUT_SECONDS: float = 5.0

    # Rate limiting
    RATE_LIMIT_DEFAULT: str = "60/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    @property
    def qa_run_url(self) -> str:
        """Full URL of the question-answering endpoint."""
        return f"{self.QA_BASE_URL.rstrip('/')}/{self.QA_RUN_PATH.lstrip('/')}"

    @property
    def json_logs(self) -> bool:
        return self.ENVIRONMENT != "dev"


settings = Settings()
