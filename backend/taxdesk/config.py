import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Tax Desk API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Remote record store (mockapi.io)
    records_api_url: str = "https://685013d7e7c42cfd17974a33.mockapi.io/taxes"
    countries_api_url: str = "https://685013d7e7c42cfd17974a33.mockapi.io/countries"
    http_timeout_seconds: float = 30.0

    # Start the initial load in the background on startup
    load_on_startup: bool = True

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # Record store client
    log_level_session: str = "INFO"          # Session, edit transaction, events

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        if self.http_timeout_seconds <= 0:
            _config_logger.warning(
                "HTTP_TIMEOUT_SECONDS=%s disables the request timeout", self.http_timeout_seconds
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
