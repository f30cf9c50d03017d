"""Configuration and environment settings for the finance tracker."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the finance tracker."""

    backend_url: str = "http://127.0.0.1:8000"
    request_timeout: float = 5.0
    recent_limit: int = 6
    log_file: str = "logs/tracker.log"
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
