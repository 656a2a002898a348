"""Application settings."""

from functools import lru_cache
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "task-tracker"
    database_path: str = "tasks.db"
    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_base: str = "/api"
    validate_enums: bool = False

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    def resolved_port(self) -> int:
        """Plain PORT (as set by most hosting platforms) wins over the prefixed value when valid."""
        raw_value = os.getenv("PORT", "").strip()
        if not raw_value:
            return self.port
        try:
            port = int(raw_value)
        except ValueError:
            return self.port
        if not 1 <= port <= 65535:
            return self.port
        return port


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
