"""Runtime settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Loaded from ``TASK_TRACKER_*`` environment variables (or a local ``.env``)."""

    app_name: str = "Task Tracker"
    db_path: str = "./data/tasks.db"
    log_level: str = "INFO"
    # None or "" disables the JSON log file; console logging stays on
    log_dir: Optional[str] = "./logs"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_prefix="TASK_TRACKER_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
