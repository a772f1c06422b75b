"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    foodjournal_env: str = "development"
    foodjournal_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Border generation budget; beyond this the request fails with 504
    border_timeout_s: float = 30.0

    # Largest decoded upload accepted (5 MiB)
    max_image_bytes: int = 5 * 1024 * 1024

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
