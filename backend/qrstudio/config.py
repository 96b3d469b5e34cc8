"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    qrstudio_env: str = "development"
    qrstudio_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logo loading
    logo_fetch_timeout_ms: int = 10000
    logo_cache_size: int = 100

    # Output bounds
    min_size: int = 64
    max_size: int = 2048
    default_size: int = 512

    # Batch endpoint
    batch_limit: int = 50

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
