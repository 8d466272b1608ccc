"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    lithoscope_env: str = "development"
    lithoscope_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Cloud analysis model
    model_analysis: str = "claude-sonnet-4-5-20250929"
    cloud_max_tokens: int = 4096

    # Offline engine
    decode_timeout_s: float = 10.0
    lithoscope_archetype_table_path: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
