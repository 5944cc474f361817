"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # SQLite (single file, created on first startup)
    database_url: str = "sqlite:///hr_nexus.db"

    # HTTP + WebSocket server
    host: str = "0.0.0.0"
    port: int = 3000

    # Generative text API (OpenAI-compatible endpoint)
    gemini_api_key: str = ""
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_model: str = "gemini-3-flash-preview"

    # Built SPA assets, served from "/" when present
    frontend_dir: str = "frontend/public"

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
