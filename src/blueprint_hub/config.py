"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Notion (admin workspace that hosts built templates)
    notion_admin_token: str = ""
    notion_gallery_page_id: str = ""

    # Gemini
    gemini_api_key: str = ""

    # Admin endpoints
    admin_secret: str = ""

    # Blueprint cache
    cache_backend: str = "memory"  # "memory" or "sqlite"
    cache_db_path: str = "~/.blueprint-hub/cache.db"
    memory_cache_size: int = 50
    memory_cache_ttl_seconds: float = 300.0
    min_similarity: float = 0.65
    keyword_weight: float = 0.6
    candidate_limit: int = 10

    # Builder
    build_delay_seconds: float = 1.0

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
