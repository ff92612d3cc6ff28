"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from arxiv_scout.constants import (
    ARXIV_QUERY_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables (ARXIV_*)."""

    # Endpoint
    base_url: str = ARXIV_QUERY_URL

    # Transport
    timeout_seconds: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    user_agent: str = DEFAULT_USER_AGENT

    # App Settings
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_prefix = "ARXIV_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        frozen = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
