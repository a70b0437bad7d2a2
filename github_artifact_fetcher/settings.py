"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the artifact fetcher."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0
    user_agent: str = "github-artifact-fetcher"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
