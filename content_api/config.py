"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:4321",
    ]

    # Upstream content API. Empty means network loads fail with
    # ConfigurationError; disk-cached content still resolves.
    blog_api_base_url: str = ""
    http_timeout: float = 15.0

    # Directory the prebuild step writes remote-*.json / content-*.json into
    content_cache_dir: str = ".astro"

    # When False a failed load stays memoized for the process lifetime
    retry_failed_loads: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
