"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All settings come from environment variables or .env (never hardcoded secrets)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Defaults provided for every setting: works out-of-the-box with docker-compose
    - category_link_error_policy chooses between continuing and aborting the
      category link pass after a per-sibling failure
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from localesync.core.domain_types import LinkErrorPolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://localesync:localesync@db:5432/localesync"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Lifecycle hooks
    category_link_error_policy: LinkErrorPolicy = LinkErrorPolicy.CONTINUE

    # API
    cors_origins: list[str] = ["http://localhost:1337"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
