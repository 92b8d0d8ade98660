"""
Settings

Read from the environment or a .env file. Command-line flags of
`python -m cortexcache` are applied on top through the environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings; each field is overridden by the environment variable of the same name."""

    # Application Config
    APP_NAME: str = "Cortex Cache"
    DEBUG: bool = False

    # HTTP Listen Address
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Database Config
    # Supports "sqlite" or "postgresql"
    DATABASE_TYPE: Literal["sqlite", "postgresql"] = "sqlite"
    # SQLite default database path, PostgreSQL requires full connection string
    DATABASE_URL: str = "sqlite+aiosqlite:///./cortexcache.db"

    # Session Config
    # Session store backend: "database" uses the SQL database, "redis" uses Redis
    SESSION_STORE_TYPE: Literal["database", "redis"] = "database"
    # Redis connection URL (only used when SESSION_STORE_TYPE is "redis")
    REDIS_URL: str = "redis://localhost:6379/0"
    # Session lifetime (seconds), 12 hours by default
    SESSION_LIFETIME_SECONDS: int = 43200
    SESSION_COOKIE_NAME: str = "session"
    # Only send the session cookie over HTTPS
    SESSION_COOKIE_SECURE: bool = False
    # Expired session cleanup interval in minutes (database store only)
    SESSION_CLEANUP_INTERVAL_MINUTES: int = 5

    # UI Config
    # Directories holding the HTML templates and static assets
    TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")
    STATIC_DIR: str = str(PACKAGE_DIR / "static")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings; call `get_settings.cache_clear()` after changing the environment."""
    return Settings()
