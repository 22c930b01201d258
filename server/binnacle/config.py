"""Configuration settings for the Binnacle server."""

from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings


def _find_env_file() -> str:
    """Find .env file - check current dir, then parent (repository root)."""
    current = Path.cwd()

    # Check current directory
    if (current / ".env").exists():
        return str(current / ".env")

    # Check parent directory (when running from server/)
    if (current.parent / ".env").exists():
        return str(current.parent / ".env")

    # Check two levels up (when running from server/binnacle/)
    if (current.parent.parent / ".env").exists():
        return str(current.parent.parent / ".env")

    # Default to current directory
    return ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    port: int = 3456
    host: str = "0.0.0.0"
    debug: bool = False
    environment: str = "production"
    log_level: str = "INFO"

    # IGDB credentials (Twitch client-credentials flow)
    igdb_client_id: str = ""
    igdb_client_secret: str = ""

    # Pagination defaults
    default_page_size: int = 20
    pages_to_fetch: int = 2

    # Cache TTLs (in milliseconds)
    query_cache_ttl_ms: int = 5 * 60 * 1000  # 5 minutes
    games_cache_ttl_ms: int = 30 * 60 * 1000  # 30 minutes

    # Periodic sweep of expired cache entries, 0 disables it
    cache_sweep_interval_seconds: int = 0

    class Config:
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_development(self) -> bool:
        """Whether development-only diagnostics should run."""
        return self.environment.lower() == "development"

    @property
    def igdb_configured(self) -> bool:
        """Whether both IGDB credentials are present."""
        return bool(self.igdb_client_id and self.igdb_client_secret)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
