"""Application settings parsed from environment variables and defaults."""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:8081"]
DEFAULT_SPOTIFY_SCOPES = [
    "playlist-read-private",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-library-read",
    "user-read-private",
    "user-read-email",
]


def _split_list(value: str | list[str] | None, default: list[str]) -> list[str]:
    """Normalize a list setting from JSON, CSV, or list inputs."""
    if isinstance(value, list):
        cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return cleaned or default.copy()
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return default.copy()
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            cleaned = [str(item).strip() for item in parsed if str(item).strip()]
            if cleaned:
                return cleaned
        items = [item.strip() for item in stripped.split(",") if item.strip()]
        if items:
            return items
    return default.copy()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Dynamic Playlist API"
    environment: str = "development"
    api_prefix: str = "/api/v1"

    database_url: str = "sqlite+aiosqlite:///./dynamicplaylist.db"
    test_database_url: Optional[str] = None

    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    spotify_redirect_uri: str = "http://localhost:8080/authorize"
    spotify_scopes: list[str] | str = Field(default_factory=lambda: DEFAULT_SPOTIFY_SCOPES.copy())
    client_redirect_uri: str = "http://localhost:8081/authorize"

    state_secret_key: str
    state_algorithm: str = "HS256"
    state_ttl_minutes: int = 10

    catalog_api_base: str = "https://api.spotify.com/v1"
    catalog_accounts_base: str = "https://accounts.spotify.com"
    # None disables the client-side timeout; the remote service bounds each call.
    catalog_http_timeout_seconds: Optional[float] = None
    catalog_add_tracks_batch_size: Optional[int] = Field(default=None, gt=0)

    log_level: str = "INFO"
    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize CORS origins from JSON, CSV, or list inputs."""
        return _split_list(value, DEFAULT_CORS_ORIGINS)

    @field_validator("spotify_scopes", mode="before")
    @classmethod
    def _split_spotify_scopes(cls, value: str | list[str] | None) -> list[str]:
        """Normalize OAuth scopes from JSON, CSV, or list inputs."""
        return _split_list(value, DEFAULT_SPOTIFY_SCOPES)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
