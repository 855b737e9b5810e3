"""Client configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client runtime configuration loaded from environment variables."""

    api_base_url: str = "http://localhost:3000/api"
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    token_storage_path: Path = Path.home() / ".signage" / "storage.json"
    stale_time_seconds: float = Field(default=30.0, ge=0)

    model_config = SettingsConfigDict(env_prefix="SIGNAGE_CLIENT_", extra="ignore")


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    return ClientSettings()
